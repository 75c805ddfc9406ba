import os
from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    payment_author_threshold: int = int(os.getenv("PAYMENT_AUTHOR_THRESHOLD", "10000"))

    database_url: Optional[str] = os.getenv("DATABASE_URL")
    mysql_user: str = os.getenv("MYSQL_USER", "root")
    mysql_password: str = os.getenv("MYSQL_PASSWORD", "root")
    mysql_host: str = os.getenv("MYSQL_HOST", "mysql")
    mysql_db: str = os.getenv("MYSQL_DB", "easypay")
    mysql_port: int = int(os.getenv("MYSQL_PORT", "3306"))

    kafka_bootstrap: str = os.getenv("KAFKA_BOOTSTRAP", "kafka:9092")
    payment_tracking_topic: str = os.getenv("PAYMENT_TRACKING_TOPIC", "payment_tracking")

    redis_url: str = os.getenv("REDIS_URL", "redis://redis:6379/0")
    pos_cache_ttl_seconds: int = int(os.getenv("POS_CACHE_TTL_SECONDS", "60"))

    bank_author_url: str = os.getenv("BANK_AUTHOR_URL", "http://bank-service:8080")
    bank_timeout_seconds: float = float(os.getenv("BANK_TIMEOUT_SECONDS", "2.0"))
    bank_max_attempts: int = int(os.getenv("BANK_MAX_ATTEMPTS", "3"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"mysql+mysqlconnector://{self.mysql_user}:{self.mysql_password}@{self.mysql_host}:{self.mysql_port}/{self.mysql_db}"

settings = Settings()
