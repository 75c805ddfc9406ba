"""
Redis client utilities for caching reference data
"""
import redis
from typing import Optional
from .settings import settings
import logging

logger = logging.getLogger(__name__)

class RedisClient:
    """Redis client wrapper with utility methods"""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client or redis.Redis.from_url(settings.redis_url, decode_responses=True)

    # POS status cache
    def cache_pos_status(self, pos_id: str, active: bool, ttl_seconds: int = None) -> bool:
        """Cache whether a POS terminal is active"""
        try:
            key = f"pos_status:{pos_id}"
            return bool(self.client.setex(key, ttl_seconds or settings.pos_cache_ttl_seconds, "1" if active else "0"))
        except redis.RedisError as e:
            logger.warning(f"Failed to cache POS status: {e}")
            return False

    def get_pos_status(self, pos_id: str) -> Optional[bool]:
        """Get cached POS status, None on miss"""
        try:
            key = f"pos_status:{pos_id}"
            value = self.client.get(key)
            if value is None:
                return None
            return value == "1"
        except redis.RedisError as e:
            logger.warning(f"Failed to get POS status: {e}")
            return None

