from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from common.settings import settings
from payment_service.models import Base

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None

def get_engine() -> Engine:
    global _engine
    if _engine is None:
        url = settings.sqlalchemy_url
        if url.startswith("sqlite"):
            _engine = create_engine(url)
        else:
            _engine = create_engine(url, pool_pre_ping=True, isolation_level="READ COMMITTED")
    return _engine

def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory

def init_db(engine: Engine = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())
