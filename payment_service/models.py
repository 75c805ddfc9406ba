import uuid
from sqlalchemy import Column, Integer, String, BigInteger, Boolean, DateTime, Uuid, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class Payment(Base):
    """Recorded payment decision, written once and never updated"""
    __tablename__ = "payments"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    pos_id = Column(String(64), index=True, nullable=False)
    card_number = Column(String(32), nullable=False)
    expiry_date = Column(String(8), nullable=False)
    amount = Column(BigInteger, nullable=False)
    processing_mode = Column(String(16), nullable=False)
    card_type = Column(String(32))
    response_code = Column(String(32), nullable=False)
    date_time = Column(DateTime(timezone=True), nullable=False)
    response_time = Column(Integer, nullable=False)
    bank_called = Column(Boolean, nullable=False, default=False)
    authorized = Column(Boolean, nullable=False, default=False)
    author_id = Column(String(64))
    created_at = Column(DateTime, server_default=func.now())

class PosRef(Base):
    __tablename__ = "pos_refs"
    pos_id = Column(String(64), primary_key=True)
    location = Column(String(128))
    active = Column(Boolean, nullable=False, default=True)

class CardRef(Base):
    __tablename__ = "card_refs"
    card_number = Column(String(32), primary_key=True)
    black_listed = Column(Boolean, nullable=False, default=False)
