"""
Payment storage and the unit of work that bounds one accepted request
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from payment_service.models import Payment

logger = logging.getLogger(__name__)

class PaymentRepository:
    def __init__(self, session: Session):
        self.session = session

    def save(self, payment: Payment) -> Payment:
        """Insert and flush so the identifier is assigned inside the open transaction"""
        self.session.add(payment)
        self.session.flush()
        return payment

    def find_by_id(self, payment_id: uuid.UUID) -> Optional[Payment]:
        return self.session.get(Payment, payment_id)

    def find_all(self) -> List[Payment]:
        return list(self.session.execute(select(Payment).order_by(Payment.date_time)).scalars().all())

    def count(self) -> int:
        return self.session.execute(select(func.count()).select_from(Payment)).scalar_one()

class UnitOfWork:
    """
    Transaction boundary around payment storage.

    Usage:
        with UnitOfWork(session_factory) as uow:
            uow.payments.save(payment)
            uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[Session] = None
        self.payments: Optional[PaymentRepository] = None
        self.committed = False

    def __enter__(self) -> "UnitOfWork":
        self.session = self.session_factory()
        self.payments = PaymentRepository(self.session)
        self.committed = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if not self.committed:
                self.rollback()
        finally:
            self.session.close()
        return False

    def commit(self) -> None:
        self.session.commit()
        self.committed = True

    def rollback(self) -> None:
        self.session.rollback()
