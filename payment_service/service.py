"""
Payment service entry point: decide, record and track each payment request
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from common.error_handling import BusinessLogicError, ErrorCodes, ServiceError
from common.metrics import payment_requests_total
from common.redis_client import RedisClient
from payment_service.bank import BankAuthorService
from payment_service.context import PaymentContext, ProcessingMode
from payment_service.db import get_session_factory
from payment_service.models import Payment
from payment_service.pipeline import ValidationPipeline
from payment_service.recorder import OutcomeRecorder
from payment_service.repository import PaymentRepository, UnitOfWork
from payment_service.tracking import PaymentTracker
from payment_service.validators import CardValidator, PosValidator

logger = logging.getLogger(__name__)

class PaymentService:
    def __init__(self, pipeline: ValidationPipeline, recorder: OutcomeRecorder, tracker: PaymentTracker,
                 session_factory: sessionmaker):
        self.pipeline = pipeline
        self.recorder = recorder
        self.tracker = tracker
        self.session_factory = session_factory

    def accept(self, context: PaymentContext) -> PaymentContext:
        """
        Process, store and track one payment request.

        Processing and storage share one transaction. Tracking only happens
        once that transaction has committed. On any failure everything the
        pipeline and recorder wrote is cleared from the context and the error
        is raised.
        """
        payment_requests_total.inc()
        self._check_context(context)

        try:
            with UnitOfWork(self.session_factory) as uow:
                self.pipeline.process(context)
                self.recorder.store(context, uow.payments)
                uow.commit()
        except SQLAlchemyError as e:
            self._reset_outcome(context)
            logger.error(f"Payment could not be stored: {e}", extra={"pos_id": context.pos_id})
            raise ServiceError(ErrorCodes.DATABASE_ERROR, "Payment could not be stored", original_error=e)
        except Exception:
            self._reset_outcome(context)
            raise

        logger.info(f"Payment {context.id} recorded as {context.response_code.value}", extra={
            "payment_id": str(context.id),
            "pos_id": context.pos_id,
            "response_code": context.response_code.value,
            "response_time": context.response_time,
            "bank_called": context.bank_called,
        })
        self.tracker.track(context)
        return context

    def find_by_id(self, payment_id: uuid.UUID) -> Optional[Payment]:
        with self.session_factory() as db:
            return PaymentRepository(db).find_by_id(payment_id)

    def find_all(self) -> List[Payment]:
        with self.session_factory() as db:
            return PaymentRepository(db).find_all()

    def count(self) -> int:
        with self.session_factory() as db:
            return PaymentRepository(db).count()

    @staticmethod
    def _check_context(context: PaymentContext) -> None:
        if not context.pos_id:
            raise BusinessLogicError(ErrorCodes.INVALID_INPUT, "POS identifier is required", field="pos_id")
        if not context.card_number:
            raise BusinessLogicError(ErrorCodes.INVALID_INPUT, "Card number is required", field="card_number")
        if not isinstance(context.amount, int) or isinstance(context.amount, bool) or context.amount <= 0:
            raise BusinessLogicError(ErrorCodes.INVALID_INPUT, "Amount must be a positive integer", field="amount")
        if not isinstance(context.processing_mode, ProcessingMode):
            raise BusinessLogicError(ErrorCodes.INVALID_INPUT, "Unknown processing mode", field="processing_mode")
        if context.response_code is not None or context.id is not None:
            raise BusinessLogicError(ErrorCodes.INVALID_INPUT, "Payment was already processed")

    @staticmethod
    def _reset_outcome(context: PaymentContext) -> None:
        # Everything the pipeline and recorder wrote; a retry starts clean
        context.card_type = None
        context.authorized = False
        context.bank_called = False
        context.author_id = None
        context.response_code = None
        context.response_time = None
        context.id = None

def build_payment_service() -> PaymentService:
    """Wire the service against the configured database, Redis, bank and Kafka"""
    session_factory = get_session_factory()
    pipeline = ValidationPipeline(
        pos_validator=PosValidator(session_factory, cache=RedisClient()),
        card_validator=CardValidator(session_factory),
        bank_author_service=BankAuthorService(),
    )
    return PaymentService(pipeline, OutcomeRecorder(), PaymentTracker(), session_factory)
