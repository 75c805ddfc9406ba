import logging
import time

from common.metrics import payment_store_seconds
from payment_service.context import PaymentContext
from payment_service.models import Payment
from payment_service.repository import PaymentRepository

logger = logging.getLogger(__name__)

class OutcomeRecorder:
    """Turns a decided payment context into its stored Payment record"""

    def store(self, context: PaymentContext, repository: PaymentRepository) -> Payment:
        if context.response_code is None:
            raise ValueError("Cannot record a payment without a response code")

        with payment_store_seconds.time():
            response_time = max(0, int((time.monotonic() - context.started_at) * 1000))
            payment = Payment(
                pos_id=context.pos_id,
                card_number=context.card_number,
                expiry_date=context.expiry_date,
                amount=context.amount,
                processing_mode=context.processing_mode.value,
                card_type=context.card_type.value if context.card_type else None,
                response_code=context.response_code.value,
                date_time=context.date_time,
                response_time=response_time,
                bank_called=context.bank_called,
                authorized=context.authorized,
                author_id=context.author_id if context.bank_called else None,
            )

            repository.save(payment)

        context.response_time = response_time
        context.id = payment.id
        return payment
