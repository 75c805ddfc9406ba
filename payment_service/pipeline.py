"""
Ordered payment checks ending in an optional bank authorization.

Each check returns None to let the payment through to the next one, or the
response code that ends processing. A payment that passes every check is
APPROVED.
"""
import logging
from typing import Callable, List, Optional

from common.metrics import payment_process_seconds
from common.settings import settings
from payment_service.context import CardType, PaymentContext, PaymentResponseCode, ProcessingMode

logger = logging.getLogger(__name__)

Check = Callable[[PaymentContext], Optional[PaymentResponseCode]]

class ValidationPipeline:
    def __init__(self, pos_validator, card_validator, bank_author_service, author_threshold: int = None):
        self.pos_validator = pos_validator
        self.card_validator = card_validator
        self.bank_author_service = bank_author_service
        self.author_threshold = settings.payment_author_threshold if author_threshold is None else author_threshold
        self.checks: List[Check] = [
            self.check_pos,
            self.check_card_number,
            self.check_card_type,
            self.check_black_list,
            self.check_authorization,
        ]

    def check_pos(self, context: PaymentContext) -> Optional[PaymentResponseCode]:
        if not self.pos_validator.is_active(context.pos_id):
            return PaymentResponseCode.INACTIVE_POS
        return None

    def check_card_number(self, context: PaymentContext) -> Optional[PaymentResponseCode]:
        if not self.card_validator.check_card_number(context.card_number):
            return PaymentResponseCode.INVALID_CARD_NUMBER
        return None

    def check_card_type(self, context: PaymentContext) -> Optional[PaymentResponseCode]:
        card_type = self.card_validator.check_card_type(context.card_number)
        if card_type == CardType.UNKNOWN:
            return PaymentResponseCode.UNKNOWN_CARD_TYPE
        context.card_type = card_type
        return None

    def check_black_list(self, context: PaymentContext) -> Optional[PaymentResponseCode]:
        if self.card_validator.is_black_listed(context.card_number):
            return PaymentResponseCode.BLACK_LISTED_CARD_NUMBER
        return None

    def check_authorization(self, context: PaymentContext) -> Optional[PaymentResponseCode]:
        if context.amount <= self.author_threshold:
            return None
        if self.bank_author_service.authorize(context):
            return None

        logger.info(f"Authorization refused by bank, context={context}")
        if context.processing_mode == ProcessingMode.STANDARD:
            return PaymentResponseCode.AUTHORIZATION_DENIED
        return PaymentResponseCode.AMOUNT_EXCEEDED

    def process(self, context: PaymentContext) -> PaymentContext:
        """Run the checks in order and set the one response code of this request"""
        if context.response_code is not None:
            raise ValueError(f"Payment already decided as {context.response_code.value}")

        with payment_process_seconds.time():
            for check in self.checks:
                response_code = check(context)
                if response_code is not None:
                    context.response_code = response_code
                    break
            else:
                context.response_code = PaymentResponseCode.APPROVED

        logger.debug(f"Payment processed: {context}")
        return context
