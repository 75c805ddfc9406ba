"""
Per-request payment processing state
"""
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from common.schemas import PaymentTrackingEvent

class PaymentResponseCode(Enum):
    APPROVED = "APPROVED"
    INACTIVE_POS = "INACTIVE_POS"
    INVALID_CARD_NUMBER = "INVALID_CARD_NUMBER"
    UNKNOWN_CARD_TYPE = "UNKNOWN_CARD_TYPE"
    BLACK_LISTED_CARD_NUMBER = "BLACK_LISTED_CARD_NUMBER"
    AUTHORIZATION_DENIED = "AUTHORIZATION_DENIED"
    AMOUNT_EXCEEDED = "AMOUNT_EXCEEDED"

class CardType(Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"
    AMERICAN_EXPRESS = "AMERICAN_EXPRESS"
    DINERS_CLUB = "DINERS_CLUB"
    DISCOVER = "DISCOVER"
    JCB = "JCB"
    UNKNOWN = "UNKNOWN"

class ProcessingMode(Enum):
    STANDARD = "STANDARD"      # authorize and settle
    DEFERRED = "DEFERRED"      # settled later in batch
    AUTHORIZE_ONLY = "AUTHORIZE_ONLY"

@dataclass
class PaymentContext:
    """Working state of one payment request, owned by a single request"""
    pos_id: str
    card_number: str
    expiry_date: str
    amount: int
    processing_mode: ProcessingMode = ProcessingMode.STANDARD
    date_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    card_type: Optional[CardType] = None
    response_code: Optional[PaymentResponseCode] = None
    authorized: bool = False
    bank_called: bool = False
    author_id: Optional[str] = None
    response_time: Optional[int] = None
    id: Optional[uuid.UUID] = None

    started_at: float = field(default_factory=time.monotonic, repr=False)

    def __repr__(self) -> str:
        # Keep card numbers out of log lines
        return (f"PaymentContext(pos_id={self.pos_id!r}, card_number={mask_card_number(self.card_number)!r}, "
                f"amount={self.amount}, processing_mode={self.processing_mode.value}, "
                f"response_code={self.response_code.value if self.response_code else None}, "
                f"bank_called={self.bank_called}, authorized={self.authorized})")

    def to_event(self) -> PaymentTrackingEvent:
        return PaymentTrackingEvent(
            id=str(self.id) if self.id else None,
            pos_id=self.pos_id,
            card_type=self.card_type.value if self.card_type else None,
            amount=self.amount,
            processing_mode=self.processing_mode.value,
            response_code=self.response_code.value if self.response_code else "UNDECIDED",
            response_time=self.response_time,
            bank_called=self.bank_called,
            authorized=self.authorized,
            author_id=self.author_id,
            date_time=self.date_time.isoformat(),
        )

def mask_card_number(card_number: str) -> str:
    digits = card_number or ""
    if len(digits) <= 4:
        return "*" * len(digits)
    return "*" * (len(digits) - 4) + digits[-4:]
