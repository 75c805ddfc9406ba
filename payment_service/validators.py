"""
POS and card reference checks used by the validation pipeline
"""
import logging
import re
from typing import Optional

from sqlalchemy.orm import sessionmaker

from common.redis_client import RedisClient
from payment_service.context import CardType
from payment_service.models import CardRef, PosRef

logger = logging.getLogger(__name__)

# (brand, prefix pattern, allowed lengths)
CARD_TYPE_RULES = [
    (CardType.AMERICAN_EXPRESS, re.compile(r"^3[47]"), (15,)),
    (CardType.DINERS_CLUB, re.compile(r"^3(0[0-5]|[689])"), (14, 15, 16, 17, 18, 19)),
    (CardType.JCB, re.compile(r"^35(2[89]|[3-8]\d)"), (16, 17, 18, 19)),
    (CardType.VISA, re.compile(r"^4"), (13, 16, 19)),
    (CardType.MASTERCARD, re.compile(r"^(5[1-5]|2(22[1-9]|2[3-9]\d|[3-6]\d{2}|7[01]\d|720))"), (16,)),
    (CardType.DISCOVER, re.compile(r"^(6011|64[4-9]|65)"), (16, 17, 18, 19)),
]

CARD_NUMBER_FORMAT = re.compile(r"[0-9]{12,19}")

def normalize_card_number(number: str) -> str:
    return (number or "").replace(" ", "")

def luhn_valid(digits: str) -> bool:
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0

class PosValidator:
    """Tells whether a point-of-sale terminal may take payments"""

    def __init__(self, session_factory: sessionmaker, cache: Optional[RedisClient] = None):
        self.session_factory = session_factory
        self.cache = cache

    def is_active(self, pos_id: str) -> bool:
        if self.cache is not None:
            cached = self.cache.get_pos_status(pos_id)
            if cached is not None:
                return cached

        with self.session_factory() as db:
            pos = db.get(PosRef, pos_id)
            active = bool(pos and pos.active)

        if pos is None:
            logger.info(f"Unknown POS terminal {pos_id}")
        if self.cache is not None:
            self.cache.cache_pos_status(pos_id, active)
        return active

class CardValidator:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def check_card_number(self, number: str) -> bool:
        """ASCII digits only (spaces allowed), 12 to 19 long, valid Luhn checksum"""
        digits = normalize_card_number(number)
        if not CARD_NUMBER_FORMAT.fullmatch(digits):
            return False
        return luhn_valid(digits)

    def check_card_type(self, number: str) -> CardType:
        digits = normalize_card_number(number)
        for card_type, pattern, lengths in CARD_TYPE_RULES:
            if pattern.match(digits) and len(digits) in lengths:
                return card_type
        return CardType.UNKNOWN

    def is_black_listed(self, number: str) -> bool:
        with self.session_factory() as db:
            card = db.get(CardRef, normalize_card_number(number))
            return bool(card and card.black_listed)
