"""
Tests for POS and card reference validators
"""
import unittest

from common.redis_client import RedisClient
from payment_service.context import CardType
from payment_service.validators import CardValidator, PosValidator, luhn_valid
from fakes import (AMEX, BAD_LUHN, MASTERCARD, UNKNOWN_BRAND, VISA, FakeRedis,
                   make_session_factory, seed_references)


class TestPosValidator(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        seed_references(self.session_factory, pos=[("POS-01", True), ("POS-02", False)])

    def test_active_pos(self):
        self.assertTrue(PosValidator(self.session_factory).is_active("POS-01"))

    def test_inactive_pos(self):
        self.assertFalse(PosValidator(self.session_factory).is_active("POS-02"))

    def test_unknown_pos_is_inactive(self):
        self.assertFalse(PosValidator(self.session_factory).is_active("POS-99"))

    def test_status_is_cached(self):
        redis = FakeRedis()
        validator = PosValidator(self.session_factory, cache=RedisClient(client=redis))

        self.assertTrue(validator.is_active("POS-01"))
        self.assertEqual(redis.store["pos_status:POS-01"], "1")

    def test_cached_status_wins(self):
        """Test that a cache hit answers without reading the database"""
        redis = FakeRedis()
        redis.store["pos_status:POS-99"] = "1"
        validator = PosValidator(self.session_factory, cache=RedisClient(client=redis))

        self.assertTrue(validator.is_active("POS-99"))


class TestCardValidator(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        seed_references(self.session_factory, cards=[(MASTERCARD, True), (VISA, False)])
        self.validator = CardValidator(self.session_factory)

    def test_luhn(self):
        self.assertTrue(luhn_valid(VISA))
        self.assertTrue(luhn_valid(AMEX))
        self.assertFalse(luhn_valid(BAD_LUHN))

    def test_check_card_number(self):
        self.assertTrue(self.validator.check_card_number(VISA))
        self.assertTrue(self.validator.check_card_number("4111 1111 1111 1111"))
        self.assertFalse(self.validator.check_card_number(BAD_LUHN))
        self.assertFalse(self.validator.check_card_number("4111-1111-1111-1111"))
        self.assertFalse(self.validator.check_card_number("0"))
        self.assertFalse(self.validator.check_card_number(""))

    def test_non_ascii_digits_rejected(self):
        """Test that Unicode digits fail the format check instead of raising"""
        self.assertFalse(self.validator.check_card_number("411111111111111²"))
        self.assertFalse(self.validator.check_card_number("٤111111111111111"))

    def test_check_card_type(self):
        cases = {
            VISA: CardType.VISA,
            MASTERCARD: CardType.MASTERCARD,
            "2223003122003222": CardType.MASTERCARD,
            AMEX: CardType.AMERICAN_EXPRESS,
            "6011111111111117": CardType.DISCOVER,
            "3530111333300000": CardType.JCB,
            "30569309025904": CardType.DINERS_CLUB,
            UNKNOWN_BRAND: CardType.UNKNOWN,
        }
        for number, expected in cases.items():
            with self.subTest(number=number):
                self.assertEqual(self.validator.check_card_type(number), expected)

    def test_wrong_length_is_unknown(self):
        self.assertEqual(self.validator.check_card_type("37828224631000"), CardType.UNKNOWN)

    def test_black_list(self):
        self.assertTrue(self.validator.is_black_listed(MASTERCARD))
        self.assertFalse(self.validator.is_black_listed(VISA))
        self.assertFalse(self.validator.is_black_listed(AMEX))


if __name__ == "__main__":
    unittest.main()
