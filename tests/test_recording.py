"""
Tests for outcome recording, the payment repository and the unit of work
"""
import json
import time
import unittest

from confluent_kafka import KafkaException

from payment_service.context import CardType, PaymentResponseCode
from payment_service.models import Payment
from payment_service.recorder import OutcomeRecorder
from payment_service.repository import PaymentRepository, UnitOfWork
from payment_service.tracking import PaymentTracker
from fakes import FakeProducer, make_context, make_session_factory


def decided_context(**kwargs):
    context = make_context(**kwargs)
    context.card_type = CardType.VISA
    context.response_code = PaymentResponseCode.APPROVED
    return context


class TestOutcomeRecorder(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()

    def test_store_copies_context(self):
        context = decided_context(amount=15000)
        context.bank_called = True
        context.authorized = True
        context.author_id = "A-1"

        with UnitOfWork(self.session_factory) as uow:
            payment = OutcomeRecorder().store(context, uow.payments)
            uow.commit()

        self.assertEqual(context.id, payment.id)
        self.assertIsNotNone(payment.id)
        self.assertEqual(payment.pos_id, "POS-01")
        self.assertEqual(payment.card_number, context.card_number)
        self.assertEqual(payment.expiry_date, "12/30")
        self.assertEqual(payment.amount, 15000)
        self.assertEqual(payment.card_type, "VISA")
        self.assertEqual(payment.response_code, "APPROVED")
        self.assertEqual(payment.author_id, "A-1")
        self.assertTrue(payment.bank_called)
        self.assertTrue(payment.authorized)

    def test_response_time_measured_from_start(self):
        context = decided_context()
        context.started_at = time.monotonic() - 0.25

        with UnitOfWork(self.session_factory) as uow:
            payment = OutcomeRecorder().store(context, uow.payments)

        self.assertGreaterEqual(payment.response_time, 250)
        self.assertEqual(context.response_time, payment.response_time)

    def test_undecided_context_refused(self):
        context = make_context()
        with UnitOfWork(self.session_factory) as uow:
            with self.assertRaises(ValueError):
                OutcomeRecorder().store(context, uow.payments)
        self.assertIsNone(context.id)

    def test_author_id_requires_bank_call(self):
        context = decided_context()
        context.author_id = "stray"

        with UnitOfWork(self.session_factory) as uow:
            payment = OutcomeRecorder().store(context, uow.payments)
        self.assertIsNone(payment.author_id)


class TestUnitOfWork(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()

    def count(self):
        with self.session_factory() as db:
            return PaymentRepository(db).count()

    def test_commit_makes_record_visible(self):
        with UnitOfWork(self.session_factory) as uow:
            OutcomeRecorder().store(decided_context(), uow.payments)
            uow.commit()

        self.assertEqual(self.count(), 1)

    def test_exit_without_commit_rolls_back(self):
        with UnitOfWork(self.session_factory) as uow:
            payment = OutcomeRecorder().store(decided_context(), uow.payments)
            self.assertIsNotNone(payment.id)

        self.assertEqual(self.count(), 0)

    def test_exception_rolls_back(self):
        with self.assertRaises(RuntimeError):
            with UnitOfWork(self.session_factory) as uow:
                OutcomeRecorder().store(decided_context(), uow.payments)
                raise RuntimeError("tracking boom")

        self.assertEqual(self.count(), 0)

    def test_repository_queries(self):
        with UnitOfWork(self.session_factory) as uow:
            first = OutcomeRecorder().store(decided_context(amount=1), uow.payments)
            OutcomeRecorder().store(decided_context(amount=2), uow.payments)
            uow.commit()

        with self.session_factory() as db:
            repository = PaymentRepository(db)
            self.assertEqual(repository.count(), 2)
            self.assertEqual(len(repository.find_all()), 2)
            self.assertIsInstance(repository.find_by_id(first.id), Payment)
            self.assertEqual(repository.find_by_id(first.id).amount, 1)


class TestPaymentTracker(unittest.TestCase):

    def test_publishes_event(self):
        producer = FakeProducer()
        context = decided_context()
        context.response_time = 12

        PaymentTracker(producer=producer, topic="tracking").track(context)

        topic, key, value = producer.messages[0]
        event = json.loads(value)
        self.assertEqual(topic, "tracking")
        self.assertEqual(event["response_code"], "APPROVED")
        self.assertEqual(event["card_type"], "VISA")
        self.assertEqual(event["response_time"], 12)
        self.assertNotIn("card_number", event)

    def test_publish_failure_is_swallowed(self):
        for error in (KafkaException("broker down"), BufferError("queue full")):
            tracker = PaymentTracker(producer=FakeProducer(error=error))
            with self.assertLogs("payment_service.tracking", level="ERROR"):
                tracker.track(decided_context())


if __name__ == "__main__":
    unittest.main()
