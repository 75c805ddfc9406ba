import logging
from confluent_kafka import Producer
from common.kafka import TOPIC_PAYMENT_TRACKING, get_producer
from payment_service.context import PaymentContext

logger = logging.getLogger(__name__)

class PaymentTracker:
    """Publishes final payment outcomes for downstream analytics, best effort"""

    def __init__(self, producer: Producer = None, topic: str = TOPIC_PAYMENT_TRACKING):
        self._producer = producer
        self.topic = topic

    @property
    def producer(self) -> Producer:
        if self._producer is None:
            self._producer = get_producer()
        return self._producer

    def track(self, context: PaymentContext) -> None:
        event = context.to_event()
        try:
            self.producer.produce(
                self.topic,
                key=str(context.id).encode("utf-8") if context.id else None,
                value=event.model_dump_json().encode("utf-8"),
            )
            self.producer.poll(0)
        except Exception as e:
            # The payment is already committed; tracking loss is tolerated
            logger.error(f"Failed to publish tracking event for payment {context.id}: {e}")
