from typing import Optional
from confluent_kafka import Producer
from common.settings import settings

_producer: Optional[Producer] = None

def get_producer() -> Producer:
    global _producer
    if _producer is None:
        _producer = Producer({"bootstrap.servers": settings.kafka_bootstrap, "enable.idempotence": True})
    return _producer

TOPIC_PAYMENT_TRACKING = settings.payment_tracking_topic
