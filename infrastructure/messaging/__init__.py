"""
Message-stream consumers.

Backends register themselves with the factory:
- Kafka REST proxy (production)
- In-memory queue (local runs, tests)

All consumers implement the MessageConsumer interface.
"""

from infrastructure.messaging.base import ConsumerConnectivityError, MessageConsumer, MessageHandler
from infrastructure.messaging.factory import make_consumer, register_consumer
from infrastructure.messaging.kafka_proxy import KafkaProxyConsumer
from infrastructure.messaging.memory import InMemoryConsumer
from infrastructure.messaging.message import FTMessage, parse_ft_message

__all__ = [
    # Abstract base
    "MessageConsumer",
    "MessageHandler",
    "ConsumerConnectivityError",
    # Concrete implementations
    "KafkaProxyConsumer",
    "InMemoryConsumer",
    # Messages
    "FTMessage",
    "parse_ft_message",
    # Factory (most commonly used)
    "make_consumer",
    "register_consumer",
]
