"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Concordances writer (HTTP client)
- Message stream consumers (Kafka REST proxy, in-memory)
- Configuration loading (YAML, environment)
- Observability (logging)
- HTTP API (FastAPI, in infrastructure.api; not re-exported here)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    ConsumerBackend,
    ServiceConfig,
    load_service_config,
)
from infrastructure.messaging import FTMessage, MessageConsumer, make_consumer
from infrastructure.writer import WriterClient

__all__ = [
    # Writer client
    "WriterClient",
    # Stream consumers
    "make_consumer",
    "MessageConsumer",
    "FTMessage",
    # Configuration (most commonly used)
    "load_service_config",
    "ServiceConfig",
    "ConsumerBackend",
]
