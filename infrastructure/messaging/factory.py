"""Backend registry and factory for message consumers."""

import importlib
import logging

from infrastructure.config.models import ConsumerBackend, ServiceConfig

from .base import MessageConsumer

logger = logging.getLogger(__name__)

_CONSUMERS: dict[ConsumerBackend, type[MessageConsumer]] = {}


def register_consumer(backend: ConsumerBackend, consumer_cls: type[MessageConsumer]) -> None:
    """Called by each backend module at import time. One class per backend."""
    existing = _CONSUMERS.get(backend)
    if existing is not None and existing is not consumer_cls:
        raise RuntimeError(f"Consumer already registered for backend={backend.value}: {existing.__name__}")
    _CONSUMERS[backend] = consumer_cls


def _consumer_class(backend: ConsumerBackend) -> type[MessageConsumer]:
    """
    Resolve the class for a backend, importing its module on first use.

    Convention: ConsumerBackend value == module filename under infrastructure/messaging/
    e.g. ConsumerBackend.KAFKA_PROXY -> infrastructure/messaging/kafka_proxy.py
    """
    if backend not in _CONSUMERS:
        importlib.import_module(f"{__package__}.{backend.value}")
    try:
        return _CONSUMERS[backend]
    except KeyError:
        raise RuntimeError(f"Backend '{backend.value}' did not register a consumer") from None


def make_consumer(cfg: ServiceConfig) -> MessageConsumer:
    """
    Create the configured stream consumer.

    Raises:
        RuntimeError: the backend module did not register a consumer
    """
    consumer_cls = _consumer_class(cfg.consumer_backend)
    logger.info("Creating %s consumer (topic=%s, group=%s)", cfg.consumer_backend.value, cfg.topic, cfg.group_name)
    return consumer_cls.from_cfg(cfg)
