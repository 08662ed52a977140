"""Base interface for message-stream consumers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from infrastructure.config.models import ConsumerBackend, ServiceConfig
from infrastructure.messaging.message import FTMessage

logger = logging.getLogger(__name__)

MessageHandler = Callable[[FTMessage], Any]


class ConsumerConnectivityError(Exception):
    """Raised by connectivity_check() when the stream is unreachable or misconfigured."""


class MessageConsumer(ABC):
    """
    Abstract base class for stream consumers.

    All concrete consumers must implement:
    - start_listening(): block, delivering each message to the handler once
    - shutdown(): stop listening and release resources
    - connectivity_check(): raise ConsumerConnectivityError when unhealthy
    """

    backend: ConsumerBackend
    topic: str

    def __init__(self, *, topic: str) -> None:
        self.topic = topic

    @classmethod
    @abstractmethod
    def from_cfg(cls, cfg: ServiceConfig) -> "MessageConsumer":
        raise NotImplementedError

    def _deliver(self, message: FTMessage, handler: MessageHandler) -> None:
        """Hand one message to the handler; a failing message never stops the stream."""
        try:
            handler(message)
        except Exception:
            logger.exception(
                "Message handler failed on topic=%s",
                self.topic,
                extra={"tid": message.header("X-Request-Id", "-")},
            )

    @abstractmethod
    def start_listening(self, handler: MessageHandler) -> None:
        raise NotImplementedError

    @abstractmethod
    def shutdown(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def connectivity_check(self) -> None:
        raise NotImplementedError
