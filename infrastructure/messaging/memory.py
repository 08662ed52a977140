"""In-process queue consumer for local runs and tests."""

import logging
import queue
import threading

from infrastructure.config.models import ConsumerBackend, ServiceConfig
from infrastructure.messaging.base import ConsumerConnectivityError, MessageConsumer, MessageHandler
from infrastructure.messaging.message import FTMessage, parse_ft_message
from infrastructure.messaging.factory import register_consumer

logger = logging.getLogger(__name__)


class InMemoryConsumer(MessageConsumer):
    """Consumer backed by a thread-safe queue. Nothing leaves the process."""

    backend = ConsumerBackend.MEMORY

    def __init__(self, *, topic: str, poll_interval_s: float = 0.1) -> None:
        super().__init__(topic=topic)
        self.poll_interval_s = poll_interval_s
        self.healthy = True
        self._queue: "queue.Queue[FTMessage]" = queue.Queue()
        self._stopping = threading.Event()
        logger.info("Initialized in-memory consumer (topic=%s)", topic)

    @classmethod
    def from_cfg(cls, cfg: ServiceConfig) -> "InMemoryConsumer":
        return cls(topic=cfg.topic, poll_interval_s=cfg.kafka_proxy.poll_interval_s)

    def publish(self, message: FTMessage | str) -> None:
        """Enqueue a message; raw strings are parsed as FT envelopes."""
        if isinstance(message, str):
            message = parse_ft_message(message)
        self._queue.put(message)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, handler: MessageHandler) -> int:
        """Deliver every queued message without blocking; return how many were delivered."""
        delivered = 0
        while True:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                return delivered
            self._deliver(message, handler)
            delivered += 1

    def start_listening(self, handler: MessageHandler) -> None:
        self._stopping.clear()
        while not self._stopping.is_set():
            self.drain(handler)
            self._stopping.wait(self.poll_interval_s)
        logger.info("In-memory consumer stopped (topic=%s)", self.topic)

    def shutdown(self) -> None:
        self._stopping.set()

    def connectivity_check(self) -> None:
        if not self.healthy:
            raise ConsumerConnectivityError(f"In-memory consumer for topic {self.topic} marked unhealthy")


register_consumer(ConsumerBackend.MEMORY, InMemoryConsumer)
