"""
Kafka consumer over the Kafka REST proxy HTTP API.

Lifecycle of a consumer instance:
- POST   /consumers/<group>                       create instance
- POST   <base_uri>/subscription                  subscribe to the topic
- GET    <base_uri>/records                       poll (binary, base64 values)
- POST   <base_uri>/offsets                       commit everything fetched
- DELETE <base_uri>                               destroy on shutdown
Connectivity is checked by listing topics (GET /topics).
"""

import base64
import binascii
import logging
import threading
from typing import Any

import httpx

from infrastructure.config.models import ConsumerBackend, KafkaProxyConfig, ServiceConfig
from infrastructure.messaging.base import ConsumerConnectivityError, MessageConsumer, MessageHandler
from infrastructure.messaging.message import FTMessage, parse_ft_message
from infrastructure.messaging.factory import register_consumer

logger = logging.getLogger(__name__)

KAFKA_V2_JSON = "application/vnd.kafka.v2+json"
KAFKA_BINARY_V2_JSON = "application/vnd.kafka.binary.v2+json"


class KafkaProxyError(Exception):
    """The proxy answered but not with what a consumer needs."""


class KafkaProxyConsumer(MessageConsumer):
    """
    Perseverant consumer: any proxy error drops the current instance, waits
    `error_backoff_s` and starts over. Offsets are committed after each
    polled batch has been handed to the handler.
    """

    backend = ConsumerBackend.KAFKA_PROXY

    def __init__(
        self,
        *,
        topic: str,
        group: str,
        proxy: KafkaProxyConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(topic=topic)
        self.group = group
        self.proxy = proxy
        self.client = httpx.Client(
            base_url=proxy.address,
            timeout=httpx.Timeout(proxy.timeout_s),
            transport=transport,
        )
        self._base_uri: str | None = None
        self._stopping = threading.Event()
        self._listening = False

    @classmethod
    def from_cfg(cls, cfg: ServiceConfig) -> "KafkaProxyConsumer":
        return cls(topic=cfg.topic, group=cfg.group_name, proxy=cfg.kafka_proxy)

    # ---- consumer instance lifecycle ----

    def _create_instance(self) -> str:
        resp = self.client.post(
            f"/consumers/{self.group}",
            json={
                "format": "binary",
                "auto.offset.reset": self.proxy.offset,
                "auto.commit.enable": "false",
            },
            headers={"Content-Type": KAFKA_V2_JSON},
        )
        resp.raise_for_status()
        base_uri = (resp.json() or {}).get("base_uri")
        if not base_uri:
            raise KafkaProxyError(f"Proxy did not return a base_uri for group {self.group}")

        sub = self.client.post(
            f"{base_uri}/subscription",
            json={"topics": [self.topic]},
            headers={"Content-Type": KAFKA_V2_JSON},
        )
        sub.raise_for_status()
        logger.info("Created consumer instance %s (group=%s, topic=%s)", base_uri, self.group, self.topic)
        return base_uri

    def _destroy_instance(self) -> None:
        if self._base_uri is None:
            return
        base_uri, self._base_uri = self._base_uri, None
        try:
            self.client.delete(base_uri, headers={"Content-Type": KAFKA_V2_JSON})
        except httpx.HTTPError as err:
            logger.warning("Failed to destroy consumer instance %s: %s", base_uri, err)

    def _poll(self, base_uri: str) -> list[dict[str, Any]]:
        resp = self.client.get(f"{base_uri}/records", headers={"Accept": KAFKA_BINARY_V2_JSON})
        resp.raise_for_status()
        records = resp.json()
        if not isinstance(records, list):
            raise KafkaProxyError(f"Expected a list of records, got {type(records).__name__}")
        return records

    def _commit(self, base_uri: str) -> None:
        resp = self.client.post(f"{base_uri}/offsets", headers={"Content-Type": KAFKA_V2_JSON})
        resp.raise_for_status()

    @staticmethod
    def decode_record(record: dict[str, Any]) -> FTMessage:
        """Decode one binary-format record into an FTMessage (empty body when value is missing)."""
        value = record.get("value")
        if not value:
            return FTMessage()
        try:
            raw = base64.b64decode(value).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as err:
            logger.error("Undecodable record at offset %s: %s", record.get("offset"), err)
            return FTMessage()
        return parse_ft_message(raw)

    # ---- MessageConsumer ----

    def start_listening(self, handler: MessageHandler) -> None:
        self._stopping.clear()
        self._listening = True
        logger.info("Listening on topic=%s via %s", self.topic, self.proxy.address)
        try:
            while not self._stopping.is_set():
                try:
                    if self._base_uri is None:
                        self._base_uri = self._create_instance()
                    records = self._poll(self._base_uri)
                    for record in records:
                        self._deliver(self.decode_record(record), handler)
                    if records:
                        self._commit(self._base_uri)
                except (httpx.HTTPError, KafkaProxyError, ValueError) as err:
                    logger.error("Kafka proxy error, retrying in %.0fs: %s", self.proxy.error_backoff_s, err)
                    self._destroy_instance()
                    self._stopping.wait(self.proxy.error_backoff_s)
                    continue
                if not records:
                    self._stopping.wait(self.proxy.poll_interval_s)
        finally:
            self._listening = False
            self._destroy_instance()
            self.client.close()

    def shutdown(self) -> None:
        logger.info("Shutting down Kafka consumer (topic=%s)", self.topic)
        self._stopping.set()
        if not self._listening:
            self._destroy_instance()
            self.client.close()

    def connectivity_check(self) -> None:
        if self.client.is_closed:
            raise ConsumerConnectivityError(f"Consumer for topic {self.topic} has been shut down")
        try:
            resp = self.client.get("/topics", headers={"Accept": KAFKA_V2_JSON})
            resp.raise_for_status()
            topics = resp.json()
        except (httpx.HTTPError, ValueError) as err:
            raise ConsumerConnectivityError(f"Could not list topics on {self.proxy.address}: {err}") from err
        if not isinstance(topics, list) or self.topic not in topics:
            raise ConsumerConnectivityError(f"Topic {self.topic} was not found on {self.proxy.address}")


register_consumer(ConsumerBackend.KAFKA_PROXY, KafkaProxyConsumer)
