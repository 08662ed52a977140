import base64
import json

import httpx
import pytest

from infrastructure.config.models import ConsumerBackend, KafkaProxyConfig, ServiceConfig
from infrastructure.messaging import (
    ConsumerConnectivityError,
    FTMessage,
    InMemoryConsumer,
    KafkaProxyConsumer,
    make_consumer,
    register_consumer,
    parse_ft_message,
)

from .conftest import TOPIC, WRITER_ADDRESS

PROXY = "http://kafka-proxy:8082"
BASE_URI = f"{PROXY}/consumers/TestGroup/instances/rest-consumer-1"


def test_parse_ft_message_envelope() -> None:
    raw = 'FTMSG/1.0\r\nX-Request-Id: tid_abc\r\nMessage-Type: concept\r\n\r\n{"@graph": []}'

    message = parse_ft_message(raw)

    assert message.headers == {"X-Request-Id": "tid_abc", "Message-Type": "concept"}
    assert message.body == '{"@graph": []}'
    assert message.header("x-request-id") == "tid_abc"


def test_parse_ft_message_without_envelope_is_bare_body() -> None:
    message = parse_ft_message('{"@graph": []}')

    assert message.headers == {}
    assert message.body == '{"@graph": []}'


def test_ft_message_build_parses_back() -> None:
    message = FTMessage(headers={"X-Request-Id": "tid_1"}, body="{}")
    assert parse_ft_message(message.build()) == message


def test_in_memory_consumer_delivers_in_order_and_survives_handler_errors() -> None:
    consumer = InMemoryConsumer(topic=TOPIC)
    seen: list[str] = []

    def handler(message: FTMessage) -> None:
        seen.append(message.body)
        if message.body == "boom":
            raise RuntimeError("handler failed")

    consumer.publish(FTMessage(body="first"))
    consumer.publish("boom")
    consumer.publish("FTMSG/1.0\nX-Request-Id: tid_x\n\nlast")

    assert consumer.drain(handler) == 3
    assert seen == ["first", "boom", "last"]
    assert consumer.pending == 0


def test_factory_builds_configured_backend() -> None:
    memory_cfg = ServiceConfig(writer_address=WRITER_ADDRESS, topic=TOPIC, consumer_backend=ConsumerBackend.MEMORY)
    proxy_cfg = ServiceConfig(writer_address=WRITER_ADDRESS, topic=TOPIC)

    memory = make_consumer(memory_cfg)
    proxy = make_consumer(proxy_cfg)

    assert isinstance(memory, InMemoryConsumer)
    assert isinstance(proxy, KafkaProxyConsumer)
    proxy.shutdown()


def test_backend_cannot_be_registered_twice() -> None:
    register_consumer(ConsumerBackend.MEMORY, InMemoryConsumer)

    with pytest.raises(RuntimeError, match="already registered"):
        register_consumer(ConsumerBackend.MEMORY, KafkaProxyConsumer)


class FakeKafkaProxy:
    """Minimal REST proxy: one instance, one batch of records, then empty polls."""

    def __init__(self, records: list[dict], topics: list[str] | None = None) -> None:
        self.records = records
        self.topics = topics if topics is not None else [TOPIC]
        self.calls: list[tuple[str, str]] = []
        self.consumer: KafkaProxyConsumer | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))
        if request.method == "GET" and path == "/topics":
            return httpx.Response(200, json=self.topics)
        if request.method == "POST" and path == "/consumers/TestGroup":
            return httpx.Response(200, json={"instance_id": "rest-consumer-1", "base_uri": BASE_URI})
        if path.endswith("/subscription"):
            assert json.loads(request.content) == {"topics": [TOPIC]}
            return httpx.Response(204)
        if path.endswith("/records"):
            batch, self.records = self.records, []
            if not batch and self.consumer is not None:
                self.consumer.shutdown()
            return httpx.Response(200, json=batch)
        if path.endswith("/offsets"):
            return httpx.Response(204)
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(404)


def _record(raw: str, offset: int) -> dict:
    return {
        "topic": TOPIC,
        "key": None,
        "value": base64.b64encode(raw.encode("utf-8")).decode("ascii"),
        "partition": 0,
        "offset": offset,
    }


def _proxy_consumer(fake: FakeKafkaProxy) -> KafkaProxyConsumer:
    consumer = KafkaProxyConsumer(
        topic=TOPIC,
        group="TestGroup",
        proxy=KafkaProxyConfig(address=PROXY, poll_interval_s=0, error_backoff_s=0),
        transport=httpx.MockTransport(fake),
    )
    fake.consumer = consumer
    return consumer


def test_kafka_proxy_consumer_polls_commits_and_destroys() -> None:
    fake = FakeKafkaProxy(
        [
            _record("FTMSG/1.0\r\nX-Request-Id: tid_1\r\n\r\n{\"@graph\": []}", 0),
            _record("plain body", 1),
        ]
    )
    consumer = _proxy_consumer(fake)
    received: list[FTMessage] = []

    consumer.start_listening(received.append)

    assert [m.header("X-Request-Id") for m in received] == ["tid_1", ""]
    assert received[1].body == "plain body"
    assert ("POST", "/consumers/TestGroup/instances/rest-consumer-1/offsets") in fake.calls
    assert fake.calls[-1] == ("DELETE", "/consumers/TestGroup/instances/rest-consumer-1")


def test_kafka_proxy_record_without_value_is_empty_message() -> None:
    assert KafkaProxyConsumer.decode_record({"value": None}) == FTMessage()


def test_kafka_proxy_connectivity_check() -> None:
    consumer = _proxy_consumer(FakeKafkaProxy([]))
    consumer.connectivity_check()

    missing_topic = _proxy_consumer(FakeKafkaProxy([], topics=["Other"]))
    with pytest.raises(ConsumerConnectivityError):
        missing_topic.connectivity_check()


def test_kafka_proxy_connectivity_check_unreachable() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    consumer = KafkaProxyConsumer(
        topic=TOPIC, group="TestGroup", proxy=KafkaProxyConfig(address=PROXY), transport=httpx.MockTransport(refuse)
    )
    with pytest.raises(ConsumerConnectivityError):
        consumer.connectivity_check()


def test_kafka_proxy_connectivity_check_after_shutdown() -> None:
    consumer = _proxy_consumer(FakeKafkaProxy([]))
    consumer.shutdown()

    with pytest.raises(ConsumerConnectivityError, match="has been shut down"):
        consumer.connectivity_check()
