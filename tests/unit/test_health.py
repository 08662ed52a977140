import httpx

from application.health import (
    build_checks,
    check_consumer_connectivity,
    check_writer_connectivity,
    first_failing_check,
    run_health_report,
)
from infrastructure.config.models import KafkaProxyConfig, ServiceConfig
from infrastructure.messaging.kafka_proxy import KafkaProxyConsumer
from infrastructure.messaging.memory import InMemoryConsumer

from .conftest import TOPIC, WRITER_ADDRESS, WriterStub


def test_writer_check_ok(make_writer) -> None:
    stub = WriterStub(200)
    outcome = check_writer_connectivity(make_writer(stub))

    assert outcome.ok
    assert str(stub.requests[0].url) == f"{WRITER_ADDRESS}__gtg"


def test_writer_check_bad_status(make_writer) -> None:
    outcome = check_writer_connectivity(make_writer(WriterStub(503)))

    assert not outcome.ok
    assert "returned status 503" in outcome.output


def test_writer_check_transport_error(make_writer) -> None:
    outcome = check_writer_connectivity(make_writer(WriterStub(error=httpx.ConnectError("refused"))))

    assert not outcome.ok
    assert "Error calling writer" in outcome.output


def test_consumer_check() -> None:
    consumer = InMemoryConsumer(topic=TOPIC)
    assert check_consumer_connectivity(consumer).ok

    consumer.healthy = False
    outcome = check_consumer_connectivity(consumer)
    assert not outcome.ok
    assert TOPIC in outcome.output


def test_report_and_gtg_agree(make_writer) -> None:
    cfg = ServiceConfig(writer_address=WRITER_ADDRESS, topic=TOPIC)
    consumer = InMemoryConsumer(topic=TOPIC)
    checks = build_checks(cfg, make_writer(WriterStub(500)), consumer)

    report = run_health_report(cfg, checks)
    failure = first_failing_check(checks)

    assert report["ok"] is False
    assert report["schemaVersion"] == 1
    assert [c["ok"] for c in report["checks"]] == [False, True]
    assert failure is not None
    assert failure[0].id == checks[0].id


def test_consumer_check_after_kafka_shutdown_is_a_failed_check() -> None:
    consumer = KafkaProxyConsumer(topic=TOPIC, group="TestGroup", proxy=KafkaProxyConfig())
    consumer.shutdown()

    outcome = check_consumer_connectivity(consumer)

    assert not outcome.ok
    assert "shut down" in outcome.output
