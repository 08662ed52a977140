"""Connectivity checks for the writer and the message stream, and the FT health report."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from application.constants import (
    BUSINESS_IMPACT,
    CONSUMER_CHECK_ID,
    HEALTH_SCHEMA_VERSION,
    WRITER_CHECK_ID,
)
from domain.errors import WriterUnavailable
from infrastructure.config.models import ServiceConfig
from infrastructure.messaging.base import ConsumerConnectivityError, MessageConsumer
from infrastructure.writer import WriterClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    ok: bool
    output: str


@dataclass(frozen=True)
class HealthCheck:
    """One named dependency check, described the way the FT health schema expects."""

    id: str
    name: str
    severity: int
    business_impact: str
    technical_summary: str
    panic_guide: str
    checker: Callable[[], CheckOutcome]


def check_writer_connectivity(writer: WriterClient) -> CheckOutcome:
    """Writer is healthy only when its __gtg answers 200."""
    url = writer.gtg_url
    try:
        status_code = writer.good_to_go()
    except WriterUnavailable as err:
        return CheckOutcome(ok=False, output=f"Error calling writer at {url}: {err}")
    if status_code != 200:
        return CheckOutcome(ok=False, output=f"Writer {url} returned status {status_code}")
    return CheckOutcome(ok=True, output=f"Writer {url} is good to go")


def check_consumer_connectivity(consumer: MessageConsumer) -> CheckOutcome:
    """Delegate to the consumer's topic-listing check."""
    try:
        consumer.connectivity_check()
    except ConsumerConnectivityError as err:
        return CheckOutcome(ok=False, output=str(err))
    return CheckOutcome(ok=True, output=f"Topic {consumer.topic} is reachable")


def build_checks(cfg: ServiceConfig, writer: WriterClient, consumer: MessageConsumer) -> list[HealthCheck]:
    """The writer check first, then the stream check (gtg order)."""
    return [
        HealthCheck(
            id=WRITER_CHECK_ID,
            name="Check connectivity to concordance reader/writer",
            severity=3,
            business_impact=BUSINESS_IMPACT,
            technical_summary="Check health of the concordances writer",
            panic_guide=cfg.panic_guide,
            checker=lambda: check_writer_connectivity(writer),
        ),
        HealthCheck(
            id=CONSUMER_CHECK_ID,
            name="Check connectivity to Kafka",
            severity=3,
            business_impact=BUSINESS_IMPACT,
            technical_summary="Check that kafka and zookeeper are healthy in this cluster; if so restart this service",
            panic_guide=cfg.panic_guide,
            checker=lambda: check_consumer_connectivity(consumer),
        ),
    ]


def run_health_report(cfg: ServiceConfig, checks: list[HealthCheck]) -> dict[str, Any]:
    """Run every check and assemble the FT health-check JSON document."""
    now = datetime.now(timezone.utc).isoformat()
    results: list[dict[str, Any]] = []
    for check in checks:
        outcome = check.checker()
        if not outcome.ok:
            logger.error("Healthcheck '%s' failed: %s", check.name, outcome.output)
        results.append(
            {
                "id": check.id,
                "name": check.name,
                "ok": outcome.ok,
                "severity": check.severity,
                "businessImpact": check.business_impact,
                "technicalSummary": check.technical_summary,
                "panicGuide": check.panic_guide,
                "checkOutput": outcome.output,
                "lastUpdated": now,
            }
        )
    return {
        "schemaVersion": HEALTH_SCHEMA_VERSION,
        "systemCode": cfg.app_system_code,
        "name": cfg.app_name,
        "description": cfg.app_description,
        "checks": results,
        "ok": all(r["ok"] for r in results),
    }


def first_failing_check(checks: list[HealthCheck]) -> tuple[HealthCheck, CheckOutcome] | None:
    """Run checks in order and stop at the first failure (used by __gtg)."""
    for check in checks:
        outcome = check.checker()
        if not outcome.ok:
            logger.error("GTG check '%s' failed: %s", check.name, outcome.output)
            return check, outcome
    return None
