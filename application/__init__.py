"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the transform, transform-and-send and stream workflows.
"""

from application.dispatch import ConcordanceDispatcher, DispatchResult
from application.health import (
    CheckOutcome,
    HealthCheck,
    build_checks,
    check_consumer_connectivity,
    check_writer_connectivity,
    first_failing_check,
    run_health_report,
)
from application.rendering import HTTP_STATUS_BY_RESULT, http_status_for, render_send, render_transform
from application.transformer import TransformerService, new_transaction_id

__all__ = [
    # Main workflows
    "TransformerService",
    "ConcordanceDispatcher",
    "DispatchResult",
    "new_transaction_id",
    # Rendering
    "HTTP_STATUS_BY_RESULT",
    "http_status_for",
    "render_transform",
    "render_send",
    # Health
    "CheckOutcome",
    "HealthCheck",
    "build_checks",
    "check_writer_connectivity",
    "check_consumer_connectivity",
    "run_health_report",
    "first_failing_check",
]
