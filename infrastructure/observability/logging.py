"""
Logging setup with contextvars-based metadata injection.

- Adds transaction id and concept uuid into every log line (via contextvars).
- A record that already carries `tid`/`uuid` (passed with `extra=`) keeps them.
- Supports console-only logging OR console + rotating file logs.
- Tunes noisy third-party library loggers (httpx, uvicorn, etc.).
"""

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Context variables for dynamic log metadata
cv_transaction_id = contextvars.ContextVar("transaction_id", default="-")
cv_concept_uuid = contextvars.ContextVar("concept_uuid", default="-")


class ContextInjectFilter(logging.Filter):
    """Inject context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "tid", None):
            record.tid = cv_transaction_id.get() or "-"
        if not getattr(record, "uuid", None):
            record.uuid = cv_concept_uuid.get() or "-"
        return True


def get_log_context() -> dict[str, str]:
    """Return the current context in a convenient dict form."""
    return {
        "transaction_id": str(cv_transaction_id.get() or "-"),
        "concept_uuid": str(cv_concept_uuid.get() or "-"),
    }


@contextmanager
def log_context(*, transaction_id: str | None = None, concept_uuid: str | None = None) -> Iterator[None]:
    """Scope log metadata to one event; previous values are restored on exit."""
    tid_token = cv_transaction_id.set(str(transaction_id)) if transaction_id is not None else None
    uuid_token = cv_concept_uuid.set(str(concept_uuid) or "-") if concept_uuid is not None else None
    try:
        yield
    finally:
        if uuid_token is not None:
            cv_concept_uuid.reset(uuid_token)
        if tid_token is not None:
            cv_transaction_id.reset(tid_token)


def configure_logging(
    *,
    level: str | int = logging.INFO,
    log_file: Path | None = None,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application logging with contextvars support.

    Args:
        level: Minimum level for console output (name or logging constant)
        log_file: Optional path to a rotating log file
        file_level: Minimum level for file output (default: DEBUG)
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
    """
    console_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(console_level, int):
        raise ValueError(f"Cannot parse log level: {level}")

    # Clear existing handlers to avoid duplicate logs if called multiple times
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # keep root permissive; handlers enforce levels

    # Formatter includes context fields injected by ContextInjectFilter
    console_fmt = "%(asctime)s [%(levelname)s] tid=%(tid)s uuid=%(uuid)s | %(message)s"
    file_fmt = "%(asctime)s [%(levelname)s] %(name)s | tid=%(tid)s uuid=%(uuid)s | %(message)s"

    ctx_filter = ContextInjectFilter()

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(console_fmt, datefmt="%Y-%m-%dT%H:%M:%S"))
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(file_fmt, datefmt="%Y-%m-%d %H:%M:%S"))
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    # Reduce noise from HTTP libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Request logging is done by our own middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
