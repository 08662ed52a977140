"""
Observability: structured logging and context management.

Provides:
- Contextual logging with transaction id / concept uuid
- Log rotation and file management
- Third-party library log level control
"""

from infrastructure.observability.logging import (
    configure_logging,
    get_log_context,
    log_context,
)

__all__ = [
    "configure_logging",
    "get_log_context",
    "log_context",
]
