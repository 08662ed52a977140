"""
Configuration management: models, loading, and validation.

Handles:
- ServiceConfig: Main service configuration
- Consumer backend selection and Kafka proxy settings
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import apply_env_overrides, load_service_config
from infrastructure.config.models import (
    APP_DESCRIPTION,
    BuildInfoConfig,
    ConsumerBackend,
    KafkaProxyConfig,
    ServiceConfig,
)

__all__ = [
    # Main config (most commonly used)
    "ServiceConfig",
    "load_service_config",
    "apply_env_overrides",
    # Enums
    "ConsumerBackend",
    # Nested configs
    "KafkaProxyConfig",
    "BuildInfoConfig",
    "APP_DESCRIPTION",
]
