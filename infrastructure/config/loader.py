"""Configuration loading from YAML files and environment variables."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import ServiceConfig

# Environment variable -> dotted config key
ENV_OVERRIDES: dict[str, str] = {
    "APP_SYSTEM_CODE": "app_system_code",
    "APP_NAME": "app_name",
    "APP_PORT": "port",
    "LOG_LEVEL": "log_level",
    "WRITER_ADDRESS": "writer_address",
    "KAFKA_TOPIC": "topic",
    "GROUP_NAME": "group_name",
    "CONSUMER_BACKEND": "consumer_backend",
    "KAFKA_PROXY_ADDRESS": "kafka_proxy.address",
    "KAFKA_OFFSET": "kafka_proxy.offset",
    "BUILD_VERSION": "build_info.version",
    "BUILD_REVISION": "build_info.revision",
}


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def _set_dotted(data: dict[str, Any], dotted_key: str, value: str) -> None:
    *parents, leaf = dotted_key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return a copy of `data` with any non-empty ENV_OVERRIDES applied."""
    environ = os.environ if environ is None else environ
    merged = {k: (dict(v) if isinstance(v, dict) else v) for k, v in data.items()}
    for env_name, dotted_key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is not None and value.strip():
            _set_dotted(merged, dotted_key, value.strip())
    return merged


def load_service_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ServiceConfig:
    """
    Load service.yaml (optional) and construct a validated ServiceConfig.

    Environment variables win over YAML values. A missing config file is only
    an error when a path was given explicitly.

    Raises:
        FileNotFoundError: config_path given but missing
        pydantic.ValidationError: invalid or missing required values (e.g. WRITER_ADDRESS)
    """
    data: dict[str, Any] = _load_yaml(config_path) if config_path is not None else {}
    return ServiceConfig.model_validate(apply_env_overrides(data, environ))
