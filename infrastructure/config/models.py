"""Configuration models (Pydantic classes)."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

APP_DESCRIPTION = (
    "Service which listens to kafka for concordance updates, transforms smartlogic "
    "concordance json and sends updates to the concordances writer"
)


class ConsumerBackend(str, Enum):
    """Supported message-stream consumer backends."""

    KAFKA_PROXY = "kafka_proxy"
    MEMORY = "memory"


class KafkaProxyConfig(BaseModel):
    """Kafka REST proxy consumer settings."""

    address: str = Field(default="http://localhost:8082", min_length=1)
    offset: str = Field(default="latest", description="auto.offset.reset for new consumer instances.")
    poll_interval_s: float = Field(default=1.0, ge=0)
    error_backoff_s: float = Field(default=60.0, ge=0)
    timeout_s: float = Field(default=30.0, gt=0)

    @field_validator("address")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class BuildInfoConfig(BaseModel):
    """Values served on /__build-info."""

    version: str = "0.1.0"
    repository: str = "https://github.com/Financial-Times/smartlogic-concordance-transformer"
    revision: str = "unknown"
    builder: str = "unknown"
    date_time: str = "unknown"


class ServiceConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from configs/service.yaml
    - Overridden by environment variables (APP_PORT, WRITER_ADDRESS, ...)
    - Consumed by the writer client, the consumer factory and the HTTP app
    """

    app_system_code: str = Field(default="smartlogic-concordance-transformer", min_length=1)
    app_name: str = Field(default="Smartlogic Concordance Transformer", min_length=1)
    app_description: str = APP_DESCRIPTION
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    writer_address: str = Field(..., min_length=1, description="Concordance rw base address.")
    writer_timeout_s: float = Field(default=30.0, gt=0)

    topic: str = Field(default="SmartlogicConcept", min_length=1)
    group_name: str = Field(default="SmartlogicConcordanceTransformer", min_length=1)
    consumer_backend: ConsumerBackend = Field(default=ConsumerBackend.KAFKA_PROXY)
    kafka_proxy: KafkaProxyConfig = Field(default_factory=KafkaProxyConfig)

    panic_guide: str = "https://dewey.ft.com/smartlogic-concordance-transform.html"
    build_info: BuildInfoConfig = Field(default_factory=BuildInfoConfig)

    @field_validator("writer_address")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        return v if v.endswith("/") else v + "/"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Cannot parse log level: {v}")
        return level
