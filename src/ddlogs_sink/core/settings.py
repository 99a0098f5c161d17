"""
Configuration models for the Datadog logs sink using Pydantic v2 Settings.

`DatadogLogsConfig` is the connector-level configuration consumed by the
writer. It accepts the connector property names (``ddURL``, ``ddPort``, ...)
as well as the snake_case field names. `Settings` is the environment-driven
top-level model (prefix ``DDLOGS_``, nested delimiter ``__``).
"""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

from .errors import ConfigurationError

INTAKE_PATH_TEMPLATE = "http://{host}:{port}/v1/input/{api_key}"


class DatadogLogsConfig(BaseModel):
    """Connector properties consumed by the batching engine."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    dd_url: str = Field(
        default="http-intake.logs.datadoghq.com",
        alias="ddURL",
        description="Intake host name",
    )
    dd_port: int = Field(
        default=80,
        ge=1,
        le=65535,
        alias="ddPort",
        description="Intake port",
    )
    dd_api_key: SecretStr = Field(
        alias="ddAPIKey",
        description="API key embedded in the request path",
    )
    dd_max_batch_length: int = Field(
        default=50,
        ge=1,
        alias="ddMaxBatchLength",
        description="Number of records per key that triggers an immediate send",
    )
    compression_enable: bool = Field(
        default=False,
        alias="compressionEnable",
        description="Gzip and base64-encode payloads before sending",
    )
    compression_level: int = Field(
        default=6,
        ge=0,
        le=9,
        alias="compressionLevel",
        description="Gzip compression level",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        alias="timeoutSeconds",
        description="HTTP timeout; None leaves the socket defaults in place",
    )

    @field_validator("dd_url")
    @classmethod
    def _ensure_host_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("ddURL must not be empty")
        return value

    @field_validator("dd_api_key")
    @classmethod
    def _ensure_api_key_non_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("ddAPIKey must not be empty")
        return value

    @property
    def intake_url(self) -> str:
        return INTAKE_PATH_TEMPLATE.format(
            host=self.dd_url,
            port=self.dd_port,
            api_key=self.dd_api_key.get_secret_value(),
        )


class CoreSettings(BaseModel):
    """Process-level toggles that are not part of the connector properties."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level applied to the ddlogs_sink logger hierarchy",
    )
    enable_metrics: bool = Field(
        default=False,
        description="Export Prometheus counters for deliveries",
    )


class ProcessSettings(BaseSettings):
    """Process-level configuration read from the environment.

    Ignores the ``DDLOGS_DATADOG__*`` group, so it can be loaded alongside
    explicit connector properties.
    """

    core: CoreSettings = Field(default_factory=CoreSettings)

    model_config = SettingsConfigDict(
        env_prefix="DDLOGS_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )


class Settings(ProcessSettings):
    """Top-level configuration read from the environment."""

    datadog: DatadogLogsConfig | None = Field(default=None)


def load_settings(*, include_datadog: bool = True) -> ProcessSettings:
    """Read settings from the environment.

    With ``include_datadog=False`` the connector group is not read or
    validated.

    Raises:
        ConfigurationError: If the environment fails validation.
    """
    try:
        return Settings() if include_datadog else ProcessSettings()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid DDLOGS_ environment settings: {e}",
            cause=e,
        ) from e


def _by_field_name(properties: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite connector property names (``ddURL``) to field names (``dd_url``)."""
    aliases = {
        field.alias: name
        for name, field in DatadogLogsConfig.model_fields.items()
        if field.alias
    }
    return {aliases.get(key, key): value for key, value in properties.items()}


def load_config(
    properties: Mapping[str, Any] | DatadogLogsConfig | None = None,
    **overrides: Any,
) -> DatadogLogsConfig:
    """Build a `DatadogLogsConfig` from connector properties.

    With no properties, falls back to the ``datadog`` group of `Settings`
    (``DDLOGS_DATADOG__DD_API_KEY`` and friends).

    Raises:
        ConfigurationError: If the properties fail validation.
    """
    if isinstance(properties, DatadogLogsConfig) and not overrides:
        return properties
    try:
        if isinstance(properties, DatadogLogsConfig):
            data: dict[str, Any] = properties.model_dump()
        elif properties is None:
            env_cfg = Settings().datadog
            data = env_cfg.model_dump() if env_cfg is not None else {}
        else:
            data = _by_field_name(properties)
        data.update(_by_field_name(overrides))
        return DatadogLogsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid Datadog logs configuration: {e}",
            cause=e,
        ) from e


__all__ = [
    "CoreSettings",
    "DatadogLogsConfig",
    "INTAKE_PATH_TEMPLATE",
    "ProcessSettings",
    "Settings",
    "load_config",
    "load_settings",
]
