"""
Public entrypoints for ddlogs-sink.

Forward broker records, batched by topic and key, to the Datadog logs intake:

    from ddlogs_sink import SinkRecord, create_writer

    with create_writer({"ddAPIKey": "...", "ddMaxBatchLength": 100}) as writer:
        writer.ingest([SinkRecord(topic="logs", value='{"msg":"x"}')])
"""

from __future__ import annotations

from typing import Any, Mapping

from ._version import __version__
from .core.errors import ConfigurationError, DeliveryError, EncodingError, SinkError
from .core.records import SinkRecord, batch_key
from .core.settings import DatadogLogsConfig, Settings
from .core.writer import LogsApiWriter
from .metrics.metrics import MetricsCollector
from .plugins.sinks.datadog_logs import DatadogLogsSink

__all__ = [
    "ConfigurationError",
    "DatadogLogsConfig",
    "DatadogLogsSink",
    "DeliveryError",
    "EncodingError",
    "LogsApiWriter",
    "MetricsCollector",
    "Settings",
    "SinkError",
    "SinkRecord",
    "VERSION",
    "__version__",
    "batch_key",
    "create_writer",
]

VERSION = __version__


def create_writer(
    config: DatadogLogsConfig | Mapping[str, Any] | None = None,
    *,
    enable_metrics: bool | None = None,
    **overrides: Any,
) -> LogsApiWriter:
    """Return a `LogsApiWriter` for ``config``.

    With no ``config`` the ``DDLOGS_DATADOG__*`` environment variables are
    used. Keyword overrides accept either connector property names or field
    names.
    """
    from .core.settings import load_config, load_settings

    cfg = load_config(config, **overrides)
    if enable_metrics is None:
        enable_metrics = load_settings(include_datadog=False).core.enable_metrics
    return LogsApiWriter(cfg, metrics=MetricsCollector(enabled=enable_metrics))
