"""
Datadog logs sink task.

Wraps `LogsApiWriter` in the start/put/flush/stop lifecycle the host
framework expects and tracks the outcome of the last delivery for health
checks. Delivery errors propagate so the host can decide whether to replay
the records.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import httpx

from ..._version import __version__
from ...core import diagnostics
from ...core.errors import SinkError
from ...core.records import SinkRecord
from ...core.settings import (
    DatadogLogsConfig,
    ProcessSettings,
    Settings,
    load_config,
    load_settings,
)
from ...core.writer import LogsApiWriter
from ...metrics.metrics import MetricsCollector

__all__ = ["DatadogLogsSink"]


class DatadogLogsSink:
    """Sink task that forwards broker records to the Datadog logs intake."""

    name = "datadog-logs"

    def __init__(
        self,
        config: DatadogLogsConfig | Mapping[str, Any] | None = None,
        *,
        settings: ProcessSettings | None = None,
        metrics: MetricsCollector | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._properties = config
        self._settings = settings
        self._metrics = metrics
        self._client = client
        self._writer: LogsApiWriter | None = None
        self._last_error: str | None = None

    @property
    def metrics(self) -> MetricsCollector | None:
        return self._metrics

    def start(self, properties: Mapping[str, Any] | None = None) -> None:
        """Build the writer from ``properties`` or the constructor config."""
        if self._writer is not None:
            return
        source = properties if properties is not None else self._properties
        settings = self._settings or load_settings(include_datadog=source is None)
        logging.getLogger("ddlogs_sink").setLevel(settings.core.log_level)
        if self._metrics is None:
            self._metrics = MetricsCollector(enabled=settings.core.enable_metrics)

        if source is None and isinstance(settings, Settings):
            source = settings.datadog
        cfg = load_config(source)
        self._writer = LogsApiWriter(cfg, client=self._client, metrics=self._metrics)
        diagnostics.debug(
            "datadog-logs-sink",
            "sink started",
            host=cfg.dd_url,
            port=cfg.dd_port,
            max_batch_length=cfg.dd_max_batch_length,
            compression=cfg.compression_enable,
        )

    def put(self, records: Iterable[SinkRecord]) -> None:
        writer = self._require_writer()
        try:
            writer.ingest(records)
        except SinkError as exc:
            self._last_error = str(exc)
            raise
        self._last_error = None

    def flush(self) -> None:
        """Send every pending batch."""
        self._require_writer().flush()

    def stop(self) -> None:
        if self._writer is None:
            return
        self._writer.close()
        self._writer = None
        diagnostics.debug("datadog-logs-sink", "sink stopped")

    def pending_count(self) -> int:
        return 0 if self._writer is None else self._writer.pending_count()

    def health_check(self) -> bool:
        return self._writer is not None and self._last_error is None

    def _require_writer(self) -> LogsApiWriter:
        if self._writer is None:
            raise SinkError(f"{self.name} sink used before start()")
        return self._writer


# Plugin metadata for discovery
PLUGIN_METADATA = {
    "name": "datadog-logs",
    "version": __version__,
    "plugin_type": "sink",
    "entry_point": "ddlogs_sink.plugins.sinks.datadog_logs:DatadogLogsSink",
    "description": "Batches broker records by topic and key and POSTs them to the Datadog logs intake.",
    "author": "ddlogs-sink",
    "api_version": "1.0",
}
