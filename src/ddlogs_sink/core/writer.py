"""
Batching engine that writes broker records to the Datadog logs intake.

Records are grouped by topic and record key. A batch is sent as soon as it
reaches ``dd_max_batch_length`` records, and whatever remains is sent at the
end of every `LogsApiWriter.ingest` call.

Batches are dropped from the store once their send attempt starts, whether
the attempt succeeds or not; a failed batch is not retried. Batches the call
never reached stay pending for the next call.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import httpx

from . import diagnostics
from .batches import BatchStore
from .errors import DeliveryError
from .records import SinkRecord
from .serialization import encode_batch
from .settings import DatadogLogsConfig, load_config
from .transport import DeliveryClient
from ..metrics.metrics import MetricsCollector

_COMPONENT = "logs-writer"


class LogsApiWriter:
    """Groups records into batches and delivers them one request at a time.

    Not safe for concurrent `ingest` calls on the same instance.
    """

    def __init__(
        self,
        config: DatadogLogsConfig | Mapping[str, Any],
        *,
        client: httpx.Client | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._config = load_config(config)
        self._url = self._config.intake_url
        self._store = BatchStore()
        self._delivery = DeliveryClient(
            client=client, timeout_seconds=self._config.timeout_seconds
        )
        self._metrics = metrics

    @property
    def config(self) -> DatadogLogsConfig:
        return self._config

    def ingest(self, records: Iterable[SinkRecord | None]) -> None:
        """Batch ``records`` and deliver full and remaining batches.

        Raises:
            DeliveryError: When a batch send fails; the rest of the call is
                abandoned.
            EncodingError: When a batch cannot be compressed.
        """
        max_length = self._config.dd_max_batch_length
        for record in records:
            if record is None:
                continue
            key = record.batch_key
            if self._store.append(key, record) >= max_length:
                self._send_batch(key)

        self.flush()

    def flush(self) -> None:
        """Send every pending batch."""
        for key in self._store.keys():
            self._send_batch(key)

    def _send_batch(self, key: str) -> None:
        batch = self._store.get(key)
        if batch is None:
            return

        payload = encode_batch(
            batch,
            compress=self._config.compression_enable,
            level=self._config.compression_level,
        )
        if payload is None:
            self._store.pop(key)
            diagnostics.debug(
                _COMPONENT,
                "nothing to send; skipping the HTTP request",
                batch_key=key,
                batch_size=len(batch),
            )
            if self._metrics is not None:
                self._metrics.record_batch_skipped()
            return

        # The attempt starts here; the batch is gone whatever the outcome.
        self._store.pop(key)
        try:
            self._delivery.deliver(payload, self._url)
        except DeliveryError as exc:
            if self._metrics is not None:
                self._metrics.record_delivery_failure(status_code=exc.status_code)
            raise
        if self._metrics is not None:
            self._metrics.record_batch_sent(
                records=payload.record_count,
                payload_bytes=payload.content_length,
            )

    def pending_keys(self) -> list[str]:
        return self._store.keys()

    def pending_count(self) -> int:
        """Number of records waiting across all batches."""
        return self._store.record_count()

    def close(self) -> None:
        self._delivery.close()

    def __enter__(self) -> LogsApiWriter:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


__all__ = ["LogsApiWriter"]
