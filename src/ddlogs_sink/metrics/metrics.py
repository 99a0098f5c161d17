"""
Delivery metrics for the Datadog logs sink.

Implements a small set of Prometheus counters and a payload-size histogram.

Design goals:
- Zero global state; each collector owns an isolated registry
- Safe no-op exporter behavior when metrics are disabled by settings
- In-memory counters are always kept so tests can assert on them
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram


@dataclass
class DeliveryMetrics:
    """Captured runtime counters for quick assertions in tests."""

    batches_sent: int = 0
    records_sent: int = 0
    batches_skipped: int = 0
    delivery_failures: int = 0


class MetricsCollector:
    """Instance-scoped delivery metrics collector."""

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = threading.Lock()
        self._state = DeliveryMetrics()

        self._c_batches: Any | None = None
        self._c_records: Any | None = None
        self._c_skipped: Any | None = None
        self._c_failures: Any | None = None
        self._h_payload_bytes: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            self._registry = CollectorRegistry()
            self._c_batches = Counter(
                "ddlogs_batches_sent_total",
                "Total number of batches delivered successfully",
                registry=self._registry,
            )
            self._c_records = Counter(
                "ddlogs_records_sent_total",
                "Total number of record values delivered successfully",
                registry=self._registry,
            )
            self._c_skipped = Counter(
                "ddlogs_batches_skipped_total",
                "Batches dropped without a request because nothing was left to send",
                registry=self._registry,
            )
            self._c_failures = Counter(
                "ddlogs_delivery_failures_total",
                "Delivery attempts that failed",
                ["reason"],
                registry=self._registry,
            )
            self._h_payload_bytes = Histogram(
                "ddlogs_payload_bytes",
                "Size of request bodies sent to the intake",
                buckets=(256, 1024, 4096, 16384, 65536, 262144, 1048576, 5242880),
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    def record_batch_sent(self, *, records: int, payload_bytes: int) -> None:
        with self._lock:
            self._state.batches_sent += 1
            self._state.records_sent += records
        if not self._enabled:
            return
        if self._c_batches is not None:
            self._c_batches.inc()
        if self._c_records is not None:
            self._c_records.inc(records)
        if self._h_payload_bytes is not None:
            self._h_payload_bytes.observe(payload_bytes)

    def record_batch_skipped(self) -> None:
        with self._lock:
            self._state.batches_skipped += 1
        if self._enabled and self._c_skipped is not None:
            self._c_skipped.inc()

    def record_delivery_failure(self, *, status_code: int | None = None) -> None:
        with self._lock:
            self._state.delivery_failures += 1
        if not self._enabled or self._c_failures is None:
            return
        label = "transport" if status_code is None else str(status_code)
        self._c_failures.labels(reason=label).inc()

    def snapshot(self) -> DeliveryMetrics:
        with self._lock:
            return DeliveryMetrics(
                batches_sent=self._state.batches_sent,
                records_sent=self._state.records_sent,
                batches_skipped=self._state.batches_skipped,
                delivery_failures=self._state.delivery_failures,
            )


__all__ = ["DeliveryMetrics", "MetricsCollector"]
