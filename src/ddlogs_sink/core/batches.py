"""
In-memory batch store keyed by batch key.

Pure data structure, no I/O and no locking. One store belongs to one writer.
"""

from __future__ import annotations

from typing import Iterator

from .records import SinkRecord


class BatchStore:
    """Ordered mapping of batch key to the records pending for it."""

    def __init__(self) -> None:
        self._batches: dict[str, list[SinkRecord | None]] = {}

    def append(self, key: str, record: SinkRecord | None) -> int:
        """Add ``record`` to the batch for ``key`` and return the batch length."""
        batch = self._batches.get(key)
        if batch is None:
            batch = [record]
            self._batches[key] = batch
        else:
            batch.append(record)
        return len(batch)

    def get(self, key: str) -> list[SinkRecord | None] | None:
        return self._batches.get(key)

    def pop(self, key: str) -> list[SinkRecord | None] | None:
        return self._batches.pop(key, None)

    def keys(self) -> list[str]:
        # Snapshot so callers may pop while iterating
        return list(self._batches)

    def record_count(self) -> int:
        return sum(len(batch) for batch in self._batches.values())

    def __contains__(self, key: object) -> bool:
        return key in self._batches

    def __len__(self) -> int:
        return len(self._batches)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


__all__ = ["BatchStore"]
