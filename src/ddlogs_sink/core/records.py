"""
Broker records and the batch key that groups them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def batch_key(topic: str, key: Any | None) -> str:
    """Return the grouping key for a record's topic and key.

    An absent key maps to the empty string, so ``batch_key("logs", None)``
    is ``"logs:"``.
    """
    return f"{topic}:{'' if key is None else str(key)}"


@dataclass(frozen=True)
class SinkRecord:
    """A single record handed over by the broker.

    ``partition`` and ``offset`` are informational; they never take part in
    batching or in the payload.
    """

    topic: str
    key: Any | None = None
    value: Any | None = None
    partition: int | None = None
    offset: int | None = None

    @property
    def batch_key(self) -> str:
        return batch_key(self.topic, self.key)


__all__ = ["SinkRecord", "batch_key"]
