from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ...core.records import SinkRecord


@runtime_checkable
class BaseSink(Protocol):
    """Base sink task interface.

    The host framework drives a sink with `start()`, repeated `put()` calls,
    `flush()` at commit points and `stop()` at shutdown. Calls are serialized
    by the host; sinks do not lock.
    """

    name: str

    def start(self) -> None:  # Optional lifecycle hook
        ...

    def stop(self) -> None:  # Optional lifecycle hook
        ...

    def put(self, _records: Iterable[SinkRecord]) -> None:  # noqa: ARG002
        """Deliver a collection of broker records."""
        ...


__all__ = ["BaseSink"]
