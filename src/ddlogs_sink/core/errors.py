"""
Error hierarchy for the Datadog logs sink.

Every error raised by the core derives from `SinkError`, which carries a
category, an optional cause and a dict form suitable for diagnostics.
No layer retries; errors propagate to whoever called `ingest()`/`put()`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse error categories used for diagnostics and metrics labels."""

    SYSTEM = "system"
    CONFIGURATION = "configuration"
    SERIALIZATION = "serialization"
    NETWORK = "network"


class SinkError(Exception):
    """Base error for all sink failures."""

    default_category = ErrorCategory.SYSTEM

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data


class ConfigurationError(SinkError):
    """Connector properties could not be turned into a valid configuration."""

    default_category = ErrorCategory.CONFIGURATION


class EncodingError(SinkError):
    """A batch could not be compressed or encoded for transport."""

    default_category = ErrorCategory.SERIALIZATION


class DeliveryError(SinkError):
    """A delivery attempt failed.

    Raised for non-2xx responses and for transport-level failures. For the
    latter ``status_code`` and ``reason`` are ``None``.
    """

    default_category = ErrorCategory.NETWORK

    def __init__(
        self,
        *,
        status_code: int | None,
        reason: str | None,
        body: str,
        payload: str,
        url: str,
        cause: BaseException | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.payload = payload
        self.url = url
        message = (
            f"HTTP Response code: {status_code}, {reason}, {body}, "
            f"Submitted payload: {payload}, url:{url}"
        )
        super().__init__(message, cause=cause)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            status_code=self.status_code,
            reason=self.reason,
            url=self.url,
        )
        return data


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "EncodingError",
    "ErrorCategory",
    "SinkError",
]
