"""
HTTP delivery of encoded payloads to the logs intake endpoint.

One `deliver()` call is one delivery attempt: a single blocking POST whose
response is always read and closed. Nothing is retried here; failures
surface as `DeliveryError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from . import diagnostics
from .errors import DeliveryError
from .serialization import EncodedPayload
from .settings import INTAKE_PATH_TEMPLATE

_COMPONENT = "delivery-client"


def build_intake_url(host: str, port: int, api_key: str) -> str:
    return INTAKE_PATH_TEMPLATE.format(host=host, port=port, api_key=api_key)


def build_headers(payload: EncodedPayload) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if payload.compressed:
        # The body is base64 text of the gzip bytes, not raw gzip bytes.
        headers["Content-Encoding"] = "gzip"
    return headers


class DeliveryClient:
    """Synchronous HTTP client that POSTs one payload per call.

    A caller-supplied ``client`` is used as-is and left open by `close()`;
    otherwise an owned ``httpx.Client`` is created.
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def deliver(self, payload: EncodedPayload, url: str) -> httpx.Response:
        """POST ``payload`` to ``url``.

        Raises:
            DeliveryError: On a non-2xx status or a transport failure.
        """
        try:
            response = self._client.post(
                url,
                content=payload.body.encode("utf-8"),
                headers=build_headers(payload),
            )
        except httpx.HTTPError as exc:
            raise DeliveryError(
                status_code=None,
                reason=type(exc).__name__,
                body=str(exc),
                payload=payload.raw,
                url=url,
                cause=exc,
            ) from exc

        try:
            status = response.status_code
            reason = response.reason_phrase
            body = response.text
        finally:
            response.close()

        diagnostics.debug(
            _COMPONENT,
            "submitted payload",
            payload=payload.raw,
            url=url,
        )
        if not response.is_success:
            raise DeliveryError(
                status_code=status,
                reason=reason,
                body=body,
                payload=payload.raw,
                url=url,
            )
        diagnostics.debug(_COMPONENT, "response code", status_code=status, reason=reason)
        diagnostics.debug(_COMPONENT, "response content", body=body)
        return response

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> DeliveryClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


__all__ = ["DeliveryClient", "build_headers", "build_intake_url"]
