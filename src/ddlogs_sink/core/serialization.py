"""
Payload encoding for batches.

A batch becomes one transport string: the text form of every non-null record
value, joined with ``","`` in record order. With compression enabled the
UTF-8 bytes of that string are gzip-compressed and base64-encoded.
"""

from __future__ import annotations

import base64
import gzip
import zlib
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import orjson

from .errors import EncodingError
from .records import SinkRecord

DEFAULT_COMPRESSION_LEVEL = 6


@dataclass(frozen=True)
class EncodedPayload:
    """Request body for one delivery attempt.

    ``raw`` keeps the joined text before compression; it is what diagnostics
    and error messages report as the submitted payload.
    """

    body: str
    raw: str
    compressed: bool = False
    record_count: int = 0

    @property
    def content_length(self) -> int:
        return len(self.body.encode("utf-8"))


def render_value(value: Any) -> str:
    """Return the transport text for a record value.

    Never fails. Strings pass through, bytes are decoded as UTF-8 with
    undecodable sequences replaced, booleans are lowercase, mappings and
    non-string sequences become compact JSON, everything else (and anything
    orjson rejects) uses ``str()``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return orjson.dumps(
                value, default=str, option=orjson.OPT_NON_STR_KEYS
            ).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            return str(value)
    return str(value)


def join_values(records: Iterable[SinkRecord | None]) -> tuple[str, int]:
    """Join non-null record values in a single pass.

    Returns the joined text and the number of records that contributed.
    """
    parts = [
        render_value(record.value)
        for record in records
        if record is not None and record.value is not None
    ]
    return ",".join(parts), len(parts)


def compress_payload(text: str, level: int = DEFAULT_COMPRESSION_LEVEL) -> str:
    """Gzip ``text`` at ``level`` and return the base64 form of the result."""
    try:
        compressed = gzip.compress(text.encode("utf-8"), compresslevel=level)
    except (OSError, ValueError, zlib.error) as exc:
        raise EncodingError("Gzip compression failed", cause=exc) from exc
    return base64.b64encode(compressed).decode("ascii")


def encode_batch(
    records: Iterable[SinkRecord | None],
    *,
    compress: bool = False,
    level: int = DEFAULT_COMPRESSION_LEVEL,
) -> EncodedPayload | None:
    """Encode a batch for transport.

    Returns ``None`` when no record carries a value; callers must treat that
    as "nothing to send" and skip the request.
    """
    text, count = join_values(records)
    if not text:
        return None
    if not compress:
        return EncodedPayload(body=text, raw=text, compressed=False, record_count=count)
    return EncodedPayload(
        body=compress_payload(text, level),
        raw=text,
        compressed=True,
        record_count=count,
    )


def decode_payload(payload: EncodedPayload) -> str:
    """Reverse `encode_batch` for a payload, returning the joined text."""
    if not payload.compressed:
        return payload.body
    return gzip.decompress(base64.b64decode(payload.body)).decode("utf-8")


__all__ = [
    "DEFAULT_COMPRESSION_LEVEL",
    "EncodedPayload",
    "compress_payload",
    "decode_payload",
    "encode_batch",
    "join_values",
    "render_value",
]
