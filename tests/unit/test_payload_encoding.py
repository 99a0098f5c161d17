from __future__ import annotations

import base64
import gzip

import pytest

from ddlogs_sink.core.errors import EncodingError
from ddlogs_sink.core.records import SinkRecord
from ddlogs_sink.core.serialization import (
    compress_payload,
    decode_payload,
    encode_batch,
    render_value,
)


def _batch(*values: object) -> list[SinkRecord]:
    return [SinkRecord(topic="logs", value=v) for v in values]


@pytest.mark.critical
def test_values_are_comma_joined_in_order() -> None:
    payload = encode_batch(_batch('{"msg":"x"}', '{"msg":"y"}'))
    assert payload is not None
    assert payload.body == '{"msg":"x"},{"msg":"y"}'
    assert payload.raw == payload.body
    assert payload.compressed is False
    assert payload.record_count == 2


def test_null_values_and_absent_records_are_skipped() -> None:
    records = [
        SinkRecord(topic="logs", value="a"),
        SinkRecord(topic="logs", value=None),
        None,
        SinkRecord(topic="logs", value="b"),
        SinkRecord(topic="logs", value=None),
    ]
    payload = encode_batch(records)
    assert payload is not None
    assert payload.body == "a,b"
    assert payload.record_count == 2


def test_all_null_batch_means_nothing_to_send() -> None:
    assert encode_batch(_batch(None, None)) is None
    assert encode_batch([]) is None
    assert encode_batch([None]) is None


def test_render_value_forms() -> None:
    assert render_value("text") == "text"
    assert render_value(b'{"a":1}') == '{"a":1}'
    assert render_value({"msg": "x"}) == '{"msg":"x"}'
    assert render_value([1, 2]) == "[1,2]"
    assert render_value(12) == "12"
    assert render_value(True) == "true"
    assert render_value(False) == "false"
    assert render_value([True, None]) == "[true,null]"


def test_non_string_mapping_keys_are_rendered() -> None:
    assert render_value({1: "a"}) == '{"1":"a"}'


def test_mapping_orjson_cannot_serialize_falls_back_to_str() -> None:
    value = {(1, 2): "pair"}
    assert render_value(value) == str(value)


def test_undecodable_bytes_are_replaced() -> None:
    payload = encode_batch(_batch(b"\xff\xfe", "ok"))
    assert payload is not None
    assert payload.body == "\ufffd\ufffd,ok"


def test_compressed_payload_is_base64_gzip_of_joined_text() -> None:
    payload = encode_batch(_batch("a", "b"), compress=True, level=9)
    assert payload is not None
    assert payload.compressed is True
    assert payload.raw == "a,b"
    assert gzip.decompress(base64.b64decode(payload.body)) == b"a,b"
    assert decode_payload(payload) == "a,b"


def test_level_zero_still_produces_valid_gzip() -> None:
    body = compress_payload("hello", level=0)
    assert gzip.decompress(base64.b64decode(body)) == b"hello"


def test_invalid_level_raises_encoding_error() -> None:
    with pytest.raises(EncodingError) as exc_info:
        compress_payload("hello", level=42)
    assert exc_info.value.__cause__ is not None


def test_non_ascii_text_survives_compression() -> None:
    payload = encode_batch(_batch("żółw", "日本"), compress=True)
    assert payload is not None
    assert decode_payload(payload) == "żółw,日本"
