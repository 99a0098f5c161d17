from __future__ import annotations

import base64
import gzip

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ddlogs_sink.core.records import SinkRecord, batch_key
from ddlogs_sink.core.serialization import encode_batch, render_value
from ddlogs_sink.core.writer import LogsApiWriter
from ddlogs_sink.testing import FakeIntake

pytestmark = pytest.mark.property

topics = st.text(
    alphabet=st.characters(min_codepoint=97, max_codepoint=122),
    min_size=1,
    max_size=12,
)
keys = st.one_of(st.none(), st.text(max_size=12), st.integers())
values = st.one_of(st.none(), st.text(max_size=40))


@given(topic=topics, key=keys)
def test_equal_topic_and_key_give_equal_batch_keys(topic: str, key: object) -> None:
    a = SinkRecord(topic=topic, key=key, value="1")
    b = SinkRecord(topic=topic, key=key, value="2")
    assert a.batch_key == b.batch_key


@given(t1=topics, t2=topics, k1=st.text(max_size=8), k2=st.text(max_size=8))
def test_different_topic_or_key_give_different_batch_keys(
    t1: str, t2: str, k1: str, k2: str
) -> None:
    # Topics are drawn without ":" so the separator is unambiguous
    if (t1, k1) != (t2, k2):
        assert batch_key(t1, k1) != batch_key(t2, k2)


@given(
    batch=st.lists(values, max_size=30),
    level=st.integers(min_value=0, max_value=9),
)
@settings(max_examples=200)
def test_compressed_payload_round_trips_to_plain_payload(
    batch: list[str | None], level: int
) -> None:
    records = [SinkRecord(topic="logs", value=v) for v in batch]
    plain = encode_batch(records)
    packed = encode_batch(records, compress=True, level=level)

    if plain is None:
        assert packed is None
        return
    assert packed is not None
    assert gzip.decompress(base64.b64decode(packed.body)) == plain.body.encode("utf-8")


@given(batch=st.lists(values, max_size=30))
def test_plain_payload_joins_non_null_values_in_order(
    batch: list[str | None],
) -> None:
    payload = encode_batch([SinkRecord(topic="logs", value=v) for v in batch])
    expected = ",".join(v for v in batch if v is not None)
    if expected:
        assert payload is not None and payload.body == expected
    else:
        assert payload is None


@given(
    keys_in_order=st.lists(st.sampled_from(["a", "b", "c"]), max_size=40),
    max_length=st.integers(min_value=1, max_value=6),
)
@settings(max_examples=100)
def test_every_value_is_delivered_once_and_no_batch_exceeds_threshold(
    keys_in_order: list[str], max_length: int
) -> None:
    intake = FakeIntake()
    writer = LogsApiWriter(
        {"ddAPIKey": "k", "ddMaxBatchLength": max_length},
        client=intake.client(),
    )
    expected = [f"{k}{i}" for i, k in enumerate(keys_in_order)]
    writer.ingest(
        [SinkRecord(topic="logs", key=k, value=v) for k, v in zip(keys_in_order, expected)]
    )

    sent = [part for body in intake.bodies for part in body.split(",")]
    assert sorted(sent) == sorted(expected)
    assert all(len(body.split(",")) <= max_length for body in intake.bodies)
    assert writer.pending_keys() == []


opaque_values = st.recursive(
    st.one_of(
        st.none(),
        st.booleans(),
        st.integers(),
        st.floats(allow_nan=True),
        st.text(max_size=12),
        st.binary(max_size=12),
    ),
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(
            st.one_of(st.integers(), st.text(max_size=6)), children, max_size=4
        ),
    ),
    max_leaves=12,
)


@given(value=opaque_values)
def test_any_record_value_renders_to_text(value: object) -> None:
    assert isinstance(render_value(value), str)
