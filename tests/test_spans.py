"""Tests for span-level translators: display name, timestamps, events, links, status, resource."""

import pytest
from opentelemetry.sdk.trace import Event
from opentelemetry.trace import Link, SpanContext, SpanKind, Status, StatusCode

from trace_translator.config import TranslatorConfig
from trace_translator.translators.attributes import AGENT_LABEL_KEY
from trace_translator.translators.spans import (
    resolve_display_name,
    translate_links,
    translate_resource_labels,
    translate_span_kind,
    translate_status,
    translate_status_record,
    translate_time_events,
    translate_timestamp,
)
from trace_translator.types import SpanKind as CloudSpanKind
from trace_translator.types import Status as CloudStatus
from trace_translator.types import Timestamp, TruncatableString

# Display name


def test_display_name_prefixes_by_kind() -> None:
    """SERVER spans get Recv., CLIENT spans get Sent., with no space."""
    assert resolve_display_name("regularSpanName", SpanKind.SERVER) == "Recv.regularSpanName"
    assert resolve_display_name("regularSpanName", SpanKind.CLIENT) == "Sent.regularSpanName"


@pytest.mark.parametrize(
    "kind",
    [SpanKind.SERVER, SpanKind.CLIENT, SpanKind.INTERNAL, SpanKind.PRODUCER, SpanKind.CONSUMER],
)
@pytest.mark.parametrize("name", ["Recv. mySpanName", "Sent. mySpanName"])
def test_display_name_already_annotated_is_unchanged(name: str, kind: SpanKind) -> None:
    """Names annotated upstream are never prefixed again."""
    assert resolve_display_name(name, kind) == name


@pytest.mark.parametrize("kind", [SpanKind.INTERNAL, SpanKind.PRODUCER, SpanKind.CONSUMER, None])
def test_display_name_other_kinds_unchanged(kind) -> None:
    """Only SERVER and CLIENT spans are prefixed."""
    assert resolve_display_name("work", kind) == "work"


def test_display_name_prefix_without_space_is_prefixed_again() -> None:
    """The guard only recognizes the spaced form of the prefix."""
    assert resolve_display_name("Recv.already", SpanKind.SERVER) == "Recv.Recv.already"


def test_display_name_requires_name() -> None:
    """None is a caller error."""
    with pytest.raises(TypeError):
        resolve_display_name(None, SpanKind.SERVER)  # type: ignore[arg-type]


# Timestamps


def test_timestamp_splits_seconds_and_nanos() -> None:
    """Epoch nanoseconds split into whole seconds and remainder."""
    assert translate_timestamp(3001 * 1_000_000_000 + 255) == Timestamp(seconds=3001, nanos=255)


def test_timestamp_zero() -> None:
    """Zero maps to the epoch."""
    assert translate_timestamp(0) == Timestamp(seconds=0, nanos=0)


def test_timestamp_exact_second() -> None:
    """A whole number of seconds has zero nanos."""
    assert translate_timestamp(5_000_000_000) == Timestamp(seconds=5, nanos=0)


def test_timestamp_rejects_negative_and_none() -> None:
    """Negative and missing values are rejected."""
    with pytest.raises(ValueError):
        translate_timestamp(-1)
    with pytest.raises(TypeError):
        translate_timestamp(None)  # type: ignore[arg-type]


# Time events


def test_time_events_translate_description_and_attributes(
    config: TranslatorConfig, agent_label_text: str
) -> None:
    """Each event becomes an annotation with its name and translated attributes."""
    events = [Event("eventOne", {"key": "value"}, timestamp=0)]

    time_events = translate_time_events(events, config)

    assert len(time_events.time_event) == 1
    annotation = time_events.time_event[0].annotation
    assert annotation.description.value == "eventOne"
    attribute_map = annotation.attributes.attribute_map
    assert len(attribute_map) == 2
    assert attribute_map["key"].string_value.value == "value"
    assert attribute_map[AGENT_LABEL_KEY].string_value.value == agent_label_text


def test_time_events_preserve_order_and_time(config: TranslatorConfig) -> None:
    """Output order matches input order and event times are carried."""
    events = [
        Event("first", None, timestamp=1_000_000_001),
        Event("second", {"http.status_code": 500}, timestamp=2_000_000_002),
        Event("third", {}, timestamp=3_000_000_003),
    ]

    time_events = translate_time_events(events, config).time_event

    assert [e.annotation.description.value for e in time_events] == ["first", "second", "third"]
    assert [e.time for e in time_events] == [
        Timestamp(1, 1),
        Timestamp(2, 2),
        Timestamp(3, 3),
    ]
    assert time_events[1].annotation.attributes.attribute_map["/http/status_code"].int_value == 500


def test_time_events_empty(config: TranslatorConfig) -> None:
    """No events, no time events."""
    assert translate_time_events([], config).time_event == ()


def test_time_event_description_limit() -> None:
    """max_description_bytes truncates annotation descriptions."""
    config = TranslatorConfig(max_description_bytes=4)
    time_events = translate_time_events([Event("exception", timestamp=0)], config)
    assert time_events.time_event[0].annotation.description == TruncatableString("exce", 5)


# Links


def test_links_translate_ids_and_attributes(config: TranslatorConfig) -> None:
    """Links carry hex ids and translated attributes, in order."""
    first = SpanContext(trace_id=0x1, span_id=0x2, is_remote=True)
    second = SpanContext(trace_id=0xABC, span_id=0xDEF, is_remote=False)

    links = translate_links([Link(first, {"http.method": "GET"}), Link(second)], config).link

    assert links[0].trace_id == "00000000000000000000000000000001"
    assert links[0].span_id == "0000000000000002"
    assert links[0].attributes.attribute_map["/http/method"].string_value.value == "GET"
    assert links[1].trace_id.endswith("abc")
    assert links[1].span_id == "0000000000000def"
    assert set(links[1].attributes.attribute_map) == {AGENT_LABEL_KEY}


# Status


def test_status_ok_is_zero() -> None:
    """OK maps to canonical code 0."""
    assert translate_status(Status(StatusCode.OK)) == 0


def test_status_table_covers_every_kind() -> None:
    """Every SDK status code has a backend code; lookup ignores description text."""
    assert translate_status(Status(StatusCode.UNSET)) == 0
    assert translate_status(Status(StatusCode.ERROR)) == 2
    assert translate_status(Status(StatusCode.ERROR, "timeout")) == 2
    assert {translate_status(code) for code in StatusCode} <= {0, 2}


def test_status_rejects_other_types() -> None:
    """Only Status or StatusCode are accepted."""
    with pytest.raises(TypeError):
        translate_status("OK")  # type: ignore[arg-type]


def test_status_record() -> None:
    """Unset status is omitted; others carry code and description."""
    assert translate_status_record(Status(StatusCode.UNSET)) is None
    assert translate_status_record(Status(StatusCode.OK)) == CloudStatus(code=0, message="")
    assert translate_status_record(Status(StatusCode.ERROR, "boom")) == CloudStatus(
        code=2, message="boom"
    )


# Span kind


def test_span_kind_mapping() -> None:
    """SDK span kinds map to Cloud Trace span kinds."""
    assert translate_span_kind(SpanKind.SERVER) is CloudSpanKind.SERVER
    assert translate_span_kind(SpanKind.CLIENT) is CloudSpanKind.CLIENT
    assert translate_span_kind(SpanKind.INTERNAL) is CloudSpanKind.INTERNAL
    assert translate_span_kind(SpanKind.PRODUCER) is CloudSpanKind.PRODUCER
    assert translate_span_kind(SpanKind.CONSUMER) is CloudSpanKind.CONSUMER
    assert translate_span_kind(None) is CloudSpanKind.SPAN_KIND_UNSPECIFIED


# Resource labels


def test_resource_labels_are_prefixed() -> None:
    """Every key gets the g.co/r/ prefix; values are unchanged; nothing else is added."""
    labels = translate_resource_labels({"testOne": "testTwo", "another": "entry"})
    assert labels == {"g.co/r/testOne": "testTwo", "g.co/r/another": "entry"}


def test_resource_labels_empty() -> None:
    """Empty input yields an empty dict, not None."""
    assert translate_resource_labels({}) == {}


def test_resource_labels_reject_non_string_values() -> None:
    """Values are not coerced inside the label translator."""
    with pytest.raises(TypeError):
        translate_resource_labels({"port": 8080})  # type: ignore[dict-item]
