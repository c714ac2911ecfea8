"""
Span-level translators and span record assembly.

Each translator converts one piece of an OpenTelemetry ReadableSpan (display name,
timestamps, events, links, status, kind, resource) into its Cloud Trace v2 form.
translate_span() composes them into a complete SpanRecord.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from opentelemetry import trace as trace_api
from opentelemetry.sdk.trace import Event, ReadableSpan

from ..config import TranslatorConfig, get_default_config
from ..types import (
    Annotation,
    AttributeValue,
    Attributes,
    Link,
    Links,
    SpanKind,
    SpanRecord,
    Status,
    TimeEvent,
    TimeEvents,
    Timestamp,
)
from .attributes import translate_attributes
from .values import encode_value, truncatable_string

logger = logging.getLogger(__name__)

NANOS_PER_SECOND = 1_000_000_000

RESOURCE_LABEL_PREFIX = "g.co/r/"

# Checked prefixes carry a trailing space; applied prefixes do not.
_ANNOTATED_PREFIXES = ("Recv. ", "Sent. ")
_SERVER_PREFIX = "Recv."
_CLIENT_PREFIX = "Sent."

# google.rpc.Code values.
_RPC_CODE_OK = 0
_RPC_CODE_UNKNOWN = 2

_STATUS_CODES: Mapping[trace_api.StatusCode, int] = MappingProxyType(
    {
        trace_api.StatusCode.UNSET: _RPC_CODE_OK,
        trace_api.StatusCode.OK: _RPC_CODE_OK,
        trace_api.StatusCode.ERROR: _RPC_CODE_UNKNOWN,
    }
)

_SPAN_KINDS: Mapping[trace_api.SpanKind, SpanKind] = MappingProxyType(
    {
        trace_api.SpanKind.INTERNAL: SpanKind.INTERNAL,
        trace_api.SpanKind.SERVER: SpanKind.SERVER,
        trace_api.SpanKind.CLIENT: SpanKind.CLIENT,
        trace_api.SpanKind.PRODUCER: SpanKind.PRODUCER,
        trace_api.SpanKind.CONSUMER: SpanKind.CONSUMER,
    }
)


def resolve_display_name(name: str, kind: trace_api.SpanKind | None) -> str:
    """
    Derive the Cloud Trace display name from a span name and kind.

    Names already annotated upstream ("Recv. x" / "Sent. x") are returned as-is;
    otherwise SERVER spans get "Recv." and CLIENT spans get "Sent." prepended.
    """
    if name is None:
        raise TypeError("resolve_display_name() requires a span name, got None")
    if name.startswith(_ANNOTATED_PREFIXES):
        return name
    if kind == trace_api.SpanKind.SERVER:
        return _SERVER_PREFIX + name
    if kind == trace_api.SpanKind.CLIENT:
        return _CLIENT_PREFIX + name
    return name


def translate_timestamp(epoch_nanos: int) -> Timestamp:
    """Split epoch nanoseconds into whole seconds and the nanosecond remainder."""
    if epoch_nanos is None:
        raise TypeError("translate_timestamp() requires epoch nanoseconds, got None")
    if epoch_nanos < 0:
        raise ValueError(f"epoch_nanos must be non-negative, got {epoch_nanos}")
    seconds, nanos = divmod(epoch_nanos, NANOS_PER_SECOND)
    return Timestamp(seconds=seconds, nanos=nanos)


def translate_time_events(
    events: Sequence[Event],
    config: TranslatorConfig | None = None,
) -> TimeEvents:
    """Convert span events to annotation time events, preserving order."""
    cfg = config or get_default_config()
    return TimeEvents(
        time_event=tuple(
            TimeEvent(
                time=translate_timestamp(event.timestamp),
                annotation=Annotation(
                    description=truncatable_string(event.name, cfg.max_description_bytes),
                    attributes=translate_attributes(event.attributes, None, cfg),
                ),
            )
            for event in events
        )
    )


def translate_links(
    links: Sequence[trace_api.Link],
    config: TranslatorConfig | None = None,
) -> Links:
    """Convert span links, preserving order."""
    cfg = config or get_default_config()
    return Links(
        link=tuple(
            Link(
                trace_id=format(link.context.trace_id, "032x"),
                span_id=format(link.context.span_id, "016x"),
                attributes=translate_attributes(link.attributes, None, cfg),
            )
            for link in links
        )
    )


def _status_code(status: trace_api.Status | trace_api.StatusCode) -> trace_api.StatusCode:
    if isinstance(status, trace_api.Status):
        return status.status_code
    if isinstance(status, trace_api.StatusCode):
        return status
    raise TypeError(f"Expected Status or StatusCode, got {type(status).__name__}")


def translate_status(status: trace_api.Status | trace_api.StatusCode) -> int:
    """Map an OpenTelemetry status to its google.rpc.Code integer (OK -> 0)."""
    return _STATUS_CODES[_status_code(status)]


def translate_status_record(
    status: trace_api.Status | trace_api.StatusCode,
) -> Status | None:
    """Full status for a span record; None when the status is UNSET."""
    code = _status_code(status)
    if code == trace_api.StatusCode.UNSET:
        return None
    message = ""
    if isinstance(status, trace_api.Status) and status.description:
        message = status.description
    return Status(code=translate_status(code), message=message)


def translate_span_kind(kind: trace_api.SpanKind | None) -> SpanKind:
    return _SPAN_KINDS.get(kind, SpanKind.SPAN_KIND_UNSPECIFIED)


def translate_resource_labels(resource: Mapping[str, str]) -> dict[str, str]:
    """Namespace resource attributes as Cloud Trace resource labels (g.co/r/<key>)."""
    labels: dict[str, str] = {}
    for key, value in resource.items():
        if not isinstance(value, str):
            raise TypeError(
                f"Resource label {key!r} must be a string, got {type(value).__name__}"
            )
        labels[RESOURCE_LABEL_PREFIX + key] = value
    return labels


def _resource_strings(attributes: Mapping[str, object]) -> dict[str, str]:
    """Render scalar resource attribute values as strings for labeling."""
    result: dict[str, str] = {}
    for key, value in attributes.items():
        if isinstance(value, str):
            result[key] = value
        elif isinstance(value, (bool, int, float)):
            result[key] = str(value)
        else:
            raise TypeError(
                f"Resource attribute {key!r} has unsupported type {type(value).__name__}"
            )
    return result


def translate_span(
    span: ReadableSpan,
    project_id: str,
    config: TranslatorConfig | None = None,
) -> SpanRecord:
    """
    Assemble the Cloud Trace record for one finished span.

    Resource attributes become g.co/r/ labels overlaid on the span attributes.

    Raises:
        ValueError: project_id is empty or the span has not ended.
    """
    if not project_id:
        raise ValueError("translate_span() requires a non-empty project_id")
    if span.end_time is None:
        raise ValueError(f"Span {span.name!r} has not ended")

    cfg = config or get_default_config()
    context = span.context
    trace_id = format(context.trace_id, "032x")
    span_id = format(context.span_id, "016x")

    resource_attributes = span.resource.attributes if span.resource else {}
    labels = translate_resource_labels(_resource_strings(resource_attributes))
    fixed: dict[str, AttributeValue] = {
        key: encode_value(value, cfg.max_attribute_value_bytes) for key, value in labels.items()
    }

    attributes = translate_attributes(span.attributes, fixed, cfg)
    time_events = translate_time_events(span.events, cfg)
    links = translate_links(span.links, cfg)

    record = SpanRecord(
        name=f"projects/{project_id}/traces/{trace_id}/spans/{span_id}",
        span_id=span_id,
        parent_span_id=format(span.parent.span_id, "016x") if span.parent else "",
        display_name=truncatable_string(
            resolve_display_name(span.name, span.kind), cfg.max_display_name_bytes
        ),
        start_time=translate_timestamp(span.start_time),
        end_time=translate_timestamp(span.end_time),
        attributes=Attributes(
            attribute_map=attributes.attribute_map,
            dropped_attributes_count=span.dropped_attributes,
        ),
        time_events=TimeEvents(
            time_event=time_events.time_event,
            dropped_annotations_count=span.dropped_events,
        ),
        links=Links(link=links.link, dropped_links_count=span.dropped_links),
        status=translate_status_record(span.status),
        span_kind=translate_span_kind(span.kind),
    )
    logger.debug("Translated span %s (%s)", span_id, record.display_name.value)
    return record
