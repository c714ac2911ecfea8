"""
Cloud Trace v2 wire types.

Frozen dataclasses mirroring the google.devtools.cloudtrace.v2 span schema. Each type
renders its REST JSON form through to_dict(): camelCase keys, int64 values as decimal
strings, timestamps as RFC 3339 with nanosecond precision.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any

_EMPTY_MAP: Mapping[str, "AttributeValue"] = MappingProxyType({})


class SpanKind(Enum):
    """Cloud Trace span kinds (google.devtools.cloudtrace.v2.Span.SpanKind)."""

    SPAN_KIND_UNSPECIFIED = 0
    INTERNAL = 1
    SERVER = 2
    CLIENT = 3
    PRODUCER = 4
    CONSUMER = 5


class LinkType(Enum):
    """Relationship of a linked span to the current span."""

    TYPE_UNSPECIFIED = 0
    CHILD_LINKED_SPAN = 1
    PARENT_LINKED_SPAN = 2


@dataclass(frozen=True)
class TruncatableString:
    """A string plus the number of UTF-8 bytes removed from it."""

    value: str
    truncated_byte_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "truncatedByteCount": self.truncated_byte_count}


@dataclass(frozen=True)
class AttributeValue:
    """Tagged union: exactly one of string_value, int_value, bool_value is set."""

    string_value: TruncatableString | None = None
    int_value: int | None = None
    bool_value: bool | None = None

    def __post_init__(self) -> None:
        populated = [
            name
            for name in ("string_value", "int_value", "bool_value")
            if getattr(self, name) is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                f"AttributeValue requires exactly one populated variant, got {populated or 'none'}"
            )

    @property
    def kind(self) -> str:
        """Name of the populated variant."""
        if self.string_value is not None:
            return "string_value"
        if self.int_value is not None:
            return "int_value"
        return "bool_value"

    def to_dict(self) -> dict[str, Any]:
        if self.string_value is not None:
            return {"stringValue": self.string_value.to_dict()}
        if self.int_value is not None:
            return {"intValue": str(self.int_value)}
        return {"boolValue": self.bool_value}


@dataclass(frozen=True)
class Attributes:
    """Attribute map of a span, annotation or link. The map is read-only."""

    attribute_map: Mapping[str, AttributeValue] = field(default_factory=lambda: _EMPTY_MAP)
    dropped_attributes_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributeMap": {k: v.to_dict() for k, v in self.attribute_map.items()},
            "droppedAttributesCount": self.dropped_attributes_count,
        }


@dataclass(frozen=True)
class Timestamp:
    """Seconds and nanoseconds since the Unix epoch."""

    seconds: int
    nanos: int

    def to_rfc3339(self) -> str:
        base = datetime.fromtimestamp(self.seconds, tz=timezone.utc)
        return f"{base:%Y-%m-%dT%H:%M:%S}.{self.nanos:09d}Z"

    def to_dict(self) -> str:
        # google.protobuf.Timestamp has a scalar JSON form.
        return self.to_rfc3339()


@dataclass(frozen=True)
class Annotation:
    description: TruncatableString
    attributes: Attributes

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description.to_dict(),
            "attributes": self.attributes.to_dict(),
        }


@dataclass(frozen=True)
class TimeEvent:
    time: Timestamp
    annotation: Annotation

    def to_dict(self) -> dict[str, Any]:
        return {"time": self.time.to_dict(), "annotation": self.annotation.to_dict()}


@dataclass(frozen=True)
class TimeEvents:
    time_event: tuple[TimeEvent, ...] = ()
    dropped_annotations_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeEvent": [e.to_dict() for e in self.time_event],
            "droppedAnnotationsCount": self.dropped_annotations_count,
        }


@dataclass(frozen=True)
class Link:
    trace_id: str
    span_id: str
    type: LinkType = LinkType.TYPE_UNSPECIFIED
    attributes: Attributes = field(default_factory=Attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "traceId": self.trace_id,
            "spanId": self.span_id,
            "type": self.type.name,
            "attributes": self.attributes.to_dict(),
        }


@dataclass(frozen=True)
class Links:
    link: tuple[Link, ...] = ()
    dropped_links_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "link": [link.to_dict() for link in self.link],
            "droppedLinksCount": self.dropped_links_count,
        }


@dataclass(frozen=True)
class Status:
    """google.rpc.Status: canonical code plus developer-facing message."""

    code: int
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class SpanRecord:
    """One Cloud Trace v2 span, ready to hand to a transport."""

    name: str
    span_id: str
    parent_span_id: str
    display_name: TruncatableString
    start_time: Timestamp
    end_time: Timestamp
    attributes: Attributes
    time_events: TimeEvents
    links: Links
    status: Status | None
    span_kind: SpanKind

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "name": self.name,
            "spanId": self.span_id,
            "displayName": self.display_name.to_dict(),
            "startTime": self.start_time.to_dict(),
            "endTime": self.end_time.to_dict(),
            "attributes": self.attributes.to_dict(),
            "timeEvents": self.time_events.to_dict(),
            "links": self.links.to_dict(),
            "spanKind": self.span_kind.name,
        }
        if self.parent_span_id:
            record["parentSpanId"] = self.parent_span_id
        if self.status is not None:
            record["status"] = self.status.to_dict()
        return record
