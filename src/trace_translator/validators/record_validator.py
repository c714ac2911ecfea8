"""
Validate translated span records against Cloud Trace v2 limits.

Validates:
- Display name length
- Attribute count, key length and string value length (span, annotations, links)
- Annotation and link counts

Byte limits are errors since the backend rejects the span. Count limits are
warnings since the backend keeps the span and drops the extras.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum

from ..types import Attributes, SpanRecord

MAX_DISPLAY_NAME_BYTES = 128
MAX_ATTRIBUTES = 32
MAX_ATTRIBUTE_KEY_BYTES = 128
MAX_ATTRIBUTE_VALUE_BYTES = 256
MAX_ANNOTATIONS = 32
MAX_LINKS = 128


class Severity(IntEnum):
    """Issue severity; higher is worse."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LimitIssue:
    """One limit check that a record did not pass."""

    severity: Severity
    span_id: str
    location: str
    message: str
    limit: int | None = None
    actual: int | None = None

    def __str__(self) -> str:
        text = f"{self.severity.name.lower()}: span {self.span_id} {self.location}"
        text += f": {self.message}"
        if self.limit is not None:
            text += f" (limit {self.limit})"
        return text


@dataclass
class ValidationReport:
    """Issues found in one record or a batch, in the order they were found."""

    issues: list[LimitIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(issue.severity < Severity.ERROR for issue in self.issues)

    @property
    def errors(self) -> list[LimitIssue]:
        return [issue for issue in self.issues if issue.severity >= Severity.ERROR]

    @property
    def warnings(self) -> list[LimitIssue]:
        """Non-fatal issues, INFO included."""
        return [issue for issue in self.issues if issue.severity < Severity.ERROR]

    def __str__(self) -> str:
        if not self.issues:
            return "no issues"
        head = "invalid" if not self.valid else "valid with notes"
        lines = [f"{head} ({len(self.issues)} issue(s))"]
        lines.extend(f"  {issue}" for issue in self.issues)
        return "\n".join(lines)


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8"))


class RecordValidator:
    """Check SpanRecords against the limits Cloud Trace enforces on ingestion."""

    def validate(self, record: SpanRecord) -> ValidationReport:
        """Validate a single span record."""
        return ValidationReport(issues=list(self._check_record(record)))

    def validate_records(self, records: Iterable[SpanRecord]) -> ValidationReport:
        """Validate all records of a batch into one report."""
        return ValidationReport(
            issues=[issue for record in records for issue in self._check_record(record)]
        )

    def _check_record(self, record: SpanRecord) -> Iterator[LimitIssue]:
        span_id = record.span_id

        name_bytes = _byte_len(record.display_name.value)
        if name_bytes > MAX_DISPLAY_NAME_BYTES:
            yield LimitIssue(
                Severity.ERROR,
                span_id,
                "displayName",
                f"display name is {name_bytes} bytes",
                MAX_DISPLAY_NAME_BYTES,
                name_bytes,
            )

        yield from self._check_attributes(span_id, "attributes", record.attributes)

        annotations = record.time_events.time_event
        yield from self._check_count(span_id, "timeEvents", len(annotations), MAX_ANNOTATIONS)
        for index, event in enumerate(annotations):
            yield from self._check_attributes(
                span_id, f"timeEvents[{index}].attributes", event.annotation.attributes
            )

        links = record.links.link
        yield from self._check_count(span_id, "links", len(links), MAX_LINKS)
        for index, link in enumerate(links):
            yield from self._check_attributes(
                span_id, f"links[{index}].attributes", link.attributes
            )

        if record.status is None:
            yield LimitIssue(
                Severity.INFO, span_id, "status", "unset; the backend treats the span as OK"
            )

    @staticmethod
    def _check_count(span_id: str, location: str, count: int, limit: int) -> Iterator[LimitIssue]:
        if count > limit:
            yield LimitIssue(
                Severity.WARNING,
                span_id,
                location,
                f"{count} entries; the backend drops the extras",
                limit,
                count,
            )

    def _check_attributes(
        self, span_id: str, location: str, attributes: Attributes
    ) -> Iterator[LimitIssue]:
        attribute_map = attributes.attribute_map
        yield from self._check_count(span_id, location, len(attribute_map), MAX_ATTRIBUTES)

        for key, value in attribute_map.items():
            key_bytes = _byte_len(key)
            if key_bytes > MAX_ATTRIBUTE_KEY_BYTES:
                yield LimitIssue(
                    Severity.ERROR,
                    span_id,
                    f"{location}.{key}",
                    f"key is {key_bytes} bytes",
                    MAX_ATTRIBUTE_KEY_BYTES,
                    key_bytes,
                )
            if value.string_value is None:
                continue
            value_bytes = _byte_len(value.string_value.value)
            if value_bytes > MAX_ATTRIBUTE_VALUE_BYTES:
                yield LimitIssue(
                    Severity.ERROR,
                    span_id,
                    f"{location}.{key}",
                    f"string value is {value_bytes} bytes",
                    MAX_ATTRIBUTE_VALUE_BYTES,
                    value_bytes,
                )
