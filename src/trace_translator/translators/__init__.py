"""Translators from OpenTelemetry SDK data to Cloud Trace wire types."""

from .attributes import (
    AGENT_LABEL_KEY,
    ATTRIBUTE_KEY_MAPPING,
    agent_attribute,
    canonicalize_key,
    translate_attributes,
)
from .spans import (
    RESOURCE_LABEL_PREFIX,
    resolve_display_name,
    translate_links,
    translate_resource_labels,
    translate_span,
    translate_span_kind,
    translate_status,
    translate_status_record,
    translate_time_events,
    translate_timestamp,
)
from .values import encode_value, format_float, truncatable_string

__all__ = [
    "AGENT_LABEL_KEY",
    "ATTRIBUTE_KEY_MAPPING",
    "RESOURCE_LABEL_PREFIX",
    "agent_attribute",
    "canonicalize_key",
    "encode_value",
    "format_float",
    "resolve_display_name",
    "translate_attributes",
    "translate_links",
    "translate_resource_labels",
    "translate_span",
    "translate_span_kind",
    "translate_status",
    "translate_status_record",
    "translate_time_events",
    "translate_timestamp",
    "truncatable_string",
]
