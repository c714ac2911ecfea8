"""
Scalar attribute encoding.

OpenTelemetry scalar attribute values (str, bool, int, float) map onto the Cloud Trace
AttributeValue union. Floats have no native field in the backend schema and are sent
as text in the same form the Java exporter produces (`Double.toString`):
plain decimals between 1e-3 and 1e7, `1.0E16` style outside that range, and
`NaN`, `Infinity`, `-Infinity` for the non-finite values.
"""

import logging
import math
from decimal import Decimal
from functools import singledispatch

from ..types import AttributeValue, TruncatableString

logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Magnitudes rendered without an exponent.
_PLAIN_FLOAT_MIN = 1e-3
_PLAIN_FLOAT_MAX = 1e7


def _truncate_utf8(value: str, max_bytes: int) -> tuple[str, int]:
    """Cut value to at most max_bytes of UTF-8 without splitting a character."""
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value, 0
    kept = encoded[:max_bytes].decode("utf-8", errors="ignore")
    return kept, len(encoded) - len(kept.encode("utf-8"))


def truncatable_string(value: str, max_bytes: int | None = None) -> TruncatableString:
    """
    Wrap a string for the backend.

    Args:
        value: String to wrap; None is a caller error.
        max_bytes: UTF-8 byte limit, or None to keep the string whole.

    Raises:
        TypeError: value is None or not a str.
    """
    if value is None:
        raise TypeError("truncatable_string() requires a string, got None")
    if not isinstance(value, str):
        raise TypeError(f"truncatable_string() requires a string, got {type(value).__name__}")
    if max_bytes is None:
        return TruncatableString(value=value, truncated_byte_count=0)
    kept, dropped = _truncate_utf8(value, max_bytes)
    if dropped:
        logger.warning("Truncated string by %d bytes to fit %d-byte limit", dropped, max_bytes)
    return TruncatableString(value=kept, truncated_byte_count=dropped)


def format_float(value: float) -> str:
    """Render a float the way Java's Double.toString does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    magnitude = abs(value)
    if magnitude == 0.0 or _PLAIN_FLOAT_MIN <= magnitude < _PLAIN_FLOAT_MAX:
        # repr never uses an exponent in this range and always keeps ".0".
        return repr(value)
    shortest = Decimal(repr(magnitude))
    digits = "".join(map(str, shortest.as_tuple().digits)).rstrip("0") or "0"
    sign = "-" if value < 0 else ""
    return f"{sign}{digits[0]}.{digits[1:] or '0'}E{shortest.adjusted()}"


@singledispatch
def _encode(value: object, max_bytes: int | None) -> AttributeValue:
    raise TypeError(
        f"Unsupported attribute value type {type(value).__name__}; "
        "expected str, bool, int or float"
    )


@_encode.register
def _(value: str, max_bytes: int | None) -> AttributeValue:
    return AttributeValue(string_value=truncatable_string(value, max_bytes))


@_encode.register
def _(value: bool, max_bytes: int | None) -> AttributeValue:
    return AttributeValue(bool_value=value)


@_encode.register
def _(value: int, max_bytes: int | None) -> AttributeValue:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"Integer attribute value {value} does not fit in int64")
    return AttributeValue(int_value=value)


@_encode.register
def _(value: float, max_bytes: int | None) -> AttributeValue:
    return AttributeValue(string_value=truncatable_string(format_float(value), max_bytes))


def encode_value(value: str | bool | int | float, max_bytes: int | None = None) -> AttributeValue:
    """Encode one scalar attribute value; other types raise TypeError."""
    return _encode(value, max_bytes)
