"""
Attribute key canonicalization and attribute set translation.

OpenTelemetry semantic-convention keys that Cloud Trace renders specially are rewritten
to the backend's path-style labels (http.status_code -> /http/status_code). Every
translated attribute set also carries the g.co/agent label identifying this library.
"""

from collections.abc import Mapping
from types import MappingProxyType

from ..config import TranslatorConfig, agent_label, get_default_config
from ..types import AttributeValue, Attributes
from .values import encode_value, truncatable_string

AGENT_LABEL_KEY = "g.co/agent"

# Semantic key -> Cloud Trace label. Read-only; extend by adding entries.
ATTRIBUTE_KEY_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "http.host": "/http/host",
        "http.method": "/http/method",
        "http.status_code": "/http/status_code",
        "http.url": "/http/url",
        "http.route": "/http/route",
        "http.user_agent": "/http/user_agent",
        "http.target": "/http/path",
        "http.request_content_length": "/http/request/size",
        "http.response_content_length": "/http/response/size",
    }
)


def canonicalize_key(key: str) -> str:
    """Return the Cloud Trace label for a semantic key, or the key itself if unmapped."""
    return ATTRIBUTE_KEY_MAPPING.get(key, key)


def agent_attribute(config: TranslatorConfig | None = None) -> AttributeValue:
    """AttributeValue holding the library identification string."""
    return AttributeValue(string_value=truncatable_string(agent_label(config)))


def translate_attributes(
    attributes: Mapping[str, str | bool | int | float] | None,
    fixed: Mapping[str, AttributeValue] | None = None,
    config: TranslatorConfig | None = None,
) -> Attributes:
    """
    Build a Cloud Trace attribute set.

    Merge order: translated source attributes, then the pre-encoded fixed entries,
    then the agent label, each overwriting earlier entries with the same key.
    Neither input mapping is modified.

    Args:
        attributes: Source attributes (e.g. span.attributes); None means empty.
        fixed: Already-encoded entries to overlay (e.g. resource labels).
        config: Translator config; the process default when None.

    Returns:
        Attributes with a read-only attribute_map.
    """
    cfg = config or get_default_config()
    attribute_map: dict[str, AttributeValue] = {}

    for key, value in (attributes or {}).items():
        attribute_map[canonicalize_key(key)] = encode_value(value, cfg.max_attribute_value_bytes)

    for key, encoded in (fixed or {}).items():
        if not isinstance(encoded, AttributeValue):
            raise TypeError(
                f"Fixed attribute {key!r} must be an AttributeValue, got {type(encoded).__name__}"
            )
        attribute_map[key] = encoded

    attribute_map[AGENT_LABEL_KEY] = agent_attribute(cfg)
    return Attributes(attribute_map=MappingProxyType(attribute_map))
