"""
Configuration for the Cloud Trace translator.

Values come from three layers, later layers winning:
1. Built-in defaults (installed OpenTelemetry SDK version, this package's version).
2. An optional YAML file, given explicitly or via TRACE_TRANSLATOR_CONFIG.
3. TRACE_TRANSLATOR_* environment variables.

The agent label attached to every attribute set is built from sdk_version and
exporter_version using agent_format.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from opentelemetry.sdk.version import __version__ as _SDK_VERSION

from . import __version__ as _EXPORTER_VERSION

logger = logging.getLogger(__name__)

# Library identification format expected by the backend.
DEFAULT_AGENT_FORMAT = (
    "opentelemetry-java {sdk_version}; google-cloud-trace-exporter {exporter_version}"
)

CONFIG_PATH_ENV = "TRACE_TRANSLATOR_CONFIG"

_ENV_OVERRIDES = {
    "sdk_version": "TRACE_TRANSLATOR_SDK_VERSION",
    "exporter_version": "TRACE_TRANSLATOR_EXPORTER_VERSION",
    "agent_format": "TRACE_TRANSLATOR_AGENT_FORMAT",
    "max_display_name_bytes": "TRACE_TRANSLATOR_MAX_DISPLAY_NAME_BYTES",
    "max_attribute_value_bytes": "TRACE_TRANSLATOR_MAX_ATTRIBUTE_VALUE_BYTES",
    "max_description_bytes": "TRACE_TRANSLATOR_MAX_DESCRIPTION_BYTES",
}

_LIMIT_FIELDS = frozenset(
    {"max_display_name_bytes", "max_attribute_value_bytes", "max_description_bytes"}
)


@dataclass(frozen=True)
class TranslatorConfig:
    """Settings shared by every translator call."""

    sdk_version: str = _SDK_VERSION
    exporter_version: str = _EXPORTER_VERSION
    agent_format: str = DEFAULT_AGENT_FORMAT
    # Byte limits for truncatable strings; None leaves strings untouched.
    max_display_name_bytes: int | None = None
    max_attribute_value_bytes: int | None = None
    max_description_bytes: int | None = None

    def __post_init__(self) -> None:
        for placeholder in ("{sdk_version}", "{exporter_version}"):
            if placeholder not in self.agent_format:
                raise ValueError(f"agent_format must contain {placeholder}")
        try:
            self.agent_format.format(sdk_version="", exporter_version="")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid agent_format {self.agent_format!r}: {e!r}") from e
        for name in _LIMIT_FIELDS:
            limit = getattr(self, name)
            if limit is not None and (isinstance(limit, bool) or limit <= 0):
                raise ValueError(f"{name} must be a positive integer or None, got {limit!r}")


def agent_label(config: TranslatorConfig | None = None) -> str:
    """Return the library identification string (value of the g.co/agent attribute)."""
    cfg = config or get_default_config()
    return cfg.agent_format.format(
        sdk_version=cfg.sdk_version,
        exporter_version=cfg.exporter_version,
    )


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; missing file yields {}, malformed content raises ValueError."""
    if not path.exists():
        logger.debug("Config file %s not found; using defaults", path)
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _parse_limit(name: str, raw: Any) -> int | None:
    """Parse a byte limit from YAML or env: positive int, or empty/none for no limit."""
    if raw is None:
        return None
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in ("", "none", "null"):
            return None
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValueError(f"{name} must be an integer, got {raw!r}")


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    """Validate keys and normalize types for TranslatorConfig(**values)."""
    known = {f.name for f in fields(TranslatorConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    result: dict[str, Any] = {}
    for key, raw in values.items():
        if key in _LIMIT_FIELDS:
            result[key] = _parse_limit(key, raw)
        elif isinstance(raw, str):
            result[key] = raw
        else:
            # YAML reads unquoted 1.20 as the float 1.2.
            raise ValueError(
                f"{key} must be a string, got {type(raw).__name__} {raw!r}; quote it in YAML"
            )
    return result


def load_config(path: str | Path | None = None) -> TranslatorConfig:
    """
    Build a TranslatorConfig from defaults, an optional YAML file and the environment.

    Args:
        path: YAML file to read; falls back to $TRACE_TRANSLATOR_CONFIG when None.

    Returns:
        Frozen TranslatorConfig.
    """
    config = TranslatorConfig()

    if path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
        path = env_path or None
    if path is not None:
        file_values = load_yaml(Path(path))
        if file_values:
            config = replace(config, **_coerce(file_values))
            logger.debug("Loaded translator config from %s", path)

    env_values = {
        key: os.environ[env_name]
        for key, env_name in _ENV_OVERRIDES.items()
        if env_name in os.environ
    }
    if env_values:
        config = replace(config, **_coerce(env_values))
        logger.debug("Applied environment overrides: %s", ", ".join(sorted(env_values)))

    return config


@lru_cache(maxsize=1)
def get_default_config() -> TranslatorConfig:
    """Process-wide config used when callers pass config=None. Loaded once."""
    return load_config()
