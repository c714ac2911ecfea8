"""Shared fixtures."""

import os

import pytest

from trace_translator.config import TranslatorConfig, get_default_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Drop TRACE_TRANSLATOR_* env vars and the cached default config around each test."""
    for name in list(os.environ):
        if name.startswith("TRACE_TRANSLATOR_"):
            monkeypatch.delenv(name)
    get_default_config.cache_clear()
    yield
    get_default_config.cache_clear()


@pytest.fixture
def config() -> TranslatorConfig:
    """Config with pinned versions so agent labels are predictable."""
    return TranslatorConfig(sdk_version="1.2.3", exporter_version="0.9.0")


@pytest.fixture
def agent_label_text() -> str:
    return "opentelemetry-java 1.2.3; google-cloud-trace-exporter 0.9.0"
