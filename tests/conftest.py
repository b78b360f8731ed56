"""Shared test fixtures for normkit.

Provides settings, schema construction and abort-signal fixtures used
across the unit tests.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from normkit.normalizer import Normalized
from normkit.schema import Schema, json_normalizer_with_schema, parse_schema
from normkit.settings import Settings, get_settings


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with safe defaults."""
    return Settings(
        debug=False,
        log_level="WARNING",
    )


@pytest.fixture
def mock_settings(test_settings: Settings, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Mock get_settings() to return test settings."""
    from normkit import logging_config

    monkeypatch.setattr(logging_config, "get_settings", lambda: test_settings)
    return test_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Settings read from the environment must not leak between tests."""
    get_settings.cache_clear()


# =============================================================================
# SCHEMAS
# =============================================================================


@pytest.fixture
def schema() -> Callable[[dict[str, Any]], Schema]:
    """Build a schema model from a JSON mapping, failing the test if malformed."""
    return parse_schema


@pytest.fixture
def validate() -> Callable[[dict[str, Any], Any], Normalized[Any]]:
    """Validate a value against a schema given as a JSON mapping."""

    def _validate(schema_json: dict[str, Any], value: Any) -> Normalized[Any]:
        return json_normalizer_with_schema(parse_schema(schema_json)).normalize(value)

    return _validate


# =============================================================================
# ASYNC
# =============================================================================


@pytest.fixture
def abort_signal() -> asyncio.Event:
    """A fresh, unset abort signal."""
    return asyncio.Event()
