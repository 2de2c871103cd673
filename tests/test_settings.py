"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from healthcare_xpress.infrastructure import Settings, load_settings
from healthcare_xpress.infrastructure.settings import DEFAULT_DATA_FILE


def test_defaults_when_environment_empty() -> None:
    settings = load_settings({})
    assert settings.data_file == DEFAULT_DATA_FILE
    assert settings.log_level == "INFO"
    assert settings.phone_region == "SG"


def test_values_read_from_environment() -> None:
    settings = load_settings(
        {
            "HXPRESS_DATA_FILE": "/tmp/hx/book.json",
            "HXPRESS_LOG_LEVEL": "debug",
            "HXPRESS_PHONE_REGION": "my",
        }
    )
    assert settings.data_file == Path("/tmp/hx/book.json")
    assert settings.log_level == "DEBUG"
    assert settings.phone_region == "MY"


def test_blank_values_keep_defaults() -> None:
    settings = load_settings({"HXPRESS_DATA_FILE": "  ", "HXPRESS_LOG_LEVEL": ""})
    assert settings.data_file == DEFAULT_DATA_FILE
    assert settings.log_level == "INFO"


def test_os_environ_used_by_default(monkeypatch) -> None:
    monkeypatch.setenv("HXPRESS_LOG_LEVEL", "warning")
    assert load_settings().log_level == "WARNING"


def test_unknown_log_level_rejected() -> None:
    with pytest.raises(ValidationError, match="Invalid log level"):
        load_settings({"HXPRESS_LOG_LEVEL": "chatty"})


def test_phone_region_can_be_disabled() -> None:
    assert Settings(phone_region="").phone_region is None
