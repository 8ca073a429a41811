"""
Pytest configuration and shared fixtures for chronoscan testing.

Provides extractors bound to each format preference, fixed default-date
configurations and temporary configuration directories.
"""

import os

import pytest
import yaml

from chronoscan.processors.core.defaults import default_date_settings
from chronoscan.processors.core.models import DefaultDateConfig, FormatPreference
from chronoscan.processors.core.temporal_extractor import TemporalExtractor

from .fixtures.sample_data import FIXED_DEFAULT_DATE, SAMPLE_CONFIGURATIONS


@pytest.fixture
def extractor():
    """Extractor using day-first ordering"""
    return TemporalExtractor(FormatPreference.DAY_FIRST)


@pytest.fixture
def us_extractor():
    """Extractor using month-first ordering"""
    return TemporalExtractor(FormatPreference.MONTH_FIRST)


@pytest.fixture
def fixed_defaults():
    """Default date configuration pinned to FIXED_DEFAULT_DATE"""
    return DefaultDateConfig.fixed(FIXED_DEFAULT_DATE)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Temporary directory holding a default configuration file"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    with open(config_dir / "default_config.yaml", "w") as f:
        yaml.dump(SAMPLE_CONFIGURATIONS["default"], f)

    return config_dir


@pytest.fixture
def write_config(temp_config_dir):
    """Write one YAML configuration file into the temporary config directory"""
    def _write(name, data):
        with open(temp_config_dir / name, "w") as f:
            yaml.dump(data, f)
        return temp_config_dir / name
    return _write


# Test Environment Setup
@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Automatically isolate environment and process-wide state for all tests"""
    for key in list(os.environ):
        if key.startswith("CHRONOSCAN_"):
            monkeypatch.delenv(key)

    monkeypatch.setenv("CHRONOSCAN_ENV", "test")
    monkeypatch.setenv("CHRONOSCAN_LOGGING_LOG_TO_CONSOLE", "false")

    default_date_settings.reset()
    yield
    default_date_settings.reset()
