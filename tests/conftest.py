"""
Test Configuration
==================

Pytest configuration with shared fixtures: test settings, a fake engine
process and recording output sinks.
"""

import pytest

from html2svg.config.settings import Settings
from pydantic_settings import SettingsConfigDict

from tests.utils.mocks import FakeEngineProcess, RecordingSink


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    navigation_timeout: float = 0.2
    settle_delay: float = 0.0
    chunk_size: int = 16
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="HTML2SVG_TEST_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture
def fake_engine() -> FakeEngineProcess:
    """Fake engine process; no browser is launched."""
    return FakeEngineProcess()


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Sink recording every chunk written to it."""
    return RecordingSink()


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
