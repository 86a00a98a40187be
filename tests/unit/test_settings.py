"""
Unit Tests for Settings
=======================

Environment-driven configuration.
"""

import pytest
from pydantic import ValidationError

from html2svg.config.logging import get_logging_config
from html2svg.config.settings import Settings, get_settings, reload_settings


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("HTML2SVG_NAVIGATION_TIMEOUT", "HTML2SVG_CHUNK_SIZE", "HTML2SVG_SERVER_OPTIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.navigation_timeout == 10.0
        assert settings.settle_delay == 1.0
        assert settings.chunk_size == 1024
        assert settings.viewport_width == 1920
        assert settings.viewport_height == 1080
        assert settings.server_options.unix is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HTML2SVG_NAVIGATION_TIMEOUT", "2.5")
        monkeypatch.setenv("HTML2SVG_CHUNK_SIZE", "4096")
        monkeypatch.setenv("HTML2SVG_SERVER_OPTIONS", '{"unix": "/run/html2svg.sock"}')

        settings = Settings(_env_file=None)

        assert settings.navigation_timeout == 2.5
        assert settings.chunk_size == 4096
        assert settings.server_options.unix == "/run/html2svg.sock"

    def test_server_options_host_and_port(self, monkeypatch):
        monkeypatch.setenv("HTML2SVG_SERVER_OPTIONS", '{"host": "0.0.0.0", "port": 9000}')

        settings = Settings(_env_file=None)

        assert settings.server_options.uvicorn_kwargs() == {"host": "0.0.0.0", "port": 9000}

    @pytest.mark.parametrize(
        "value, expected",
        [
            ('["--no-sandbox", "--mute-audio"]', ["--no-sandbox", "--mute-audio"]),
            ("--no-sandbox, --disable-gpu", ["--no-sandbox", "--disable-gpu"]),
        ],
    )
    def test_browser_args_parsing(self, value, expected):
        assert Settings(_env_file=None, browser_args=value).browser_args == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("--no-sandbox,--disable-gpu", ["--no-sandbox", "--disable-gpu"]),
            ("--mute-audio", ["--mute-audio"]),
            ('["--no-sandbox", "--mute-audio"]', ["--no-sandbox", "--mute-audio"]),
        ],
    )
    def test_browser_args_from_environment(self, monkeypatch, value, expected):
        monkeypatch.setenv("HTML2SVG_BROWSER_ARGS", value)

        assert Settings(_env_file=None).browser_args == expected

    def test_no_duplicate_version_field(self):
        assert "app_version" not in Settings.model_fields
        assert "app_name" not in Settings.model_fields

    @pytest.mark.parametrize(
        "field, value",
        [
            ("environment", "staging"),
            ("log_level", "verbose"),
            ("navigation_timeout", 0),
            ("chunk_size", 0),
            ("settle_delay", -1),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_log_level_is_upper_cased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_reload_replaces_global_instance(self, monkeypatch):
        monkeypatch.setenv("HTML2SVG_SETTLE_DELAY", "0.25")

        settings = reload_settings()

        assert settings.settle_delay == 0.25
        assert get_settings() is settings

        monkeypatch.delenv("HTML2SVG_SETTLE_DELAY")
        reload_settings()


class TestLoggingConfig:
    """Test that logging never targets stdout."""

    def test_handlers_write_to_stderr(self, test_settings):
        import sys

        config = get_logging_config(test_settings)

        for handler in config["handlers"].values():
            assert handler["stream"] is sys.stderr
