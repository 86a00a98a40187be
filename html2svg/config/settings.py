"""
Application Settings
===================

Application settings and environment configuration using Pydantic Settings.
Every field can be overridden with an ``HTML2SVG_``-prefixed environment
variable or a ``.env`` file.
"""

from typing import Annotated, Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json
from pathlib import Path

from html2svg.models.schemas import ListenOptions


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    server_options: ListenOptions = Field(
        default_factory=ListenOptions,
        description="Listener options as JSON: {\"unix\": path} or {\"host\": h, \"port\": p}",
    )

    # Rendering Configuration
    navigation_timeout: float = Field(
        default=10.0, gt=0, description="Deadline for page load in seconds"
    )
    settle_delay: float = Field(
        default=1.0, ge=0, description="Delay between scroll-back and capture in seconds"
    )
    viewport_width: int = Field(default=1920, gt=0, le=16384, description="Render surface width")
    viewport_height: int = Field(default=1080, gt=0, le=16384, description="Render surface height")

    # Output Configuration
    chunk_size: int = Field(default=1024, gt=0, description="Output write size in bytes")

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_executable_path: Optional[Path] = Field(
        default=None, description="Custom Chromium build to launch instead of the bundled one"
    )
    browser_args: Annotated[List[str], NoDecode] = Field(
        default=["--no-sandbox", "--disable-gpu"], description="Extra Chromium switches"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render log lines as JSON")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("browser_args", mode="before")
    @classmethod
    def parse_browser_args(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse browser switches from a JSON list or a comma-separated string."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="HTML2SVG_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
