"""Configuration management for axecore using pydantic-settings.

Settings can be supplied through environment variables prefixed with
``AXECORE_`` or a ``.env`` file in the working directory.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AXE_VERSION = "4.10.2"
DEFAULT_AXE_SOURCE_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/{version}/axe.min.js"


class AxeSettings(BaseSettings):
    """Main configuration settings for axecore."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="AXECORE_",
        case_sensitive=False,
        extra="ignore",
    )

    # axe-core source
    axe_version: str = Field(DEFAULT_AXE_VERSION, description="axe-core release to download")
    axe_source_url: str = Field(
        DEFAULT_AXE_SOURCE_URL,
        description="Download URL template for axe.min.js, '{version}' is substituted",
    )
    axe_script_path: Path | None = Field(
        None, description="Local axe.min.js to use instead of downloading one"
    )
    cache_path: Path = Field(
        Path.home() / ".cache" / "axecore",
        description="Directory where downloaded axe-core scripts are kept",
    )
    download_timeout: float = Field(20.0, gt=0, description="Timeout in seconds for downloads")

    # Scanning
    frame_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for scanning a single child frame"
    )
    legacy_mode: bool = Field(False, description="Use axe.run instead of runPartial/finishRun")
    branding_application: str = Field(
        "axecore-python", description="Application name reported in axe help URLs"
    )

    # Logging
    log_level: str = Field("INFO", description="Log level for axecore loggers")
    structured_logs: bool = Field(False, description="Emit JSON structured log lines")
    log_file: Path | None = Field(None, description="Optional log file")


# Singleton instance
_settings: AxeSettings | None = None


def get_settings() -> AxeSettings:
    """Get the singleton settings instance.

    Returns:
        AxeSettings instance
    """
    global _settings

    if _settings is None:
        _settings = AxeSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
