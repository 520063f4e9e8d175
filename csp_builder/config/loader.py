"""Env var config loading with pydantic-settings."""

from __future__ import annotations

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class CspSettings(BaseSettings):
    """Builder configuration, overridden by CSP_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # True: appending a directive kind that is already present replaces it
    # in place. False: duplicates are kept and all rendered.
    deduplicate: bool = True

    log_level: str = "info"
    log_json: bool = True

    # Preset returned by presets.get_preset() when no name is given
    default_preset: str = "balanced"


_settings: CspSettings | None = None


def get_settings() -> CspSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> CspSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = CspSettings()
    logger.debug(
        "config_loaded",
        deduplicate=_settings.deduplicate,
        default_preset=_settings.default_preset,
    )
    return _settings
