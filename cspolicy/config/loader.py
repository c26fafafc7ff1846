"""Env var config loading with pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent / "presets.yaml"


class PolicySettings(BaseSettings):
    """Policy configuration, overridable through ``CSP_*`` env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Presets: "strict", "balanced" (default), "permissive"
    preset: str = "balanced"
    presets_file: str = str(_PRESETS_PATH)

    # Forces Content-Security-Policy-Report-Only regardless of preset
    report_only: bool = False


_settings: PolicySettings | None = None


def get_settings() -> PolicySettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> PolicySettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = PolicySettings()
    logger.info("config_loaded", preset=_settings.preset, report_only=_settings.report_only)
    return _settings
