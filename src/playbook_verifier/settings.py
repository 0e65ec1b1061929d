"""Verifier settings via environment variables."""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from playbook_verifier.errors import ConfigError

__all__ = ["Settings", "load_settings"]


class Settings(BaseSettings):
    """Central configuration — all values from environment."""

    model_config = SettingsConfigDict(env_prefix="PLAYBOOK_")

    # PLAYBOOK_SOURCE: path to the playbook; empty means stdin
    source: str = ""

    # Top-level keys a playbook may declare as excluded from signing
    excludable_keys: list[str] = ["hosts", "vars"]

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False


def load_settings() -> Settings:
    """Read settings from the environment, reporting bad values as ConfigError."""
    try:
        return Settings()
    except (SettingsError, ValidationError) as exc:
        raise ConfigError("invalid configuration", reason=str(exc)) from exc
