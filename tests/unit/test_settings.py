"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from playbook_verifier.errors import ConfigError
from playbook_verifier.settings import Settings, load_settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("PLAYBOOK_SOURCE", "PLAYBOOK_EXCLUDABLE_KEYS", "PLAYBOOK_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()
        assert settings.source == ""
        assert settings.excludable_keys == ["hosts", "vars"]
        assert settings.log_level == "WARNING"
        assert settings.log_json is False

    def test_excludable_keys_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAYBOOK_EXCLUDABLE_KEYS", '["hosts"]')
        assert Settings().excludable_keys == ["hosts"]


class TestLoadSettings:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAYBOOK_SOURCE", "/srv/play.yml")
        assert load_settings().source == "/srv/play.yml"

    def test_malformed_list_is_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAYBOOK_EXCLUDABLE_KEYS", "hosts,vars")
        with pytest.raises(ConfigError, match="invalid configuration"):
            load_settings()

    def test_invalid_value_is_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLAYBOOK_LOG_JSON", "sometimes")
        with pytest.raises(ConfigError):
            load_settings()
