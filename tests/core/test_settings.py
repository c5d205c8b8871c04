"""Tests for application settings defaults."""

import pytest

from diag_core.settings import DrafterSettings, GradingSettings, ServiceSettings


class TestSettingsDefaults:
    def test_grading_defaults(self) -> None:
        settings = GradingSettings()
        assert settings.reject_duplicates is True
        assert settings.human_oversight_id == "human_oversight"

    def test_drafter_defaults(self) -> None:
        settings = DrafterSettings()
        assert settings.api_url.startswith("https://")
        assert settings.max_tokens == 4096
        assert settings.timeout == 60.0

    def test_service_defaults(self) -> None:
        settings = ServiceSettings()
        assert settings.name == "grading-api"
        assert settings.port == 8000
        assert settings.log_level == "INFO"


class TestSettingsEnv:
    def test_drafter_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DRAFTER_API_KEY", "secret")
        monkeypatch.setenv("DRAFTER_MAX_TOKENS", "1024")
        settings = DrafterSettings()
        assert settings.api_key == "secret"
        assert settings.max_tokens == 1024

    def test_service_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_LOG_LEVEL", "DEBUG")
        assert ServiceSettings().log_level == "DEBUG"
