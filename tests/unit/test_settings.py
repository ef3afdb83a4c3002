"""Tests for configuration defaults, env overrides and startup validation."""

from __future__ import annotations

import logging

import pytest

from note_synth.core.config import (
    DEFAULT_USE_CASE_ASSISTANTS,
    AppSettings,
    AssistantServiceConfig,
    AuthConfig,
    OrchestrationConfig,
    RegistryConfig,
)
from note_synth.core.startup_checks import validate_settings


class TestDefaults:
    def test_orchestration_defaults(self) -> None:
        config = OrchestrationConfig()
        assert config.poll_interval_seconds == 8.0
        assert config.max_wait_seconds is None

    def test_registry_defaults(self) -> None:
        config = RegistryConfig()
        assert config.use_case_assistants == DEFAULT_USE_CASE_ASSISTANTS
        assert "tuhi" not in config.use_case_assistants
        assert config.summary_assistant_id == DEFAULT_USE_CASE_ASSISTANTS["summary"]

    def test_defaults_are_not_shared(self) -> None:
        first = RegistryConfig()
        first.use_case_assistants["discharge"] = "asst_changed"
        assert RegistryConfig().use_case_assistants["discharge"] == DEFAULT_USE_CASE_ASSISTANTS["discharge"]


class TestEnvOverrides:
    def test_service_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTESYNTH_ASSISTANTS_ENDPOINT", "https://env.openai.azure.com")
        monkeypatch.setenv("NOTESYNTH_ASSISTANTS_API_KEY", "env-key")
        config = AssistantServiceConfig()
        assert config.endpoint == "https://env.openai.azure.com"
        assert config.api_key == "env-key"

    def test_mapping_from_json_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTESYNTH_REGISTRY_USE_CASE_ASSISTANTS", '{"discharge": "asst_env"}')
        assert RegistryConfig().use_case_assistants == {"discharge": "asst_env"}

    def test_poll_interval_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTESYNTH_ORCHESTRATION_POLL_INTERVAL_SECONDS", "2.5")
        assert AppSettings().orchestration.poll_interval_seconds == 2.5

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            OrchestrationConfig(poll_interval_seconds=-1)


class TestValidateSettings:
    def test_valid_settings_pass(self, settings: AppSettings) -> None:
        validate_settings(settings)

    def test_missing_endpoint(self) -> None:
        settings = AppSettings(assistants=AssistantServiceConfig(endpoint="", api_key="k"))
        with pytest.raises(ValueError, match="NOTESYNTH_ASSISTANTS_ENDPOINT is required"):
            validate_settings(settings)

    def test_non_http_endpoint(self) -> None:
        settings = AppSettings(assistants=AssistantServiceConfig(endpoint="ftp://x", api_key="k"))
        with pytest.raises(ValueError, match="http"):
            validate_settings(settings)

    def test_placeholder_key(self) -> None:
        settings = AppSettings(assistants=AssistantServiceConfig(endpoint="https://x"))
        with pytest.raises(ValueError, match="NOTESYNTH_ASSISTANTS_API_KEY is required"):
            validate_settings(settings)

    def test_auth_without_keys(self, settings: AppSettings) -> None:
        settings.auth = AuthConfig(enabled=True, api_keys=[])
        with pytest.raises(ValueError, match="no API keys"):
            validate_settings(settings)

    def test_warns_on_plain_http_and_fast_polling(
        self, settings: AppSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings.assistants = AssistantServiceConfig(endpoint="http://localhost:8080", api_key="k")
        with caplog.at_level(logging.WARNING, logger="note_synth.core.startup_checks"):
            validate_settings(settings)
        messages = " ".join(r.getMessage() for r in caplog.records)
        assert "not using TLS" in messages
        assert "below 1s" in messages
