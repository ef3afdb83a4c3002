"""Shared fixtures for note-synth tests."""

from __future__ import annotations

import pytest

from note_synth.core.config import (
    AppSettings,
    AssistantServiceConfig,
    OrchestrationConfig,
    RegistryConfig,
)

SUMMARY_ASSISTANT = "asst_summary"
DISCHARGE_ASSISTANT = "asst_discharge"


@pytest.fixture
def service_config() -> AssistantServiceConfig:
    return AssistantServiceConfig(
        endpoint="https://example.openai.azure.com",
        api_version="2024-05-01-preview",
        api_key="test-key",
    )


@pytest.fixture
def registry_config() -> RegistryConfig:
    return RegistryConfig(
        use_case_assistants={
            "discharge": DISCHARGE_ASSISTANT,
            "summary": SUMMARY_ASSISTANT,
            "review": "asst_review",
        },
        template_name_prefix="dev",
    )


@pytest.fixture
def fast_polling() -> OrchestrationConfig:
    """Zero-interval polling so lifecycle tests do not sleep."""
    return OrchestrationConfig(poll_interval_seconds=0.0)


@pytest.fixture
def settings(
    service_config: AssistantServiceConfig,
    registry_config: RegistryConfig,
    fast_polling: OrchestrationConfig,
) -> AppSettings:
    return AppSettings(
        assistants=service_config,
        registry=registry_config,
        orchestration=fast_polling,
    )
