"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``NOTESYNTH_<GROUP>_*`` env vars::

    export NOTESYNTH_ASSISTANTS_ENDPOINT=https://my-resource.openai.azure.com
    export NOTESYNTH_ASSISTANTS_API_KEY=...
    export NOTESYNTH_ORCHESTRATION_POLL_INTERVAL_SECONDS=8
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Assistants bound to the production use cases.  The template use case
# ("tuhi") has no entry; it resolves through manual selection.
DEFAULT_USE_CASE_ASSISTANTS: dict[str, str] = {
    "discharge": "asst_DeyRWVjRQjW4dyU5Zhicf8Vl",
    "review": "asst_6erSDGc8VagbJqzt6RWPT9t0",
    "summary": "asst_5r1zDFF5azJdrE9XLHcewtyg",
    "dev_CommunicationReview": "asst_VntAx623DnQiaLaRrfW7rAWF",
}


class AssistantServiceConfig(BaseSettings):
    """Remote assistant service connection.

    Env vars use ``NOTESYNTH_ASSISTANTS_`` prefix.
    """

    model_config = {"env_prefix": "NOTESYNTH_ASSISTANTS_"}

    endpoint: str = ""
    api_version: str = "2024-05-01-preview"
    api_key: str = "no-key"
    timeout: float = 60.0


class RegistryConfig(BaseSettings):
    """Use-case to assistant mapping and template discovery.

    Env vars use ``NOTESYNTH_REGISTRY_`` prefix.  The mapping is JSON::

        export NOTESYNTH_REGISTRY_USE_CASE_ASSISTANTS='{"discharge": "asst_..."}'
    """

    model_config = {"env_prefix": "NOTESYNTH_REGISTRY_"}

    use_case_assistants: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_USE_CASE_ASSISTANTS)
    )
    template_name_prefix: str = "dev"
    summary_use_case: str = "summary"

    @field_validator("use_case_assistants")
    @classmethod
    def _reject_blank_ids(cls, value: dict[str, str]) -> dict[str, str]:
        blank = sorted(k for k, v in value.items() if not v or not v.strip())
        if blank:
            raise ValueError(f"Empty assistant id for use case(s): {', '.join(blank)}")
        return value

    @property
    def summary_assistant_id(self) -> Optional[str]:
        """Assistant whose reply segments are joined with newlines."""
        return self.use_case_assistants.get(self.summary_use_case)


class OrchestrationConfig(BaseSettings):
    """Run lifecycle polling.

    Env vars use ``NOTESYNTH_ORCHESTRATION_`` prefix.  ``max_wait_seconds``
    unset means the run is polled until the service reports a terminal status.
    """

    model_config = {"env_prefix": "NOTESYNTH_ORCHESTRATION_"}

    poll_interval_seconds: float = Field(default=8.0, ge=0.0)
    max_wait_seconds: Optional[float] = Field(default=None, gt=0.0)


class IngestionConfig(BaseSettings):
    """Upload conversion settings.

    Env vars use ``NOTESYNTH_INGESTION_`` prefix.
    """

    model_config = {"env_prefix": "NOTESYNTH_INGESTION_"}

    preview_chars: int = Field(default=100, ge=0)
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, gt=0)


class PDFFormattingConfig(BaseSettings):
    """PDF export formatting.

    Env vars use ``NOTESYNTH_PDF_`` prefix::

        export NOTESYNTH_PDF_PAGE_SIZE=letter
    """

    model_config = {"env_prefix": "NOTESYNTH_PDF_"}

    page_size: Literal["letter", "a4"] = "a4"
    margin_points: float = Field(default=50.0, ge=0.0, le=216.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=12, ge=6, le=72)
    line_spacing: float = Field(default=1.5, ge=1.0, le=4.0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``NOTESYNTH_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "NOTESYNTH_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None


class APIConfig(BaseSettings):
    """HTTP API metadata.

    Env vars use ``NOTESYNTH_API_`` prefix.
    """

    model_config = {"env_prefix": "NOTESYNTH_API_"}

    title: str = "note-synth"
    description: str = "Routes clinical text to configured assistants and exports the result."


class AuthConfig(BaseSettings):
    """API key authentication for the HTTP API.

    Env vars use ``NOTESYNTH_AUTH_`` prefix.
    """

    model_config = {"env_prefix": "NOTESYNTH_AUTH_"}

    enabled: bool = False
    api_keys: list[str] = Field(default_factory=list)


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    assistants: AssistantServiceConfig = Field(default_factory=AssistantServiceConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    orchestration: OrchestrationConfig = Field(default_factory=OrchestrationConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    pdf: PDFFormattingConfig = Field(default_factory=PDFFormattingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
