"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from note_synth.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_endpoint(settings)
    _check_api_key(settings)
    _check_auth(settings)
    _check_polling(settings)


def _check_endpoint(settings: AppSettings) -> None:
    endpoint = settings.assistants.endpoint
    if not endpoint:
        raise ValueError(
            "NOTESYNTH_ASSISTANTS_ENDPOINT is required. "
            "Set it to the assistant service base URL."
        )
    if not endpoint.startswith(("https://", "http://")):
        raise ValueError(f"NOTESYNTH_ASSISTANTS_ENDPOINT must be an http(s) URL, got {endpoint!r}")
    if endpoint.startswith("http://"):
        log.warning("Assistant service endpoint is not using TLS: %s", endpoint)


def _check_api_key(settings: AppSettings) -> None:
    """Reject placeholder API keys."""
    if settings.assistants.api_key in ("no-key", ""):
        raise ValueError(
            "NOTESYNTH_ASSISTANTS_API_KEY is required. "
            "Set it via environment variable or secrets manager."
        )


def _check_auth(settings: AppSettings) -> None:
    """Reject auth enabled with no credentials, the API would be fully locked."""
    if settings.auth.enabled and not settings.auth.api_keys:
        raise ValueError(
            "NOTESYNTH_AUTH_ENABLED=true but no API keys configured. "
            "All authenticated requests would be rejected. "
            "Set NOTESYNTH_AUTH_API_KEYS, or disable auth."
        )


def _check_polling(settings: AppSettings) -> None:
    if settings.orchestration.poll_interval_seconds < 1.0:
        log.warning(
            "Poll interval %.2fs is below 1s; the assistant service may rate-limit run lookups",
            settings.orchestration.poll_interval_seconds,
        )
