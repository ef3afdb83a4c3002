"""Azure OpenAI Assistants API provider."""

from __future__ import annotations

from note_synth.providers.azure_assistants.client import AzureAssistantsClient

__all__ = ["AzureAssistantsClient"]
