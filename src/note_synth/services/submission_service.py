"""One submit cycle: resolve the assistant, run it, shape the result for display."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

import httpx

from note_synth.core.config import AppSettings
from note_synth.exceptions import OrchestrationError, UnresolvedAssistant
from note_synth.formatters.display import format_for_display
from note_synth.models import AssistantSummary, SubmissionResult, UseCase
from note_synth.providers.azure_assistants.client import AzureAssistantsClient
from note_synth.services.assistant_registry import AssistantRegistry
from note_synth.services.run_orchestrator import RunOrchestrator

log = logging.getLogger(__name__)


class SubmissionService:
    """Glue between the registry, the orchestrator and display formatting.

    A new :class:`AzureAssistantsClient` is opened per call; nothing is
    shared between submissions.
    """

    def __init__(self, settings: AppSettings, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._settings = settings
        self._transport = transport

    def _client(self) -> AzureAssistantsClient:
        return AzureAssistantsClient(self._settings.assistants, transport=self._transport)

    async def list_templates(self) -> list[AssistantSummary]:
        async with self._client() as client:
            registry = AssistantRegistry(self._settings.registry, client)
            return await registry.list_template_assistants()

    async def submit(
        self,
        input_text: str,
        use_case: Union[UseCase, str],
        manual_assistant_id: Optional[str] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SubmissionResult:
        """Process *input_text* with the assistant for *use_case*.

        Orchestration errors are returned as user-visible text, not raised.

        Raises:
            ValueError: If *input_text* is blank.
        """
        use_case = UseCase(use_case)
        if not input_text.strip():
            raise ValueError("Input text is empty")

        registry = AssistantRegistry(self._settings.registry)
        try:
            assistant_id = registry.resolve(use_case, manual_assistant_id)
        except UnresolvedAssistant as e:
            log.warning("Submission rejected: %s", e)
            text = f"Error: {e}"
            return SubmissionResult(
                use_case=use_case, text=text, display=text, ok=False, error_kind=type(e).__name__
            )

        log.info("Processing use case %s with assistant %s", use_case.value, assistant_id)
        async with self._client() as client:
            orchestrator = RunOrchestrator(
                client,
                self._settings.orchestration,
                summary_assistant_id=registry.summary_assistant_id,
            )
            try:
                result = await orchestrator.execute(input_text, assistant_id, cancel_event=cancel_event)
            except OrchestrationError as e:
                text = e.user_message()
                return SubmissionResult(
                    use_case=use_case,
                    assistant_id=assistant_id,
                    text=text,
                    display=text,
                    ok=False,
                    error_kind=type(e).__name__,
                )

        return SubmissionResult(
            use_case=use_case,
            assistant_id=assistant_id,
            text=result.text,
            display=format_for_display(use_case, result.text),
        )
