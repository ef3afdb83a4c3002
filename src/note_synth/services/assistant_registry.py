"""Assistant resolution: fixed use-case mapping plus template discovery."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from note_synth.core.config import RegistryConfig
from note_synth.exceptions import RegistryUnavailable, UnresolvedAssistant
from note_synth.models import AssistantSummary, UseCase

log = logging.getLogger(__name__)


class AssistantLister(Protocol):
    async def list_assistants(self) -> list[AssistantSummary]: ...


class AssistantRegistry:
    """Maps use cases to assistant ids.

    Production use cases are bound through ``RegistryConfig.use_case_assistants``.
    Anything else (the template use case) uses the assistant the caller
    selected from :meth:`list_template_assistants`.
    """

    def __init__(self, config: RegistryConfig, lister: Optional[AssistantLister] = None) -> None:
        self._config = config
        self._lister = lister

    @property
    def summary_assistant_id(self) -> Optional[str]:
        return self._config.summary_assistant_id

    def resolve(
        self,
        use_case: Union[UseCase, str],
        manual_assistant_id: Optional[str] = None,
    ) -> str:
        """Return the assistant id for *use_case*.

        The fixed mapping always wins over *manual_assistant_id*.

        Raises:
            UnresolvedAssistant: If the use case is unmapped and nothing was selected.
        """
        key = use_case.value if isinstance(use_case, UseCase) else use_case
        mapped = self._config.use_case_assistants.get(key)
        if mapped:
            return mapped
        if manual_assistant_id:
            return manual_assistant_id
        raise UnresolvedAssistant(key)

    async def list_template_assistants(self) -> list[AssistantSummary]:
        """Assistants eligible as templates, in service order.

        Only names starting with ``template_name_prefix`` are returned; other
        assistants on the account may belong to other consumers.  Returns an
        empty list when the listing cannot be fetched.
        """
        if self._lister is None:
            log.warning("No assistant lister configured; template list is empty")
            return []
        prefix = self._config.template_name_prefix
        try:
            assistants = await self._lister.list_assistants()
        except RegistryUnavailable as e:
            log.error("Error fetching assistants: %s", e)
            return []
        templates = [a for a in assistants if (a.name or "").startswith(prefix)]
        log.debug("Found %d template assistants out of %d", len(templates), len(assistants))
        return templates

    @staticmethod
    def default_template(templates: list[AssistantSummary]) -> Optional[str]:
        """The template pre-selected for the user: the first one listed."""
        return templates[0].id if templates else None
