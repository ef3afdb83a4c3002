"""Async REST client for the Azure OpenAI Assistants API.

Covers the calls the run lifecycle and template discovery rely on::

    POST /threads
    POST /threads/{id}/messages
    POST /threads/{id}/runs
    GET  /threads/{id}/runs/{run_id}
    GET  /threads/{id}/messages
    GET  /assistants

Every request carries the ``api-key`` header and the ``api-version`` query
parameter from :class:`AssistantServiceConfig`.  No retries are made.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from note_synth.core.config import AssistantServiceConfig
from note_synth.exceptions import AssistantServiceError, RegistryUnavailable
from note_synth.models import AssistantSummary, Run

log = logging.getLogger(__name__)


class AzureAssistantsClient:
    """Thin wrapper over ``httpx.AsyncClient`` for one orchestration cycle.

    Use as an async context manager so the connection pool is closed::

        async with AzureAssistantsClient(settings.assistants) as client:
            thread_id = await client.create_thread()
    """

    def __init__(
        self,
        config: AssistantServiceConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.endpoint.rstrip("/") + "/openai",
            params={"api-version": config.api_version},
            headers={"api-key": config.api_key, "Content-Type": "application/json"},
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AzureAssistantsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    # ── Threads / messages / runs ────────────────────────────────────

    async def create_thread(self) -> str:
        """Allocate a fresh conversation thread and return its id."""
        data = await self._request("POST", "/threads", json={})
        return data["id"]

    async def create_message(self, thread_id: str, content: str, role: str = "user") -> dict[str, Any]:
        """Append a message to *thread_id*."""
        return await self._request(
            "POST",
            f"/threads/{thread_id}/messages",
            json={"role": role, "content": content},
        )

    async def create_run(self, thread_id: str, assistant_id: str) -> Run:
        """Start executing *assistant_id* against *thread_id*."""
        data = await self._request(
            "POST",
            f"/threads/{thread_id}/runs",
            json={"assistant_id": assistant_id},
        )
        return Run.model_validate({"thread_id": thread_id, "assistant_id": assistant_id, **data})

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        data = await self._request("GET", f"/threads/{thread_id}/runs/{run_id}")
        return Run.model_validate({"thread_id": thread_id, "id": run_id, **data})

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]:
        """Return the thread's messages in service order (newest first by default)."""
        data = await self._request("GET", f"/threads/{thread_id}/messages")
        return list(data.get("data", []))

    # ── Assistants ───────────────────────────────────────────────────

    async def list_assistants(self) -> list[AssistantSummary]:
        """List all assistants on the account.

        Raises:
            RegistryUnavailable: On transport failure, non-success status, or a
                listing body that is not a list of assistant objects.
        """
        try:
            data = await self._request("GET", "/assistants")
        except AssistantServiceError as e:
            raise RegistryUnavailable(str(e)) from e

        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise RegistryUnavailable(
                f"Malformed assistant listing: expected a list under 'data', got {type(items).__name__}"
            )
        try:
            return [AssistantSummary.model_validate(item) for item in items]
        except ValidationError as e:
            raise RegistryUnavailable(f"Malformed assistant listing: {e.error_count()} invalid entries") from e

    # ── Transport ────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.warning("Assistant service %s %s failed: %s", method, path, e)
            raise AssistantServiceError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            log.warning(
                "Assistant service %s %s returned HTTP %d: %s",
                method, path, response.status_code, detail,
            )
            raise AssistantServiceError(
                f"HTTP error! status: {response.status_code} ({detail})",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise AssistantServiceError(f"{method} {path} returned invalid JSON") from e


def _error_detail(response: httpx.Response) -> str:
    """Pull the service's error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase
