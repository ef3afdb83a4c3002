"""Direct in-process fake of the orchestrator's backend protocol."""

from __future__ import annotations

from typing import Any, Optional

from note_synth.exceptions import AssistantServiceError
from note_synth.models import Run


class FakeAssistantsBackend:
    """Scripted backend recording each call by name.

    Args:
        statuses: First entry is returned by ``create_run``; the rest by
            successive ``retrieve_run`` calls (the last one repeats).
        messages: Raw message dicts returned by ``list_messages``.
        fail_on: Method name that raises ``AssistantServiceError``.
        error: Exception raised by ``fail_on`` instead of the default.
    """

    def __init__(
        self,
        *,
        statuses: Optional[list[str]] = None,
        messages: Optional[list[dict[str, Any]]] = None,
        fail_on: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._statuses = list(statuses or ["completed"])
        self._index = 0
        self._messages = list(messages or [])
        self._fail_on = fail_on
        self._error = error
        self.calls: list[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name == self._fail_on:
            raise self._error or AssistantServiceError(f"{name} failed", status_code=500)

    def _next(self) -> str:
        status = self._statuses[min(self._index, len(self._statuses) - 1)]
        self._index += 1
        return status

    async def create_thread(self) -> str:
        self._record("create_thread")
        return "thread_1"

    async def create_message(self, thread_id: str, content: str, role: str = "user") -> dict[str, Any]:
        self._record("create_message")
        return {"id": "msg_user", "role": role}

    async def create_run(self, thread_id: str, assistant_id: str) -> Run:
        self._record("create_run")
        return Run(id="run_1", thread_id=thread_id, assistant_id=assistant_id, status=self._next())

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        self._record("retrieve_run")
        return Run(id=run_id, thread_id=thread_id, status=self._next())

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]:
        self._record("list_messages")
        return list(self._messages)


def assistant_message(text: str) -> dict[str, Any]:
    return {"role": "assistant", "content": [{"type": "text", "text": {"value": text}}]}


def user_message(text: str) -> dict[str, Any]:
    return {"role": "user", "content": [{"type": "text", "text": {"value": text}}]}
