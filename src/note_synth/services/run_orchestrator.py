"""Thread/run lifecycle against the remote assistant service.

One call to :meth:`RunOrchestrator.execute` is one strictly sequential cycle:

1. create a thread
2. post the input as a user message
3. start a run for the resolved assistant
4. poll the run at a fixed interval while it is ``queued``/``in_progress``
5. on ``completed`` read the assistant's reply; any other terminal status
   is reported as :class:`RunEndedAbnormally`

Polling stops early when the caller's cancel event is set or the deadline
passes, raising :class:`RunCancelled`.  The thread is never reused or deleted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional, Protocol

from note_synth.core.config import OrchestrationConfig
from note_synth.exceptions import (
    AssistantServiceError,
    MessageSubmissionFailed,
    OrchestrationError,
    OrchestrationUnexpectedError,
    RunCancelled,
    RunEndedAbnormally,
    ThreadCreationFailed,
)
from note_synth.models import ResultMessage, Run

log = logging.getLogger(__name__)


class AssistantsBackend(Protocol):
    """The subset of the assistant service the lifecycle needs."""

    async def create_thread(self) -> str: ...

    async def create_message(self, thread_id: str, content: str, role: str = "user") -> dict[str, Any]: ...

    async def create_run(self, thread_id: str, assistant_id: str) -> Run: ...

    async def retrieve_run(self, thread_id: str, run_id: str) -> Run: ...

    async def list_messages(self, thread_id: str) -> list[dict[str, Any]]: ...


class RunOrchestrator:
    """Drives a single create-thread → post → run → poll → fetch cycle."""

    def __init__(
        self,
        backend: AssistantsBackend,
        config: Optional[OrchestrationConfig] = None,
        *,
        summary_assistant_id: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._backend = backend
        self._config = config or OrchestrationConfig()
        self._summary_assistant_id = summary_assistant_id
        self._clock = clock

    async def execute(
        self,
        input_text: str,
        assistant_id: str,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        deadline: Optional[float] = None,
    ) -> ResultMessage:
        """Run *assistant_id* over *input_text* and return its reply.

        Args:
            input_text: Content posted as the single user message.
            assistant_id: Resolved assistant to run.
            cancel_event: When set, polling stops and ``RunCancelled`` is raised.
            deadline: Absolute time on this orchestrator's clock after which
                polling stops.  Defaults to ``max_wait_seconds`` from config,
                or no deadline.

        Raises:
            ThreadCreationFailed, MessageSubmissionFailed, RunEndedAbnormally,
            RunCancelled, OrchestrationUnexpectedError
        """
        if deadline is None and self._config.max_wait_seconds is not None:
            deadline = self._clock() + self._config.max_wait_seconds

        try:
            return await self._execute(input_text, assistant_id, cancel_event, deadline)
        except OrchestrationError:
            raise
        except Exception as e:
            log.exception("Error during process")
            raise OrchestrationUnexpectedError(str(e) or type(e).__name__) from e

    async def _execute(
        self,
        input_text: str,
        assistant_id: str,
        cancel_event: Optional[asyncio.Event],
        deadline: Optional[float],
    ) -> ResultMessage:
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelled()

        try:
            thread_id = await self._backend.create_thread()
        except AssistantServiceError as e:
            raise ThreadCreationFailed(f"Could not create thread: {e}") from e

        try:
            await self._backend.create_message(thread_id, input_text)
        except AssistantServiceError as e:
            raise MessageSubmissionFailed(f"Could not post message to thread {thread_id}: {e}") from e

        run = await self._backend.create_run(thread_id, assistant_id)
        log.info("Started run %s on thread %s with assistant %s", run.id, thread_id, assistant_id)

        polls = 0
        while not run.is_terminal:
            await self._pause(cancel_event, deadline)
            run = await self._backend.retrieve_run(thread_id, run.id)
            polls += 1
            log.debug("Run %s status after poll %d: %s", run.id, polls, run.status)

        log.info("Run %s finished with status %s after %d polls", run.id, run.status, polls)
        if run.status != "completed":
            raise RunEndedAbnormally(run.status)

        messages = await self._backend.list_messages(thread_id)
        return ResultMessage(
            segments=extract_assistant_segments(messages),
            joined=self._summary_assistant_id is not None and assistant_id == self._summary_assistant_id,
            thread_id=thread_id,
            run_id=run.id,
            assistant_id=assistant_id,
        )

    async def _pause(self, cancel_event: Optional[asyncio.Event], deadline: Optional[float]) -> None:
        """Wait one poll interval, or less if the deadline is nearer."""
        interval = self._config.poll_interval_seconds
        if deadline is not None:
            remaining = deadline - self._clock()
            if remaining <= 0:
                raise RunCancelled("deadline exceeded")
            interval = min(interval, remaining)

        if cancel_event is None:
            await asyncio.sleep(interval)
            return

        if cancel_event.is_set():
            raise RunCancelled()
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            return
        raise RunCancelled()


def extract_assistant_segments(messages: list[dict[str, Any]]) -> list[str]:
    """Text of each assistant-authored message with content, in list order.

    Only the first content part of a message is read; parts without a
    ``text`` payload (e.g. image files) contribute nothing.
    """
    segments: list[str] = []
    for message in messages:
        if message.get("role") != "assistant":
            continue
        content = message.get("content") or []
        if not content:
            continue
        text = content[0].get("text") if isinstance(content[0], dict) else None
        if isinstance(text, dict) and isinstance(text.get("value"), str):
            segments.append(text["value"])
    return segments
