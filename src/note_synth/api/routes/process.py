"""Submission endpoint: runs the selected assistant over the input text."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from note_synth.models import SubmissionResult, UseCase
from note_synth.services.submission_service import SubmissionService

log = logging.getLogger(__name__)

router = APIRouter(tags=["process"])

DISCONNECT_CHECK_SECONDS = 0.5


class ProcessRequest(BaseModel):
    """Text to process and where to route it."""

    input: str = Field(min_length=1)
    use_case: UseCase = UseCase.DISCHARGE
    assistant_id: Optional[str] = None


async def _cancel_on_disconnect(req: Request, cancel_event: asyncio.Event) -> None:
    """Set *cancel_event* once the client has gone away."""
    while not cancel_event.is_set():
        if await req.is_disconnected():
            log.info("Client disconnected from %s; cancelling run polling", req.url.path)
            cancel_event.set()
            return
        await asyncio.sleep(DISCONNECT_CHECK_SECONDS)


@router.post("/process", response_model=SubmissionResult)
async def process(request: ProcessRequest, req: Request) -> SubmissionResult:
    """Run one orchestration cycle.

    Orchestration failures come back as ``ok=false`` with the error text in
    ``text``, matching what the user sees in place of a result.  Polling
    stops when the client disconnects, or at ``max_wait_seconds`` if set.
    """
    if not request.input.strip():
        raise HTTPException(status_code=422, detail="Input text is empty")
    service: SubmissionService = req.app.state.submission_service

    cancel_event = asyncio.Event()
    watcher = asyncio.create_task(_cancel_on_disconnect(req, cancel_event))
    try:
        return await service.submit(
            request.input,
            request.use_case,
            request.assistant_id,
            cancel_event=cancel_event,
        )
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
