"""Liveness and readiness endpoints."""

from __future__ import annotations

from urllib.parse import urlsplit

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])

_REQUIRED_STATE = ("settings", "submission_service", "document_ingestor", "result_serializer")


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready", response_model=None)
async def ready(req: Request) -> dict[str, str] | JSONResponse:
    """Ready once startup attached every service; reports the assistant host in use."""
    missing = [name for name in _REQUIRED_STATE if not hasattr(req.app.state, name)]
    if missing:
        return JSONResponse(status_code=503, content={"status": "starting", "missing": missing})
    host = urlsplit(req.app.state.settings.assistants.endpoint).netloc
    return {"status": "ready", "assistant_service": host}
