"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import Depends, FastAPI

from note_synth.api.auth import require_auth
from note_synth.api.middleware.error_handler import register_error_handlers
from note_synth.api.routes import assistants, documents, export, health, process
from note_synth.core.config import APIConfig, AppSettings
from note_synth.core.logging_config import setup_logging
from note_synth.core.startup_checks import validate_settings
from note_synth.services.document_ingestor import DocumentIngestor
from note_synth.services.result_serializer import ResultSerializer
from note_synth.services.submission_service import SubmissionService


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("note-synth")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def configure_state(
    app: FastAPI,
    settings: AppSettings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """Attach settings and per-process services to ``app.state``."""
    app.state.settings = settings
    app.state.submission_service = SubmissionService(settings, transport=transport)
    app.state.document_ingestor = DocumentIngestor(settings.ingestion)
    app.state.result_serializer = ResultSerializer(settings.pdf)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup/shutdown lifecycle."""
    settings = AppSettings()
    validate_settings(settings)
    setup_logging(settings.observability)
    configure_state(app, settings)
    yield


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(assistants.router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(process.router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(documents.router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(export.router, prefix="/api", dependencies=[Depends(require_auth)])
    register_error_handlers(app)


_api_config = APIConfig()

app = FastAPI(
    title=_api_config.title,
    description=_api_config.description,
    version=_get_version(),
    lifespan=lifespan,
)
include_routers(app)
