"""Global exception handler mapping domain exceptions to HTTP responses.

Routes return expected failures (unresolved assistants, failed runs, failed
exports) as response bodies.  Anything from the hierarchy that still escapes
a route is reported as a JSON 500 with its type.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from note_synth.exceptions import NoteSynthError

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(NoteSynthError)
    async def handle_note_synth_error(request: Request, exc: NoteSynthError) -> JSONResponse:
        log.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})
