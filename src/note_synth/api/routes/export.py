"""Export endpoint: downloads the result text in the requested format."""

from __future__ import annotations

from io import BytesIO

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from note_synth.models import ExportFailure, ExportFormat
from note_synth.services.result_serializer import ResultSerializer

router = APIRouter(tags=["export"])


class ExportRequest(BaseModel):
    """Result text to export."""

    text: str
    format: ExportFormat = ExportFormat.TEXT


@router.post("/export")
async def export_result(request: ExportRequest, req: Request) -> StreamingResponse:
    """Stream the rendered file, or 500 with the reason it could not be built."""
    if not request.text:
        raise HTTPException(status_code=422, detail="No result to download")

    serializer: ResultSerializer = req.app.state.result_serializer
    result = serializer.serialize(request.text, request.format)
    if isinstance(result, ExportFailure):
        raise HTTPException(status_code=500, detail=result.reason)

    return StreamingResponse(
        BytesIO(result.data),
        media_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
