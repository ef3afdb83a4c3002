"""Upload endpoint: converts a document for preview and processing."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, File, Request, UploadFile

from note_synth.models import PlainTextContent, StructuredHtmlContent, UploadedDocument
from note_synth.services.document_ingestor import DocumentIngestor

router = APIRouter(tags=["documents"])


@router.post("/documents", response_model=Union[PlainTextContent, StructuredHtmlContent])
async def ingest_document(req: Request, file: UploadFile = File(...)) -> Union[PlainTextContent, StructuredHtmlContent]:
    """Convert an upload to text or HTML; unreadable files yield a placeholder."""
    ingestor: DocumentIngestor = req.app.state.document_ingestor
    document = UploadedDocument(
        filename=file.filename or "upload",
        data=await file.read(),
        content_type=file.content_type or "",
    )
    return ingestor.ingest(document)
