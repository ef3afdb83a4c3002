"""Upload ingestion: turns an uploaded file into text or structured HTML.

Never raises for bad input.  Conversion failures become a plain-text
placeholder so the user can keep working with the rest of the form.
"""

from __future__ import annotations

import base64
import logging
from typing import Optional, Union

from note_synth.core.config import IngestionConfig
from note_synth.exceptions import IngestionDegraded
from note_synth.ingestion.docx_html import DocxHtmlConverter, extract_raw_text
from note_synth.models import PlainTextContent, StructuredHtmlContent, UploadedDocument

log = logging.getLogger(__name__)

DOCX_SUFFIX = ".docx"


class DocumentIngestor:
    """Dispatches an upload by suffix, then content type.

    * ``.docx`` → :class:`StructuredHtmlContent`
    * ``text/*`` → :class:`PlainTextContent`
    * anything else → placeholder :class:`PlainTextContent` with a short preview
    """

    def __init__(self, config: Optional[IngestionConfig] = None) -> None:
        self._config = config or IngestionConfig()

    def ingest(self, document: UploadedDocument) -> Union[PlainTextContent, StructuredHtmlContent]:
        rejected = self._reject_oversize(document)
        if rejected is not None:
            return rejected
        if document.suffix == DOCX_SUFFIX:
            return self._ingest_docx(document)
        return self._ingest_plain(document)

    def extract_text(self, document: UploadedDocument) -> PlainTextContent:
        """Plain-text variant of :meth:`ingest` for callers that cannot show HTML."""
        rejected = self._reject_oversize(document)
        if rejected is not None:
            return rejected
        if document.suffix != DOCX_SUFFIX:
            return self._ingest_plain(document)
        try:
            return PlainTextContent(text=extract_raw_text(document.data))
        except Exception as e:
            log.error("Error extracting text from .docx %s: %s", document.filename, e)
            return PlainTextContent(
                text="[Could not extract text from file]",
                degraded_reason=f"docx text extraction failed: {e}",
            )

    def _reject_oversize(self, document: UploadedDocument) -> Optional[PlainTextContent]:
        try:
            self._check_size(document)
        except IngestionDegraded as e:
            log.warning("Rejected upload %s: %s", document.filename, e.reason)
            return PlainTextContent(
                text=f"[Error: {e.reason}. Please try again or use a smaller file.]",
                degraded_reason=e.reason,
            )
        return None

    def _check_size(self, document: UploadedDocument) -> None:
        limit = self._config.max_upload_bytes
        if len(document.data) > limit:
            raise IngestionDegraded(
                f"{document.filename} is {len(document.data)} bytes, above the {limit} byte limit"
            )

    def _ingest_docx(self, document: UploadedDocument) -> Union[PlainTextContent, StructuredHtmlContent]:
        try:
            result = DocxHtmlConverter().convert(document.data)
        except Exception as e:
            log.error("Error extracting content from .docx %s: %s", document.filename, e)
            return PlainTextContent(
                text=(
                    f"[Error: Could not extract content from {document.filename}. "
                    "Please try again or use a plain text file.]"
                ),
                degraded_reason=f"docx conversion failed: {e}",
            )

        if result.messages:
            log.info(
                "Document conversion messages for %s: %s",
                document.filename,
                "; ".join(result.messages),
            )
        return StructuredHtmlContent(html=result.html, messages=result.messages)

    def _ingest_plain(self, document: UploadedDocument) -> PlainTextContent:
        if document.effective_content_type.startswith("text/"):
            return PlainTextContent(text=document.data.decode("utf-8", errors="replace"))
        return self._placeholder(document)

    def _placeholder(self, document: UploadedDocument) -> PlainTextContent:
        encoded = base64.b64encode(document.data).decode("ascii")
        data_url = f"data:{document.effective_content_type};base64,{encoded}"
        preview = data_url[: self._config.preview_chars]
        return PlainTextContent(
            text=f"[File Uploaded: {document.filename}, Base64: {preview}...]",
            degraded_reason=f"unsupported content type {document.effective_content_type}",
        )


def append_to_input(previous: str, content: Union[PlainTextContent, StructuredHtmlContent]) -> str:
    """Append ingested content to existing input, separated by a blank line."""
    return f"{previous}\n\n{content.as_input_text()}"
