"""Pydantic data models for note-synth.

Remote-service payloads, upload/ingestion values and export results.
"""

from __future__ import annotations

import mimetypes
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

NO_CONTENT_TEXT = "No response content available"

# ── Use cases ────────────────────────────────────────────────────────


class UseCase(str, Enum):
    """Prompt configurations a user can route text to."""

    DISCHARGE = "discharge"
    SUMMARY = "summary"
    TUHI = "tuhi"
    REVIEW = "review"
    COMMUNICATION_REVIEW = "dev_CommunicationReview"

    @property
    def label(self) -> str:
        return _USE_CASE_LABELS[self]

    @property
    def heading(self) -> str:
        return _USE_CASE_HEADINGS[self]

    @property
    def is_template(self) -> bool:
        """Template use cases pick their assistant from the discovered templates."""
        return self is UseCase.TUHI


_USE_CASE_LABELS: dict[UseCase, str] = {
    UseCase.DISCHARGE: "Discharge Summary Analysis",
    UseCase.SUMMARY: "AI Generating Discharge Summary",
    UseCase.TUHI: "Tuhi Transcripts Analysis",
    UseCase.REVIEW: "Learn Review Report",
    UseCase.COMMUNICATION_REVIEW: "Communication Review",
}

_USE_CASE_HEADINGS: dict[UseCase, str] = {
    UseCase.DISCHARGE: (
        "Analyse the Discharge Summary Report to extract and identify SNOMED CT procedure code"
    ),
    UseCase.TUHI: (
        "Analyze the medical consultation and generate an enhanced transcript "
        "based on selected template"
    ),
    UseCase.REVIEW: (
        "Add your clinical review meetings and case history to produce a draft "
        "learning review report"
    ),
    UseCase.SUMMARY: "AI generate Discharge Summary",
    UseCase.COMMUNICATION_REVIEW: "Review a consultation to get feedback on your communication",
}


class AssistantSummary(BaseModel):
    """An assistant as returned by the service listing."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None


# ── Run lifecycle ────────────────────────────────────────────────────

NON_TERMINAL_STATUSES = frozenset({"queued", "in_progress"})


class Run(BaseModel):
    """Snapshot of a run's state."""

    model_config = ConfigDict(extra="ignore")

    id: str
    thread_id: str = ""
    assistant_id: str = ""
    status: str

    @property
    def is_terminal(self) -> bool:
        return self.status not in NON_TERMINAL_STATUSES


class ResultMessage(BaseModel):
    """Assistant reply extracted from a completed run.

    ``segments`` holds the text of every assistant-authored message with
    content, in the order the service listed them (newest first).
    """

    segments: list[str] = Field(default_factory=list)
    joined: bool = False
    thread_id: str = ""
    run_id: str = ""
    assistant_id: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def text(self) -> str:
        if self.is_empty:
            return NO_CONTENT_TEXT
        if self.joined:
            return "\n".join(self.segments)
        return self.segments[0]


# ── Uploads and ingestion ────────────────────────────────────────────


class UploadedDocument(BaseModel):
    """An upload held in memory for a single ingestion."""

    filename: str
    data: bytes
    content_type: str = ""

    @property
    def effective_content_type(self) -> str:
        """Declared content type, or one guessed from the filename."""
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"

    @property
    def suffix(self) -> str:
        dot = self.filename.rfind(".")
        return self.filename[dot:].lower() if dot != -1 else ""


class PlainTextContent(BaseModel):
    """Ingested text, or a placeholder when conversion degraded."""

    kind: Literal["text"] = "text"
    text: str
    degraded_reason: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.degraded_reason is not None

    def as_input_text(self) -> str:
        return self.text


class StructuredHtmlContent(BaseModel):
    """Self-contained HTML converted from a word-processor document."""

    kind: Literal["html"] = "html"
    html: str
    messages: list[str] = Field(default_factory=list)

    def as_input_text(self) -> str:
        return self.html


IngestedContent = Annotated[
    Union[PlainTextContent, StructuredHtmlContent],
    Field(discriminator="kind"),
]


# ── Export ───────────────────────────────────────────────────────────


class ExportFormat(str, Enum):
    """Downloadable result formats."""

    TEXT = "text"
    MARKDOWN = "markdown"
    PDF = "pdf"
    DOCX = "docx"

    @property
    def filename(self) -> str:
        return _EXPORT_FILENAMES[self]

    @property
    def content_type(self) -> str:
        return _EXPORT_CONTENT_TYPES[self]


_EXPORT_FILENAMES: dict[ExportFormat, str] = {
    ExportFormat.TEXT: "result.txt",
    ExportFormat.MARKDOWN: "result.md",
    ExportFormat.PDF: "result.pdf",
    ExportFormat.DOCX: "result.docx",
}

_EXPORT_CONTENT_TYPES: dict[ExportFormat, str] = {
    ExportFormat.TEXT: "text/plain;charset=utf-8",
    ExportFormat.MARKDOWN: "text/markdown;charset=utf-8",
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
}


class ExportSuccess(BaseModel):
    """Rendered export ready for download."""

    ok: Literal[True] = True
    format: ExportFormat
    data: bytes
    filename: str
    content_type: str


class ExportFailure(BaseModel):
    """Export that could not be produced."""

    ok: Literal[False] = False
    format: ExportFormat
    reason: str


ExportResult = Union[ExportSuccess, ExportFailure]


# ── Submission ───────────────────────────────────────────────────────


class SubmissionResult(BaseModel):
    """Outcome of one submit cycle as presented to the user."""

    use_case: UseCase
    assistant_id: Optional[str] = None
    text: str
    display: str
    ok: bool = True
    error_kind: Optional[str] = None
