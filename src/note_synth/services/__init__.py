"""Application services: assistant registry, run lifecycle, ingestion, export."""

from __future__ import annotations

from note_synth.services.assistant_registry import AssistantRegistry
from note_synth.services.document_ingestor import DocumentIngestor, append_to_input
from note_synth.services.result_serializer import ResultSerializer
from note_synth.services.run_orchestrator import RunOrchestrator, extract_assistant_segments
from note_synth.services.submission_service import SubmissionService

__all__ = [
    "AssistantRegistry",
    "DocumentIngestor",
    "ResultSerializer",
    "RunOrchestrator",
    "SubmissionService",
    "append_to_input",
    "extract_assistant_segments",
]
