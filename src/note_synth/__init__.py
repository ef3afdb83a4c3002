"""note-synth: route clinical text to pre-configured assistants and export the result.

Usage::

    from note_synth import (
        AppSettings, AssistantRegistry, RunOrchestrator,
        DocumentIngestor, ResultSerializer, SubmissionService,
    )
"""

from __future__ import annotations

from note_synth.core.config import AppSettings
from note_synth.exceptions import (
    AssistantServiceError,
    IngestionDegraded,
    MessageSubmissionFailed,
    NoteSynthError,
    OrchestrationError,
    OrchestrationUnexpectedError,
    RegistryUnavailable,
    RunCancelled,
    RunEndedAbnormally,
    SerializationFailed,
    ThreadCreationFailed,
    UnresolvedAssistant,
)
from note_synth.models import (
    AssistantSummary,
    ExportFailure,
    ExportFormat,
    ExportSuccess,
    PlainTextContent,
    ResultMessage,
    StructuredHtmlContent,
    UploadedDocument,
    UseCase,
)
from note_synth.providers.azure_assistants.client import AzureAssistantsClient
from note_synth.services.assistant_registry import AssistantRegistry
from note_synth.services.document_ingestor import DocumentIngestor
from note_synth.services.result_serializer import ResultSerializer
from note_synth.services.run_orchestrator import RunOrchestrator
from note_synth.services.submission_service import SubmissionService

__all__ = [
    # Config
    "AppSettings",
    # Models
    "AssistantSummary",
    "ExportFailure",
    "ExportFormat",
    "ExportSuccess",
    "PlainTextContent",
    "ResultMessage",
    "StructuredHtmlContent",
    "UploadedDocument",
    "UseCase",
    # Services
    "AssistantRegistry",
    "AzureAssistantsClient",
    "DocumentIngestor",
    "ResultSerializer",
    "RunOrchestrator",
    "SubmissionService",
    # Errors
    "AssistantServiceError",
    "IngestionDegraded",
    "MessageSubmissionFailed",
    "NoteSynthError",
    "OrchestrationError",
    "OrchestrationUnexpectedError",
    "RegistryUnavailable",
    "RunCancelled",
    "RunEndedAbnormally",
    "SerializationFailed",
    "ThreadCreationFailed",
    "UnresolvedAssistant",
]
