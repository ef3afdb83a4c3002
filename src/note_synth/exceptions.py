"""Exception hierarchy for note-synth."""

from __future__ import annotations


class NoteSynthError(Exception):
    """Base exception for all note-synth errors."""


# ── Remote service ───────────────────────────────────────────────────


class AssistantServiceError(NoteSynthError):
    """A call to the remote assistant service failed.

    ``status_code`` is ``None`` for transport failures (DNS, timeouts,
    refused connections).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ── Assistant registry ───────────────────────────────────────────────


class RegistryUnavailable(NoteSynthError):
    """The assistant listing could not be fetched."""


class UnresolvedAssistant(NoteSynthError):
    """No fixed mapping and no manual selection exist for a use case."""

    def __init__(self, use_case: str) -> None:
        super().__init__(f"No assistant configured or selected for use case {use_case!r}")
        self.use_case = use_case


# ── Orchestration ────────────────────────────────────────────────────


class OrchestrationError(NoteSynthError):
    """Base for failures of a thread/run cycle."""

    def user_message(self) -> str:
        """Text shown to the user in place of a result."""
        return f"Error: {self}"


class ThreadCreationFailed(OrchestrationError):
    """The conversation thread could not be created."""


class MessageSubmissionFailed(OrchestrationError):
    """The user message could not be posted to the thread."""


class RunEndedAbnormally(OrchestrationError):
    """The run reached a terminal status other than ``completed``."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Run ended with status: {status}")
        self.status = status

    def user_message(self) -> str:
        return str(self)


class RunCancelled(OrchestrationError):
    """Polling stopped because the caller cancelled or a deadline passed."""

    def __init__(self, reason: str = "cancelled by caller") -> None:
        super().__init__(f"Run cancelled: {reason}")
        self.reason = reason


class OrchestrationUnexpectedError(OrchestrationError):
    """Any other failure raised while driving the run lifecycle."""


# ── Documents ────────────────────────────────────────────────────────


class IngestionDegraded(NoteSynthError):
    """An upload could not be converted and was replaced by a placeholder."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SerializationFailed(NoteSynthError):
    """An export format could not be rendered."""

    def __init__(self, fmt: str, message: str) -> None:
        super().__init__(f"Could not generate {fmt} export: {message}")
        self.format = fmt
