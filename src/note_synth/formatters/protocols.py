"""Output formatter protocol: the contract every export format implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IOutputFormatter(Protocol):
    """Renders result text into a downloadable byte stream.

    File names and MIME types belong to :class:`~note_synth.models.ExportFormat`.
    """

    def format(self, text: str) -> bytes:
        """Render *text* into output bytes."""
        ...


__all__ = ["IOutputFormatter"]
