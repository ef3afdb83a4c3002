"""Result export: renders result text into each downloadable format.

Rendering failures are logged and returned as :class:`ExportFailure` so the
caller can tell the user the download was not produced.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from note_synth.core.config import PDFFormattingConfig
from note_synth.exceptions import SerializationFailed
from note_synth.formatters.protocols import IOutputFormatter
from note_synth.formatters.text_formatter import MarkdownFormatter, TextFormatter
from note_synth.models import ExportFailure, ExportFormat, ExportResult, ExportSuccess

log = logging.getLogger(__name__)


class ResultSerializer:
    """Dispatches an :class:`ExportFormat` to its formatter."""

    def __init__(
        self,
        pdf_config: Optional[PDFFormattingConfig] = None,
        formatters: Optional[dict[ExportFormat, IOutputFormatter]] = None,
    ) -> None:
        self._pdf_config = pdf_config or PDFFormattingConfig()
        self._formatters: dict[ExportFormat, IOutputFormatter] = dict(formatters or {})

    def serialize(self, text: str, fmt: Union[ExportFormat, str]) -> ExportResult:
        """Render *text* as *fmt*; never raises for renderer faults."""
        fmt = ExportFormat(fmt)
        try:
            data = self._render(text, fmt)
        except SerializationFailed as e:
            log.error("Error generating %s export: %s", fmt.value, e)
            return ExportFailure(format=fmt, reason=str(e))

        return ExportSuccess(
            format=fmt,
            data=data,
            filename=fmt.filename,
            content_type=fmt.content_type,
        )

    def _render(self, text: str, fmt: ExportFormat) -> bytes:
        formatter = self._formatter_for(fmt)
        try:
            return formatter.format(text)
        except Exception as e:
            raise SerializationFailed(fmt.value, str(e) or type(e).__name__) from e

    def _formatter_for(self, fmt: ExportFormat) -> IOutputFormatter:
        if fmt not in self._formatters:
            self._formatters[fmt] = self._build_formatter(fmt)
        return self._formatters[fmt]

    def _build_formatter(self, fmt: ExportFormat) -> IOutputFormatter:
        if fmt is ExportFormat.TEXT:
            return TextFormatter()
        if fmt is ExportFormat.MARKDOWN:
            return MarkdownFormatter()
        if fmt is ExportFormat.PDF:
            from note_synth.formatters.pdf_formatter import PDFFormatter

            return PDFFormatter(self._pdf_config)
        from note_synth.formatters.docx_formatter import DocxFormatter

        return DocxFormatter()
