"""Export formatters for result text.

Usage::

    from note_synth.formatters import PDFFormatter, TextFormatter

    pdf_bytes = PDFFormatter().format(text)
"""

from __future__ import annotations

from typing import Any

from note_synth.formatters.display import format_for_display, markdown_bold_to_html
from note_synth.formatters.protocols import IOutputFormatter
from note_synth.formatters.text_formatter import MarkdownFormatter, TextFormatter

__all__ = [
    "DocxFormatter",
    "IOutputFormatter",
    "MarkdownFormatter",
    "PDFFormatter",
    "TextFormatter",
    "format_for_display",
    "markdown_bold_to_html",
]


def __getattr__(name: str) -> Any:
    """Lazy-load the binary formatters so reportlab/python-docx load on first use."""
    if name == "PDFFormatter":
        from note_synth.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    if name == "DocxFormatter":
        from note_synth.formatters.docx_formatter import DocxFormatter

        return DocxFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
