"""PDF output formatter using reportlab.

Lays the result text into a flowing document: fixed margins, justified
body text, one font, 1.5 line spacing.  reportlab adds pages as the text
requires.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_JUSTIFY
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph as _RawParagraph
from reportlab.platypus import SimpleDocTemplate

from note_synth.core.config import PDFFormattingConfig

# ── Unicode sanitization ────────────────────────────────────────────
# Helvetica lacks glyphs for many Unicode characters that assistants emit
# (non-breaking hyphens, narrow spaces, smart quotes, etc.).

_UNICODE_REPLACEMENTS: dict[str, str] = {
    # Dashes / hyphens
    "\u2011": "-",       # non-breaking hyphen
    "\u2010": "-",       # hyphen
    "\u2012": "-",       # figure dash
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u2015": "-",       # horizontal bar
    # Spaces
    "\u202f": " ",       # narrow no-break space
    "\u00a0": " ",       # non-breaking space
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    # Quotes
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    # Misc
    "\u2026": "...",     # ellipsis
    "\u2022": "-",       # bullet
    "\u2192": "->",      # rightwards arrow
    "\u2191": "^",       # upwards arrow
    "\u2193": "v",       # downwards arrow
    "\u2265": ">=",
    "\u2264": "<=",
}


def _sanitize_text(text: str) -> str:
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def _to_markup(text: str) -> str:
    """Escape reportlab markup and keep the text's own line breaks."""
    escaped = escape(_sanitize_text(text))
    return escaped.replace("\r\n", "\n").replace("\n", "<br/>")


_PAGE_SIZES = {"letter": LETTER, "a4": A4}


class PDFFormatter:
    """Renders result text as a single flowing PDF document."""

    def __init__(self, config: PDFFormattingConfig | None = None) -> None:
        self._config = config or PDFFormattingConfig()
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, A4)
        self._margin: float = self._config.margin_points
        self._body_style = self._build_body_style()

    def format(self, text: str, **kwargs: Any) -> bytes:
        """Render *text* to PDF bytes."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._page_size,
            leftMargin=self._margin,
            rightMargin=self._margin,
            topMargin=self._margin,
            bottomMargin=self._margin,
            title=kwargs.get("title", "Result"),
        )
        doc.build([_RawParagraph(_to_markup(text), self._body_style)])
        return buffer.getvalue()

    def _build_body_style(self) -> ParagraphStyle:
        base = getSampleStyleSheet()
        size = self._config.body_font_size
        return ParagraphStyle(
            "body",
            parent=base["BodyText"],
            fontName=self._config.font_family,
            fontSize=size,
            leading=size * self._config.line_spacing,
            alignment=TA_JUSTIFY,
        )
