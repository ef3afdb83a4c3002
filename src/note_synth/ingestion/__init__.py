"""Upload conversion helpers."""

from __future__ import annotations

from note_synth.ingestion.docx_html import ConversionResult, DocxHtmlConverter, extract_raw_text
from note_synth.ingestion.style_map import STYLE_MAP

__all__ = ["ConversionResult", "DocxHtmlConverter", "STYLE_MAP", "extract_raw_text"]
