"""Result text post-processing for on-screen display."""

from __future__ import annotations

import re

from note_synth.models import UseCase

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def markdown_bold_to_html(raw: object) -> str:
    """Replace every ``**text**`` with ``<strong>text</strong>``.

    Non-string input renders as an empty string.
    """
    if not isinstance(raw, str):
        return ""
    return _BOLD_RE.sub(lambda m: f"<strong>{m.group(1)}</strong>", raw)


def format_for_display(use_case: UseCase, text: str) -> str:
    """Only the summary use case renders markdown bold as HTML."""
    if use_case is UseCase.SUMMARY:
        return markdown_bold_to_html(text)
    return text
