"""Plain text and Markdown formatters: the text is written out unchanged."""

from __future__ import annotations


class TextFormatter:
    """UTF-8 bytes of the result text."""

    def format(self, text: str) -> bytes:
        return text.encode("utf-8")


class MarkdownFormatter(TextFormatter):
    """Same bytes as :class:`TextFormatter`; escaping is left to the caller."""
