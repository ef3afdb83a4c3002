"""Word (.docx) formatter using python-docx.

The whole result becomes one paragraph with a single run.  Headings and
paragraph breaks in the text are not reinterpreted.
"""

from __future__ import annotations

import re
from io import BytesIO

from docx import Document

# C0 controls other than tab, newline and carriage return are not valid XML 1.0
_XML_INVALID_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _strip_control_chars(text: str) -> str:
    return _XML_INVALID_RE.sub("", text)


class DocxFormatter:
    """Renders result text as a single-paragraph Word document."""

    def format(self, text: str) -> bytes:
        document = Document()
        document.add_paragraph(_strip_control_chars(text))
        buffer = BytesIO()
        document.save(buffer)
        return buffer.getvalue()
