"""CSS classes applied to converted document HTML.

Class names are Tailwind utilities so the preview renders with the same
table borders, list markers and heading sizes as the rest of the UI.
"""

from __future__ import annotations

STYLE_MAP: dict[str, str] = {
    # Tables
    "table": "table table-auto border-collapse border border-gray-300",
    "tr": "",
    "td": "border border-gray-300 px-2 py-1",
    "th": "border border-gray-300 px-2 py-1 bg-gray-100 font-semibold",
    # Paragraphs and headings
    "p": "mb-2",
    "h1": "text-2xl font-bold mb-4",
    "h2": "text-xl font-semibold mb-3",
    "h3": "text-lg font-semibold mb-2",
    # Lists
    "ul": "list-disc ml-4 mb-2",
    "ol": "list-decimal ml-4 mb-2",
    "li": "mb-1",
}

# Paragraph styles converted without a conversion message.
KNOWN_PARAGRAPH_STYLES: frozenset[str] = frozenset({
    "Normal",
    "Title",
    "List Paragraph",
    "Body Text",
    "No Spacing",
})

KNOWN_PARAGRAPH_STYLE_PREFIXES: tuple[str, ...] = (
    "Heading ",
    "List Bullet",
    "List Number",
)
