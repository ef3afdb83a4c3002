"""Word-processor (.docx) to self-contained HTML conversion.

Walks the document body in order and emits headings, paragraphs, nested
lists, tables and inline images.  Images are embedded as ``data:`` URIs so
the HTML has no external references.  Anything the converter cannot
represent is skipped and reported in :attr:`ConversionResult.messages`.
"""

from __future__ import annotations

import base64
import html
import re
from dataclasses import dataclass, field
from io import BytesIO
from typing import Optional, Union

from docx import Document
from docx.table import Table, _Cell
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from note_synth.ingestion.style_map import (
    KNOWN_PARAGRAPH_STYLE_PREFIXES,
    KNOWN_PARAGRAPH_STYLES,
    STYLE_MAP,
)

_HEADING_RE = re.compile(r"^Heading (\d)$")


@dataclass
class ConversionResult:
    """HTML output plus non-fatal conversion messages."""

    html: str
    messages: list[str] = field(default_factory=list)


@dataclass
class _ListItem:
    html: str
    children: list[_ListNode] = field(default_factory=list)


@dataclass
class _ListNode:
    tag: str
    level: int
    items: list[_ListItem] = field(default_factory=list)


def _open(tag: str, **attrs: Optional[str]) -> str:
    parts = [tag]
    css = STYLE_MAP.get(tag, "")
    if css:
        parts.append(f'class="{css}"')
    for name, value in attrs.items():
        if value is not None:
            parts.append(f'{name}="{html.escape(value, quote=True)}"')
    return "<" + " ".join(parts) + ">"


def _render_list(node: _ListNode) -> str:
    out = [_open(node.tag)]
    for item in node.items:
        out.append(_open("li"))
        out.append(item.html)
        out.extend(_render_list(child) for child in item.children)
        out.append("</li>")
    out.append(f"</{node.tag}>")
    return "".join(out)


class DocxHtmlConverter:
    """Converts one ``.docx`` payload to HTML.

    Instances are single-use: list nesting and messages are per document.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []
        self._reported_styles: set[str] = set()

    def convert(self, data: bytes) -> ConversionResult:
        """Convert *data*.

        Raises whatever python-docx raises for unreadable packages
        (corrupt zip, missing main part); callers decide how to degrade.
        """
        document = Document(BytesIO(data))
        blocks = self._render_blocks(document.iter_inner_content())
        return ConversionResult(html="".join(blocks), messages=list(self._messages))

    # ── Block level ──────────────────────────────────────────────────

    def _render_blocks(self, items: object) -> list[str]:
        out: list[Union[str, _ListNode]] = []
        stack: list[_ListNode] = []

        for block in items:  # type: ignore[attr-defined]
            if isinstance(block, Table):
                stack.clear()
                out.append(self._render_table(block))
                continue

            list_info = self._list_info(block)
            content = self._render_inline(block)
            if list_info is not None:
                tag, level = list_info
                self._append_list_item(out, stack, tag, level, content)
                continue

            stack.clear()
            if not content.strip():
                continue
            tag = self._block_tag(block)
            out.append(f"{_open(tag)}{content}</{tag}>")

        return [_render_list(b) if isinstance(b, _ListNode) else b for b in out]

    @staticmethod
    def _append_list_item(
        out: list[Union[str, _ListNode]],
        stack: list[_ListNode],
        tag: str,
        level: int,
        content: str,
    ) -> None:
        while stack and (stack[-1].level > level or (stack[-1].level == level and stack[-1].tag != tag)):
            stack.pop()
        if stack and stack[-1].level == level:
            stack[-1].items.append(_ListItem(content))
            return

        node = _ListNode(tag=tag, level=level, items=[_ListItem(content)])
        if stack:
            parent = stack[-1]
            parent.items[-1].children.append(node)
        else:
            out.append(node)
        stack.append(node)

    def _block_tag(self, paragraph: Paragraph) -> str:
        style_name = paragraph.style.name if paragraph.style is not None else "Normal"
        if style_name == "Title":
            return "h1"
        match = _HEADING_RE.match(style_name or "")
        if match:
            return f"h{min(max(int(match.group(1)), 1), 6)}"
        self._check_style(style_name or "Normal")
        return "p"

    def _check_style(self, style_name: str) -> None:
        if style_name in KNOWN_PARAGRAPH_STYLES:
            return
        if style_name.startswith(KNOWN_PARAGRAPH_STYLE_PREFIXES):
            return
        if style_name not in self._reported_styles:
            self._reported_styles.add(style_name)
            self._messages.append(
                f"Unrecognised paragraph style: '{style_name}' (converted as plain paragraph)"
            )

    # ── Lists ────────────────────────────────────────────────────────

    def _list_info(self, paragraph: Paragraph) -> Optional[tuple[str, int]]:
        """``(tag, level)`` for list paragraphs, ``None`` otherwise."""
        p_pr = paragraph._p.pPr
        num_pr = p_pr.numPr if p_pr is not None else None
        style_name = paragraph.style.name if paragraph.style is not None else ""

        if num_pr is not None and num_pr.numId is not None:
            num_id = num_pr.numId.val
            level = num_pr.ilvl.val if num_pr.ilvl is not None else 0
            if num_id == 0:
                return None
            return self._numbering_tag(paragraph, num_id, level, style_name), level

        if style_name.startswith("List Bullet"):
            return "ul", _style_level(style_name)
        if style_name.startswith("List Number"):
            return "ol", _style_level(style_name)
        return None

    def _numbering_tag(self, paragraph: Paragraph, num_id: int, level: int, style_name: str) -> str:
        fallback = "ol" if style_name.startswith("List Number") else "ul"
        try:
            numbering = paragraph.part.numbering_part.element
            num = numbering.num_having_numId(num_id)
        except (KeyError, NotImplementedError):
            self._messages.append(f"Missing numbering definition {num_id}; list kind guessed")
            return fallback

        abstract_id = num.abstractNumId.val
        formats = numbering.xpath(
            f'./w:abstractNum[@w:abstractNumId="{abstract_id}"]'
            f'/w:lvl[@w:ilvl="{level}"]/w:numFmt/@w:val'
        )
        if not formats:
            return fallback
        return "ul" if formats[0] == "bullet" else "ol"

    # ── Tables ───────────────────────────────────────────────────────

    def _render_table(self, table: Table) -> str:
        rows = table._tbl.tr_lst
        grid: list[list[tuple[int, object]]] = []
        for tr in rows:
            col = 0
            row_cells: list[tuple[int, object]] = []
            for tc in tr.tc_lst:
                row_cells.append((col, tc))
                col += tc.grid_span
            grid.append(row_cells)

        out = [_open("table")]
        for row_idx, tr in enumerate(rows):
            is_header = bool(tr.xpath("./w:trPr/w:tblHeader"))
            cell_tag = "th" if is_header else "td"
            out.append(_open("tr"))
            for col, tc in grid[row_idx]:
                if tc.vMerge == "continue":
                    continue
                rowspan = _rowspan(grid, row_idx, col) if tc.vMerge == "restart" else 1
                cell = _Cell(tc, table)
                inner = "".join(self._render_blocks(cell.iter_inner_content()))
                out.append(
                    _open(
                        cell_tag,
                        colspan=str(tc.grid_span) if tc.grid_span > 1 else None,
                        rowspan=str(rowspan) if rowspan > 1 else None,
                    )
                )
                out.append(inner)
                out.append(f"</{cell_tag}>")
            out.append("</tr>")
        out.append("</table>")
        return "".join(out)

    # ── Inline ───────────────────────────────────────────────────────

    def _render_inline(self, paragraph: Paragraph) -> str:
        parts: list[str] = []
        for item in paragraph.iter_inner_content():
            if isinstance(item, Hyperlink):
                text = "".join(self._render_run(run, paragraph) for run in item.runs)
                url = item.url
                if url:
                    parts.append(f'<a href="{html.escape(url, quote=True)}">{text}</a>')
                else:
                    parts.append(text)
            else:
                parts.append(self._render_run(item, paragraph))
        return "".join(parts)

    def _render_run(self, run: Run, paragraph: Paragraph) -> str:
        text = html.escape(run.text).replace("\n", "<br />")
        if text:
            font = run.font
            if font.superscript:
                text = f"<sup>{text}</sup>"
            elif font.subscript:
                text = f"<sub>{text}</sub>"
            if font.strike:
                text = f"<s>{text}</s>"
            if run.italic:
                text = f"<em>{text}</em>"
            if run.bold:
                text = f"<strong>{text}</strong>"
        images = "".join(self._render_images(run, paragraph))
        return text + images

    def _render_images(self, run: Run, paragraph: Paragraph) -> list[str]:
        out: list[str] = []
        for blip in run._r.xpath(".//a:blip"):
            r_id = blip.get(
                "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}embed"
            )
            if not r_id:
                self._messages.append("Skipped linked image: only embedded images are supported")
                continue
            part = paragraph.part.related_parts.get(r_id)
            if part is None:
                self._messages.append(f"Image relationship {r_id} not found")
                continue
            content_type = part.content_type
            if not content_type.startswith("image/"):
                self._messages.append(f"Skipped embedded object of type {content_type}")
                continue
            encoded = base64.b64encode(part.blob).decode("ascii")
            alt = _image_alt(run)
            out.append(
                f'<img src="data:{content_type};base64,{encoded}"'
                + (f' alt="{html.escape(alt, quote=True)}"' if alt else "")
                + " />"
            )
        return out


def _style_level(style_name: str) -> int:
    """``List Bullet 2`` -> level 1."""
    tail = style_name.rsplit(" ", 1)[-1]
    return int(tail) - 1 if tail.isdigit() else 0


def _rowspan(grid: list[list[tuple[int, object]]], row_idx: int, col: int) -> int:
    span = 1
    for row in grid[row_idx + 1:]:
        below = next((tc for c, tc in row if c == col), None)
        if below is None or getattr(below, "vMerge", None) != "continue":
            break
        span += 1
    return span


def _image_alt(run: Run) -> str:
    descr = run._r.xpath(".//wp:docPr/@descr")
    return str(descr[0]) if descr else ""


def extract_raw_text(data: bytes) -> str:
    """Plain text of a ``.docx``: one block per paragraph, blank-line separated.

    Table cells contribute their paragraphs in reading order.
    """
    document = Document(BytesIO(data))
    parts: list[str] = []

    def _walk(items: object) -> None:
        for block in items:  # type: ignore[attr-defined]
            if isinstance(block, Table):
                for row in block.rows:
                    seen: set[int] = set()
                    for cell in row.cells:
                        if id(cell._tc) in seen:
                            continue
                        seen.add(id(cell._tc))
                        _walk(cell.iter_inner_content())
            else:
                parts.append(block.text)

    _walk(document.iter_inner_content())
    return "".join(f"{p}\n\n" for p in parts)
