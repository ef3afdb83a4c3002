"""Tests for .docx to HTML conversion."""

from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document

from note_synth.ingestion import DocxHtmlConverter, extract_raw_text
from note_synth.ingestion.style_map import STYLE_MAP
from tests.fakes.docx_factory import build_docx


def _save(document) -> bytes:
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class TestBlocks:
    def test_heading_and_paragraph_in_order(self) -> None:
        result = DocxHtmlConverter().convert(build_docx())

        heading_at = result.html.index(f'<h1 class="{STYLE_MAP["h1"]}">Discharge Summary</h1>')
        para_at = result.html.index(
            f'<p class="{STYLE_MAP["p"]}">Patient discharged home in stable condition.</p>'
        )
        assert heading_at < para_at

    def test_title_and_subheadings(self) -> None:
        document = Document()
        document.add_heading("Report", level=0)
        document.add_heading("Findings", level=2)
        document.add_heading("Detail", level=3)

        html = DocxHtmlConverter().convert(_save(document)).html

        assert html.startswith(f'<h1 class="{STYLE_MAP["h1"]}">Report</h1>')
        assert f'<h2 class="{STYLE_MAP["h2"]}">Findings</h2>' in html
        assert f'<h3 class="{STYLE_MAP["h3"]}">Detail</h3>' in html

    def test_empty_paragraphs_are_dropped(self) -> None:
        document = Document()
        document.add_paragraph("")
        document.add_paragraph("kept")
        html = DocxHtmlConverter().convert(_save(document)).html
        assert html == f'<p class="{STYLE_MAP["p"]}">kept</p>'

    def test_markup_is_escaped(self) -> None:
        document = Document()
        document.add_paragraph("BP <120 & stable")
        html = DocxHtmlConverter().convert(_save(document)).html
        assert "BP &lt;120 &amp; stable" in html

    def test_unrecognised_style_reported_once(self) -> None:
        document = Document()
        document.add_paragraph("one", style="Quote")
        document.add_paragraph("two", style="Quote")

        result = DocxHtmlConverter().convert(_save(document))

        assert result.messages == [
            "Unrecognised paragraph style: 'Quote' (converted as plain paragraph)"
        ]
        assert result.html.count("<p ") == 2


class TestInline:
    def test_bold_and_italic_runs(self) -> None:
        document = Document()
        paragraph = document.add_paragraph("Plan: ")
        paragraph.add_run("follow up").bold = True
        paragraph.add_run(" in ")
        paragraph.add_run("two weeks").italic = True

        html = DocxHtmlConverter().convert(_save(document)).html

        assert "Plan: <strong>follow up</strong> in <em>two weeks</em>" in html

    def test_line_break_in_run(self) -> None:
        document = Document()
        document.add_paragraph().add_run("line one\nline two")
        html = DocxHtmlConverter().convert(_save(document)).html
        assert "line one<br />line two" in html

    def test_image_embedded_as_data_uri(self) -> None:
        result = DocxHtmlConverter().convert(build_docx(image=True))
        assert '<img src="data:image/png;base64,' in result.html
        assert "http" not in result.html.split("<img", 1)[1].split("/>", 1)[0]


class TestLists:
    def test_bullets_and_numbers(self) -> None:
        html = DocxHtmlConverter().convert(
            build_docx(bullets=["aspirin", "statin"], numbered=["review bloods"])
        ).html

        ul = f'<ul class="{STYLE_MAP["ul"]}">'
        li = f'<li class="{STYLE_MAP["li"]}">'
        ol = f'<ol class="{STYLE_MAP["ol"]}">'
        assert f"{ul}{li}aspirin</li>{li}statin</li></ul>" in html
        assert f"{ol}{li}review bloods</li></ol>" in html

    def test_nested_bullets(self) -> None:
        document = Document()
        document.add_paragraph("parent", style="List Bullet")
        document.add_paragraph("child", style="List Bullet 2")
        document.add_paragraph("sibling", style="List Bullet")

        html = DocxHtmlConverter().convert(_save(document)).html

        ul = f'<ul class="{STYLE_MAP["ul"]}">'
        li = f'<li class="{STYLE_MAP["li"]}">'
        assert html == f"{ul}{li}parent{ul}{li}child</li></ul></li>{li}sibling</li></ul>"

    def test_numbered_paragraph_without_definition_falls_back(self) -> None:
        document = Document()
        paragraph = document.add_paragraph("orphan item")
        num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
        num_pr.get_or_add_numId().val = 999
        num_pr.get_or_add_ilvl().val = 0

        result = DocxHtmlConverter().convert(_save(document))

        li = f'<li class="{STYLE_MAP["li"]}">'
        assert result.html == f'<ul class="{STYLE_MAP["ul"]}">{li}orphan item</li></ul>'
        assert "Missing numbering definition 999; list kind guessed" in result.messages

    def test_paragraph_ends_list(self) -> None:
        document = Document()
        document.add_paragraph("one", style="List Bullet")
        document.add_paragraph("between")
        document.add_paragraph("two", style="List Bullet")

        html = DocxHtmlConverter().convert(_save(document)).html

        assert html.count("<ul ") == 2


class TestTables:
    def test_cells_carry_border_classes(self) -> None:
        html = DocxHtmlConverter().convert(
            build_docx(table_rows=[["Code", "Term"], ["123", "Appendicectomy"]])
        ).html

        assert f'<table class="{STYLE_MAP["table"]}">' in html
        assert html.count(f'<td class="{STYLE_MAP["td"]}">') == 4
        assert "Appendicectomy" in html
        assert "border border-gray-300" in html

    def test_horizontal_merge_sets_colspan(self) -> None:
        document = Document()
        table = document.add_table(rows=2, cols=2)
        merged = table.cell(0, 0).merge(table.cell(0, 1))
        merged.text = "Header"
        table.cell(1, 0).text = "a"
        table.cell(1, 1).text = "b"

        html = DocxHtmlConverter().convert(_save(document)).html

        assert 'colspan="2"' in html
        assert html.count("<td ") == 3

    def test_vertical_merge_sets_rowspan(self) -> None:
        document = Document()
        table = document.add_table(rows=2, cols=2)
        merged = table.cell(0, 0).merge(table.cell(1, 0))
        merged.text = "Side"
        table.cell(0, 1).text = "top"
        table.cell(1, 1).text = "bottom"

        html = DocxHtmlConverter().convert(_save(document)).html

        assert 'rowspan="2"' in html
        assert html.count("<td ") == 3


class TestRawText:
    def test_paragraphs_blank_line_separated(self) -> None:
        text = extract_raw_text(build_docx())
        assert text == "Discharge Summary\n\nPatient discharged home in stable condition.\n\n"

    def test_table_cells_in_reading_order(self) -> None:
        text = extract_raw_text(build_docx(table_rows=[["a", "b"], ["c", "d"]]))
        assert text.endswith("a\n\nb\n\nc\n\nd\n\n")


class TestUnreadable:
    def test_corrupt_payload_raises(self) -> None:
        with pytest.raises(Exception):
            DocxHtmlConverter().convert(b"PK\x03\x04 not really a zip")
