"""Unit tests for Word document to Markdown conversion."""

import io
import zipfile

import docx
import pytest
from utils import MINIMAL_PNG_B64, DocxTestGenerator

from office2site.exceptions import MalformedFileError
from office2site.options import DocxOptions
from office2site.parsers.docx import DocxToMarkdownConverter, escape_markdown


def _convert(doc, options=None) -> str:
    return DocxToMarkdownConverter(options).convert(DocxTestGenerator.to_bytes(doc))


@pytest.mark.unit
class TestStructuredDocument:
    """Tests against a document with headings, lists and a table."""

    @pytest.fixture
    def markdown(self) -> str:
        return _convert(DocxTestGenerator.create_structured_document())

    def test_title_and_headings(self, markdown) -> None:
        assert markdown.startswith("# Handbook\n\n# Getting started\n\n")

    def test_heading_level_capped(self, markdown) -> None:
        assert markdown.endswith("###### Deep")

    def test_inline_emphasis(self, markdown) -> None:
        assert "Read the **whole** guide _carefully_." in markdown

    def test_list_items_are_contiguous(self, markdown) -> None:
        assert "- First step\n  - Sub step\n1. Numbered" in markdown

    def test_table(self, markdown) -> None:
        assert "| Name | Value |\n| --- | --- |\n| a\\|b | 1 |" in markdown

    def test_block_order(self, markdown) -> None:
        order = ["# Handbook", "Read the", "- First step", "| Name", "###### Deep"]
        positions = [markdown.index(marker) for marker in order]
        assert positions == sorted(positions)


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraph-level conversion."""

    def test_empty_paragraphs_dropped(self) -> None:
        doc = docx.Document()
        doc.add_paragraph("One")
        doc.add_paragraph("")
        doc.add_paragraph("   ")
        doc.add_paragraph("Two")
        assert _convert(doc) == "One\n\nTwo"

    def test_line_breaks_become_hard_breaks(self) -> None:
        doc = docx.Document()
        doc.add_paragraph("First line\nSecond line")
        assert _convert(doc) == "First line  \nSecond line"

    def test_special_characters_escaped(self) -> None:
        doc = docx.Document()
        doc.add_paragraph("2*3 = 6 and snake_case <tag>")
        assert _convert(doc) == "2\\*3 = 6 and snake\\_case \\<tag\\>"

    def test_bold_italic_run(self) -> None:
        doc = docx.Document()
        run = doc.add_paragraph().add_run("Both")
        run.bold = True
        run.italic = True
        assert _convert(doc) == "***Both***"

    def test_adjacent_runs_with_same_format_merged(self) -> None:
        doc = docx.Document()
        paragraph = doc.add_paragraph()
        paragraph.add_run("Hel").bold = True
        paragraph.add_run("lo").bold = True
        assert _convert(doc) == "**Hello**"

    def test_emphasis_keeps_surrounding_spaces_outside(self) -> None:
        doc = docx.Document()
        paragraph = doc.add_paragraph("a")
        paragraph.add_run(" b ").bold = True
        paragraph.add_run("c")
        assert _convert(doc) == "a **b** c"

    def test_custom_bullet_marker(self) -> None:
        doc = docx.Document()
        doc.add_paragraph("Item", style="List Bullet")
        assert _convert(doc, DocxOptions(bullet_marker="*")) == "* Item"

    def test_lists_separated_from_paragraphs(self) -> None:
        doc = docx.Document()
        doc.add_paragraph("Intro")
        doc.add_paragraph("Item", style="List Bullet")
        doc.add_paragraph("Outro")
        assert _convert(doc) == "Intro\n\n- Item\n\nOutro"


@pytest.mark.unit
class TestImages:
    """Tests for inline pictures."""

    def test_image_embedded_as_data_uri(self) -> None:
        markdown = _convert(DocxTestGenerator.create_image_document())
        assert markdown.startswith("Logo below\n\n![")
        assert f"(data:image/png;base64,{MINIMAL_PNG_B64})" in markdown

    def test_images_dropped_when_disabled(self) -> None:
        markdown = _convert(DocxTestGenerator.create_image_document(), DocxOptions(embed_images=False))
        assert markdown == "Logo below"


@pytest.mark.unit
class TestSources:
    """Tests for input handling."""

    def test_path_source(self, temp_dir) -> None:
        path = temp_dir / "doc.docx"
        DocxTestGenerator.create_structured_document().save(str(path))
        assert DocxToMarkdownConverter().convert(path).startswith("# Handbook")

    def test_stream_source(self) -> None:
        data = DocxTestGenerator.to_bytes(DocxTestGenerator.create_structured_document())
        assert DocxToMarkdownConverter().convert(io.BytesIO(data)).startswith("# Handbook")

    def test_not_a_zip(self) -> None:
        with pytest.raises(MalformedFileError):
            DocxToMarkdownConverter().convert(b"not a document")

    def test_zip_without_document(self) -> None:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("hello.txt", "hi")
        with pytest.raises(MalformedFileError):
            DocxToMarkdownConverter().convert(buffer.getvalue())


@pytest.mark.unit
class TestEscapeMarkdown:
    """Tests for escape_markdown."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("plain", "plain"),
            ("a*b", "a\\*b"),
            ("[link](x)", "\\[link\\](x)"),
            ("back\\slash", "back\\\\slash"),
            ("`code`", "\\`code\\`"),
        ],
    )
    def test_escape(self, text, expected) -> None:
        assert escape_markdown(text) == expected
