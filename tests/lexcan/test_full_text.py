"""Tests for the XSLT to markdown full text renderer."""

import logging
from pathlib import Path

import pytest

from lexcan.core.exceptions import TransformError
from lexcan.core.utils import load_xml_file_to_soup, read_xml_bytes
from lexcan.legislation.models import Language
from lexcan.legislation.parser import LegislationParser, LIMSFullTextRenderer
from lexcan.legislation.parser.full_text import (
    normalize_whitespace,
    separate_spans,
    strip_markdown_links,
)

TEST_DATA = Path(__file__).parent.parent / "test_data"
STYLESHEET = TEST_DATA / "simple_lims.xsl"
STATUTE = TEST_DATA / "statute_with_preamble.xml"


@pytest.mark.parametrize(
    "markdown,expected",
    [
        ("a    b", "a b"),
        ("a\n\n\n\nb", "a\n\nb"),
        ("a\n\nb", "a\n\nb"),
        ("a  \n\n\n  b", "a \n\n b"),
        ("", ""),
    ],
)
def test_normalize_whitespace(markdown, expected):
    assert normalize_whitespace(markdown) == expected


@pytest.mark.parametrize(
    "markdown",
    ["a    b\n\n\n\nc", "  x \n \n\n\n\n y  ", "\n\n\n\n\n\n\n", "plain"],
)
def test_normalize_whitespace_is_idempotent(markdown):
    once = normalize_whitespace(markdown)
    assert normalize_whitespace(once) == once


def test_strip_markdown_links():
    assert strip_markdown_links("[see Act](http://x)") == "see Act"
    assert (
        strip_markdown_links("Under the [Food and Drugs Act](https://example.com/F-27 \"F-27\") and [s. 5](#s5).")
        == "Under the Food and Drugs Act and s. 5."
    )
    assert strip_markdown_links("no links [here]") == "no links [here]"
    assert strip_markdown_links("[section 5 [Repealed]](http://x)") == "section 5 [Repealed]"
    assert strip_markdown_links("[Act](http://x/a_(b)) applies") == "Act applies"


def test_separate_spans():
    assert separate_spans("<span>a</span><span>b</span>") == "<span>a</span> <span>b</span> "
    assert separate_spans("<p>x</p>") == "<p>x</p>"


class TestRenderer:
    def test_render_strips_links_by_default(self):
        renderer = LIMSFullTextRenderer(STYLESHEET)
        markdown = renderer.render(read_xml_bytes(STATUTE))

        assert "## Short Title" in markdown
        assert "## Definitions" in markdown
        assert "This Act may be cited as the Accessible Canada Act." in markdown
        assert "](" not in markdown

    def test_render_keeps_links(self):
        renderer = LIMSFullTextRenderer(STYLESHEET, strip_links=False)
        markdown = renderer.render(read_xml_bytes(STATUTE))

        assert "[Accessible Canada Act](https://laws-lois.justice.gc.ca/eng/acts/A-0.6)" in markdown

    def test_render_is_normalized(self):
        markdown = LIMSFullTextRenderer(STYLESHEET).render(read_xml_bytes(STATUTE))

        assert "  " not in markdown
        assert "\n\n\n" not in markdown
        assert markdown == markdown.strip()

    def test_span_labels_do_not_merge_with_text(self):
        markdown = LIMSFullTextRenderer(STYLESHEET).render(read_xml_bytes(STATUTE))

        assert "1This" not in markdown
        assert "1 This Act" in markdown

    def test_render_is_deterministic(self):
        renderer = LIMSFullTextRenderer(STYLESHEET)
        xml = read_xml_bytes(STATUTE)

        assert renderer.render(xml) == renderer.render(xml)

    def test_malformed_xml(self):
        renderer = LIMSFullTextRenderer(STYLESHEET)

        with pytest.raises(TransformError):
            renderer.render(b"<Statute><Body><Section>")

    def test_failing_stylesheet(self):
        renderer = LIMSFullTextRenderer(TEST_DATA / "failing.xsl")

        with pytest.raises(TransformError):
            renderer.render(read_xml_bytes(STATUTE))

    def test_malformed_stylesheet(self, tmp_path):
        stylesheet = tmp_path / "broken.xsl"
        stylesheet.write_text("<xsl:stylesheet", encoding="utf-8")

        with pytest.raises(TransformError):
            LIMSFullTextRenderer(stylesheet)

    def test_missing_stylesheet(self, tmp_path):
        with pytest.raises(TransformError):
            LIMSFullTextRenderer(tmp_path / "missing.xsl")


class TestFullTextFallback:
    def test_full_text_rendered(self):
        parser = LegislationParser(renderer=LIMSFullTextRenderer(STYLESHEET))
        document = parser.parse_file(STATUTE, Language.ENGLISH)

        assert document.full_text is not None
        assert "## Short Title" in document.full_text
        # Structure is unaffected by rendering
        assert [section.id for section in document.sections] == ["0", "1", "2", "3"]

    def test_fallback_to_plain_text(self, caplog):
        parser = LegislationParser(renderer=LIMSFullTextRenderer(TEST_DATA / "failing.xsl"))

        with caplog.at_level(logging.WARNING, logger="lexcan"):
            document = parser.parse_file(STATUTE, Language.ENGLISH)

        assert document.full_text == parser.parser.document_text(load_xml_file_to_soup(STATUTE))
        assert document.full_text.startswith(
            "An Act to ensure a barrier-free Canada\nAccessible Canada Act\nC-81\nA-0.6\nWhereas the"
        )
        assert "falling back to plain text" in caplog.text
        # Sections are still extracted when rendering fails
        assert len(document.sections) == 4
