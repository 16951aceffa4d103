import re
from pathlib import Path

from lxml import etree
from markdownify import ATX, markdownify

from lexcan.core.exceptions import TransformError

WHITESPACE_EDITS = [
    (re.compile(r" {2,}"), " "),
    (re.compile(r"\n{3,}"), "\n\n"),
]

# Link text and target may each hold one level of nested brackets or parentheses,
# e.g. "[s. 5 [Repealed]](...)" or "(.../a_(b))"
MARKDOWN_LINK = re.compile(r"\[((?:[^\[\]]|\[[^\]]*\])*)\]\((?:[^()\s]|\([^)]*\))*(?:\s+\"[^\"]*\")?\)")
CLOSING_SPAN = re.compile(r"</span>", re.IGNORECASE)


def normalize_whitespace(markdown: str) -> str:
    """Collapse runs of spaces to one and three or more newlines to exactly two."""
    for pattern, replacement in WHITESPACE_EDITS:
        markdown = pattern.sub(replacement, markdown)
    return markdown


def strip_markdown_links(markdown: str) -> str:
    """Replace every [text](target) with its text."""
    return MARKDOWN_LINK.sub(r"\1", markdown)


def separate_spans(html: str) -> str:
    """Add a space after each closing span.

    The LIMS stylesheet renders inline formatting as adjacent spans, which would
    otherwise glue neighbouring words together once the markup is removed.
    """
    return CLOSING_SPAN.sub("</span> ", html)


class LIMSFullTextRenderer:
    """Renders a LIMS XML document to markdown through the Justice Laws HTML stylesheet.

    The compiled stylesheet is read-only once built, so one renderer can be reused for
    every document a process handles.
    """

    def __init__(self, xslt_path: str | Path, strip_links: bool = True):
        self.xslt_path = Path(xslt_path)
        self.strip_links = strip_links
        self.transform = self._load_stylesheet(self.xslt_path)

    def _load_stylesheet(self, xslt_path: Path) -> etree.XSLT:
        try:
            return etree.XSLT(etree.parse(str(xslt_path)))
        except (OSError, etree.XMLSyntaxError, etree.XSLTError) as e:
            raise TransformError(f"Could not load stylesheet {xslt_path}: {e}", path=str(xslt_path)) from e

    def to_html(self, xml: bytes | etree._Element) -> str:
        """Apply the stylesheet, raising TransformError on malformed input."""
        try:
            tree = etree.fromstring(xml) if isinstance(xml, bytes) else xml
            result = self.transform(tree)
        except (etree.XMLSyntaxError, etree.XSLTError) as e:
            raise TransformError(f"XSLT transform failed: {e}") from e

        html = str(result)
        if not html.strip():
            raise TransformError("XSLT transform produced no output")
        return html

    def render(self, xml: bytes | etree._Element) -> str:
        html = separate_spans(self.to_html(xml))

        markdown = markdownify(html, heading_style=ATX, escape_misc=False)
        markdown = normalize_whitespace(markdown)

        if self.strip_links:
            markdown = strip_markdown_links(markdown)

        return markdown.strip()
