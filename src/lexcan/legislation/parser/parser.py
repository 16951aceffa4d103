import logging
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup
from lxml import etree

from lexcan.core.exceptions import LexParsingError, TransformError
from lexcan.core.parser import LexParser
from lexcan.core.utils import read_xml_bytes
from lexcan.legislation.models import Document, Language
from lexcan.legislation.parser.full_text import LIMSFullTextRenderer
from lexcan.legislation.parser.xml_parser import LIMSXMLParser

logger = logging.getLogger(__name__)


class LegislationParser(LexParser):
    """Builds Document records from LIMS XML, optionally with rendered full text."""

    def __init__(self, renderer: Optional[LIMSFullTextRenderer] = None):
        self.parser = LIMSXMLParser()
        self.renderer = renderer

    def parse_file(self, path: str | Path, lang: Language) -> Document:
        """Parse one XML file. The document id is the filename stem."""
        path = Path(path)
        xml = read_xml_bytes(path)

        # BeautifulSoup repairs broken markup, so well-formedness is checked with lxml first
        try:
            tree = etree.fromstring(xml)
        except etree.XMLSyntaxError as e:
            raise LexParsingError(f"Malformed XML: {e}", path=str(path)) from e

        soup = BeautifulSoup(xml, "xml")

        try:
            return self.parse_content(soup, doc_id=path.stem, lang=lang, xml=tree)
        except LexParsingError as e:
            e.path = str(path)
            raise

    def parse_content(
        self,
        soup: BeautifulSoup,
        doc_id: str,
        lang: Language,
        xml: Optional[bytes | etree._Element] = None,
    ) -> Document:
        """Parse a loaded document; full text is rendered from ``xml`` when a renderer is set.

        ``xml`` may be the raw bytes or an already parsed lxml tree.
        """

        document = self.parser.parse(soup, doc_id=doc_id, lang=lang)

        logger.debug(
            f"Parsed legislation: {document.id}",
            extra={
                "doc_id": document.id,
                "doc_type": document.type.value,
                "doc_lang": document.lang.value,
                "processing_status": "success",
                "section_count": len(document.sections),
                "has_preamble": document.has_preamble,
                "internal_ref_count": len(document.internal_refs),
                "external_ref_count": len(document.external_refs),
                "title": document.title[:100],
            },
        )

        if len(document.sections) == 0:
            logger.warning(
                f"No sections found in legislation: {document.id}",
                extra={
                    "doc_id": document.id,
                    "doc_type": document.type.value,
                    "processing_status": "no_sections",
                },
            )

        if self.renderer is None:
            return document

        return document.model_copy(update={"full_text": self._render_full_text(document, soup, xml)})

    def _render_full_text(
        self, document: Document, soup: BeautifulSoup, xml: Optional[bytes | etree._Element]
    ) -> str:
        try:
            if xml is None:
                xml = str(soup).encode("utf-8")
            return self.renderer.render(xml)
        except TransformError as e:
            logger.warning(
                f"Full text rendering failed, falling back to plain text: {document.id}",
                extra={
                    "doc_id": document.id,
                    "processing_status": "full_text_fallback",
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
        except Exception as e:
            logger.warning(
                f"Unexpected error rendering full text, falling back to plain text: {document.id}",
                exc_info=True,
                extra={
                    "doc_id": document.id,
                    "processing_status": "full_text_fallback",
                    "error_type": type(e).__name__,
                },
            )

        return self.parser.document_text(soup)
