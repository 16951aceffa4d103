import logging
from typing import Iterator, List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from lexcan.core.exceptions import LexParsingError
from lexcan.legislation.models import (
    Document,
    DocumentType,
    EnablingAuthority,
    Heading,
    Language,
    Section,
)
from lexcan.legislation.reference_finders import (
    ReferenceFinder,
    XRefReferenceFinder,
    aggregate_references,
)
from lexcan.settings import (
    DATE_ATTRIBUTES,
    IDENTIFICATION_FIELDS,
    ROOT_TAG_TYPE_MAPPING,
    TEXT_EXCLUDED_TAGS,
)

logger = logging.getLogger(__name__)

PREAMBLE_SECTION_ID = "0"


class LIMSXMLParser:
    """Parser for the Justice Laws (LIMS) consolidated XML format.

    A document is a Statute or Regulation root holding an Identification block,
    an optional Preamble, and a Body of Section elements. Sections hold Subsections,
    and Heading elements sit as siblings immediately before the section they head.
    """

    def __init__(
        self,
        reference_finder: Optional[ReferenceFinder] = None,
        excluded_tags: set[str] = TEXT_EXCLUDED_TAGS,
    ):
        self.reference_finder = reference_finder or XRefReferenceFinder()
        self.excluded_tags = set(excluded_tags)

    def parse(self, soup: BeautifulSoup, doc_id: str, lang: Language) -> Document:
        """Parse XML content into a Document object, without full text."""

        root = self._find_root(soup)
        identification = root.find("Identification", recursive=False) or root

        metadata = {
            field: self._extract_optional_text(identification.find(tag))
            for tag, field in IDENTIFICATION_FIELDS.items()
        }
        dates = {field: root.get(attribute) for attribute, field in DATE_ATTRIBUTES.items()}

        sections = []
        preamble = root.find("Preamble")
        if preamble is not None:
            sections.append(self._parse_preamble(preamble))
        sections.extend(self.parse_section(element) for element in root.find_all("Section"))

        internal_refs, external_refs = aggregate_references(sections)

        return Document(
            id=doc_id,
            lang=lang,
            type=DocumentType(ROOT_TAG_TYPE_MAPPING[root.name]),
            enabling_authority=self._parse_enabling_authority(root),
            sections=sections,
            internal_refs=internal_refs,
            external_refs=external_refs,
            **metadata,
            **dates,
        )

    def parse_section(self, element: Tag) -> Section:
        """Parse a Section or Subsection element, identified by its Label."""
        return self._parse_node(element, self._extract_optional_text(element.find("Label", recursive=False)))

    def join_text(self, element: Tag) -> str:
        """Join every text run in the element's subtree with newlines, in document order.

        Subtrees rooted at an excluded tag are skipped, as are whitespace-only runs.
        """
        # Every text node counts, including text that follows an inline child such as
        # XRefInternal. Reading only each element's leading text would drop it.
        return "\n".join(self._iter_text(element))

    def resolve_headings(self, element: Tag) -> List[Heading]:
        """Collect the Heading siblings directly before a section, nearest first."""
        headings = []

        sibling = self._previous_element_sibling(element)
        while sibling is not None and sibling.name == "Heading":
            headings.append(
                Heading(level=self._parse_level(sibling.get("level")), text=self._extract_text(sibling))
            )
            sibling = self._previous_element_sibling(sibling)

        return headings

    def document_text(self, soup: BeautifulSoup) -> str:
        """Plain joined text of the whole document."""
        return self.join_text(self._find_root(soup))

    def _parse_node(self, element: Tag, node_id: Union[str, int, None]) -> Section:
        is_section = element.name == "Section"
        external_refs, internal_refs = self.reference_finder.find_references(element)

        return Section(
            id=node_id,
            text=self.join_text(element),
            marginal_note=self._extract_optional_text(element.find("MarginalNote", recursive=False)),
            lims_id=element.get("lims:id"),
            subsections=[
                self.parse_section(subsection)
                for subsection in element.find_all("Subsection", recursive=False)
            ]
            if is_section
            else [],
            headings=self.resolve_headings(element) if is_section else [],
            external_refs=external_refs,
            internal_refs=internal_refs,
        )

    def _parse_preamble(self, element: Tag) -> Section:
        """Represent the preamble as a leading section whose subsections are its provisions."""
        external_refs, internal_refs = self.reference_finder.find_references(element)

        provisions = [
            self._parse_node(provision, index)
            for index, provision in enumerate(element.find_all("Provision", recursive=False))
        ]

        return Section(
            id=PREAMBLE_SECTION_ID,
            text=self.join_text(element),
            lims_id=element.get("lims:id"),
            subsections=provisions,
            external_refs=external_refs,
            internal_refs=internal_refs,
        )

    def _parse_enabling_authority(self, root: Tag) -> Optional[EnablingAuthority]:
        element = root.find("EnablingAuthority")
        if element is None:
            return None

        xref = element.find("XRefExternal")
        return EnablingAuthority(
            link=xref.get("link") if xref is not None else None,
            text=self._extract_text(element),
        )

    def _find_root(self, soup: BeautifulSoup) -> Tag:
        root = next((child for child in soup.children if isinstance(child, Tag)), None)

        if root is None:
            raise LexParsingError("Document has no root element")
        if root.name not in ROOT_TAG_TYPE_MAPPING:
            raise LexParsingError(
                f"Unexpected root element <{root.name}>, expected one of {sorted(ROOT_TAG_TYPE_MAPPING)}"
            )
        return root

    def _iter_text(self, element: Tag) -> Iterator[str]:
        if element.name in self.excluded_tags:
            return

        for child in element.children:
            if isinstance(child, Tag):
                yield from self._iter_text(child)
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                text = child.strip()
                if text:
                    yield text

    def _extract_text(self, element: Optional[Tag]) -> str:
        """Extract text from an element as a single line."""
        if element is None:
            return ""
        return " ".join(" ".join(element.stripped_strings).split())

    def _extract_optional_text(self, element: Optional[Tag]) -> Optional[str]:
        if element is None:
            return None
        return self._extract_text(element)

    @staticmethod
    def _previous_element_sibling(element: Tag) -> Optional[Tag]:
        sibling = element.previous_sibling
        while sibling is not None and not isinstance(sibling, Tag):
            sibling = sibling.previous_sibling
        return sibling

    @staticmethod
    def _parse_level(level: Optional[str]) -> Optional[int]:
        if level is None:
            return None
        try:
            return int(level)
        except ValueError:
            logger.debug(f"Ignoring non-numeric heading level: {level}")
            return None
