from typing import List, Optional, Tuple

from bs4 import Tag

from lexcan.legislation.models import ExternalReference, InternalReference

from .base import ReferenceFinder


class XRefReferenceFinder(ReferenceFinder):
    """Finds references marked up explicitly as XRefExternal / XRefInternal elements.

    XRefExternal carries the target in its ``link`` attribute and the kind of target
    (act, regulation, ...) in ``reference-type``. XRefInternal only carries the
    referenced section number as its text.
    """

    external_tag = "XRefExternal"
    internal_tag = "XRefInternal"

    def find_references(
        self, element: Tag
    ) -> Tuple[List[ExternalReference], List[InternalReference]]:
        return self.find_external_references(element), self.find_internal_references(element)

    def find_external_references(self, element: Tag) -> List[ExternalReference]:
        return [
            ExternalReference(
                link=self._non_empty(xref.get("link")),
                reference_type=self._non_empty(xref.get("reference-type")),
                text=xref.get_text().strip(),
            )
            for xref in element.find_all(self.external_tag)
        ]

    def find_internal_references(self, element: Tag) -> List[InternalReference]:
        return [
            InternalReference(link=self._non_empty(xref.get_text()))
            for xref in element.find_all(self.internal_tag)
        ]

    @staticmethod
    def _non_empty(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None
