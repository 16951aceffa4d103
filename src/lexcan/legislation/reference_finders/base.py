from abc import ABC, abstractmethod
from typing import List, Tuple

from bs4 import Tag

from lexcan.legislation.models import ExternalReference, InternalReference


class ReferenceFinder(ABC):
    """Abstract base class for finding references within a legislative XML element."""

    @abstractmethod
    def find_references(
        self, element: Tag
    ) -> Tuple[List[ExternalReference], List[InternalReference]]:
        """Find the external and internal references in an element's subtree."""
        pass
