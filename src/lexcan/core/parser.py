from abc import ABC, abstractmethod

from bs4 import BeautifulSoup

from .models import LexModel


class LexParser(ABC):
    """Abstract base class for parsers turning one loaded XML document into a LexModel."""

    @abstractmethod
    def parse_content(self, soup: BeautifulSoup, **kwargs) -> LexModel:
        """Parse a loaded document.

        Keyword arguments carry what the markup does not, such as the document id
        derived from the file name.
        """
        pass
