"""
Parsing of the consolidated Acts and regulations published as XML by the Department of
Justice Canada (https://github.com/justicecanada/laws-lois-xml).

The structural parser reads the LIMS markup directly. The full text renderer goes through
the HTML stylesheet used for the Justice Laws website instead, so that the markdown matches
what readers see online.
"""

from .full_text import LIMSFullTextRenderer
from .parser import LegislationParser
from .xml_parser import LIMSXMLParser

__all__ = ["LegislationParser", "LIMSFullTextRenderer", "LIMSXMLParser"]
