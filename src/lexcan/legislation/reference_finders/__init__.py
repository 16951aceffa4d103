from .aggregate import aggregate_references, count_links
from .base import ReferenceFinder
from .xref import XRefReferenceFinder

__all__ = ["ReferenceFinder", "XRefReferenceFinder", "aggregate_references", "count_links"]
