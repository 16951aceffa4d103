from collections import Counter
from typing import Iterable, List, Optional, Tuple

from lexcan.legislation.models import ReferenceCount, Section


def count_links(links: Iterable[Optional[str]]) -> List[ReferenceCount]:
    """Count occurrences of each distinct non-null link, in order of first occurrence."""
    counts = Counter(link for link in links if link is not None)
    return [ReferenceCount(link=link, count=count) for link, count in counts.items()]


def aggregate_references(
    sections: Iterable[Section],
) -> Tuple[List[ReferenceCount], List[ReferenceCount]]:
    """Build the document level (internal, external) reference tables.

    Only the top level section lists are counted. A section's lists already cover
    its whole subtree, so descending into subsections would count references twice.
    """
    sections = list(sections)

    internal_refs = count_links(ref.link for section in sections for ref in section.internal_refs)
    external_refs = count_links(ref.link for section in sections for ref in section.external_refs)

    return internal_refs, external_refs
