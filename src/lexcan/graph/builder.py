import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from lexcan.graph.models import GraphLink, GraphNode, ReferenceGraph
from lexcan.legislation.models import Document

logger = logging.getLogger(__name__)


def _build_link_index(documents: Iterable[Document]) -> Dict[str, str]:
    """Map every identifier a reference may use for a document to that document's id.

    External references point at an Act's chapter number or a regulation's
    instrument number, which is usually but not always the file stem.
    """
    index = {}
    for document in documents:
        for key in (document.id, document.consolidated_number, document.instrument_number):
            if key and key not in index:
                index[key] = document.id
    return index


def _outgoing_links(document: Document) -> List[str]:
    """External reference links, plus the enabling Act of a regulation."""
    links = [reference.link for reference in document.external_refs]
    if document.enabling_authority is not None and document.enabling_authority.link:
        links.append(document.enabling_authority.link)
    return links


def resolve_link(link: Optional[str], index: Dict[str, str]) -> Optional[str]:
    if not link:
        return None
    return index.get(link) or index.get(link.replace("/", "-"))


def build_reference_graph(documents: Iterable[Document]) -> ReferenceGraph:
    """Build the document reference graph from extracted documents.

    English and French versions of a law share an id, so each id is one node and
    the first document seen provides its type and title. Links are deduplicated
    per (source, target) pair and self references are dropped.
    """
    documents = list(documents)
    index = _build_link_index(documents)

    first_seen: Dict[str, Document] = {}
    for document in documents:
        first_seen.setdefault(document.id, document)

    links = {}
    for document in documents:
        for link in _outgoing_links(document):
            target = resolve_link(link, index)
            if target is None or target == document.id:
                continue
            links.setdefault((document.id, target), GraphLink(source=document.id, target=target))

    in_degree = Counter(target for _, target in links)

    nodes = [
        GraphNode(id=doc_id, type=document.type, title=document.title, in_degree=in_degree[doc_id])
        for doc_id, document in first_seen.items()
    ]

    logger.info(
        f"Built reference graph with {len(nodes)} nodes and {len(links)} links",
        extra={"node_count": len(nodes), "link_count": len(links)},
    )

    return ReferenceGraph(nodes=nodes, links=list(links.values()))
