from typing import List

from pydantic import Field

from lexcan.core.models import LexModel
from lexcan.legislation.models import DocumentType


class GraphNode(LexModel):
    """A document in the reference graph, sized by how often it is referenced."""

    id: str
    type: DocumentType
    title: str
    in_degree: int = 0


class GraphLink(LexModel):
    """A reference from one document to another."""

    source: str
    target: str


class ReferenceGraph(LexModel):
    """The nodes/links structure loaded by the force-directed visualization."""

    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(default_factory=list)
