from .builder import build_reference_graph
from .models import GraphLink, GraphNode, ReferenceGraph

__all__ = ["GraphLink", "GraphNode", "ReferenceGraph", "build_reference_graph"]
