"""Graph layer for representing entity schemas as networkx graphs."""

from .node_types import EdgeType, NodeType, RELATIONSHIP_EDGE_TYPES
from .model_graph import ModelGraph
from .builder import build_graph

__all__ = [
    "NodeType",
    "EdgeType",
    "RELATIONSHIP_EDGE_TYPES",
    "ModelGraph",
    "build_graph",
]
