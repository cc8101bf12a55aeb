"""Node and edge type definitions for the schema graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the schema graph."""

    ENTITY = "entity"
    STATE = "state"
    ATTRIBUTE = "attribute"


class EdgeType(str, Enum):
    """Types of edges in the schema graph."""

    # Entity relationships
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    BELONGS_TO_MANY = "belongs_to_many"
    MORPH_ONE = "morph_one"
    MORPH_MANY = "morph_many"

    # Structure edges
    HAS_STATE = "has_state"  # Entity -> State
    HAS_ATTRIBUTE = "has_attribute"  # Entity -> Attribute


RELATIONSHIP_EDGE_TYPES = frozenset(
    {
        EdgeType.BELONGS_TO,
        EdgeType.HAS_ONE,
        EdgeType.HAS_MANY,
        EdgeType.BELONGS_TO_MANY,
        EdgeType.MORPH_ONE,
        EdgeType.MORPH_MANY,
    }
)
