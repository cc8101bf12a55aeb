"""ModelGraph wrapper around networkx for Trellis schemas."""

from typing import Any, Iterator

import networkx as nx

from .node_types import EdgeType, NodeType, RELATIONSHIP_EDGE_TYPES


class ModelGraph:
    """A graph representation of a Trellis schema.

    Wraps a networkx MultiDiGraph with domain-specific methods for working
    with entities, their attributes, states, and named relationships. Two
    entities may be connected by several relationships, so relationship
    edges are keyed by relation name.
    """

    def __init__(self):
        """Initialize an empty schema graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_entity(self, name: str, **attrs: Any) -> str:
        """Add an entity node to the graph.

        Args:
            name: The entity name.
            **attrs: Additional attributes for the node.

        Returns:
            The node ID.
        """
        node_id = f"entity:{name}"
        self._graph.add_node(
            node_id,
            node_type=NodeType.ENTITY,
            name=name,
            **attrs,
        )
        return node_id

    def add_attribute(self, entity_name: str, attr_name: str, **attrs: Any) -> str:
        """Add an attribute node to the graph.

        Args:
            entity_name: The owning entity name.
            attr_name: The attribute name.
            **attrs: Additional attributes (type, fake, default, unique, ...).

        Returns:
            The node ID.
        """
        node_id = f"attr:{entity_name}.{attr_name}"
        self._graph.add_node(
            node_id,
            node_type=NodeType.ATTRIBUTE,
            entity=entity_name,
            name=attr_name,
            **attrs,
        )

        entity_id = f"entity:{entity_name}"
        if self._graph.has_node(entity_id):
            self._graph.add_edge(entity_id, node_id, edge_type=EdgeType.HAS_ATTRIBUTE)

        return node_id

    def add_state(
        self,
        entity_name: str,
        state_name: str,
        attributes: dict[str, Any] | None = None,
    ) -> str:
        """Add a state node to the graph.

        Args:
            entity_name: The owning entity name.
            state_name: The state name.
            attributes: Attribute overrides the state applies.

        Returns:
            The node ID.
        """
        node_id = f"state:{entity_name}.{state_name}"
        self._graph.add_node(
            node_id,
            node_type=NodeType.STATE,
            entity=entity_name,
            name=state_name,
            attributes=dict(attributes or {}),
        )

        entity_id = f"entity:{entity_name}"
        if self._graph.has_node(entity_id):
            self._graph.add_edge(entity_id, node_id, edge_type=EdgeType.HAS_STATE)

        return node_id

    def add_relationship(
        self,
        from_entity: str,
        to_entity: str,
        name: str,
        rel_type: str,
        **meta: Any,
    ) -> None:
        """Add a named relationship edge between entities.

        Args:
            from_entity: The entity exposing the relation.
            to_entity: The related entity.
            name: The relation name, unique per source entity.
            rel_type: The relationship type (belongs_to, has_many, etc.).
            **meta: Key names (foreign_key, owner_key, pivot_table, ...).
        """
        self._graph.add_edge(
            f"entity:{from_entity}",
            f"entity:{to_entity}",
            key=name,
            edge_type=EdgeType(rel_type),
            name=name,
            **meta,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_entity(self, name: str) -> bool:
        """Check whether an entity is defined."""
        node_id = f"entity:{name}"
        return (
            self._graph.has_node(node_id)
            and self._graph.nodes[node_id].get("node_type") == NodeType.ENTITY
        )

    def get_entity_names(self) -> list[str]:
        """Get all entity names in the graph."""
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("node_type") == NodeType.ENTITY
        ]

    def get_entity_node(self, name: str) -> dict[str, Any] | None:
        """Get an entity node by name."""
        if self.has_entity(name):
            return dict(self._graph.nodes[f"entity:{name}"])
        return None

    def _children_of_type(self, entity_name: str, edge_type: EdgeType) -> list[dict[str, Any]]:
        entity_id = f"entity:{entity_name}"
        if not self._graph.has_node(entity_id):
            return []
        return [
            dict(self._graph.nodes[target])
            for _, target, data in self._graph.out_edges(entity_id, data=True)
            if data.get("edge_type") == edge_type
        ]

    def get_attributes(self, entity_name: str) -> list[dict[str, Any]]:
        """Get attribute definitions for an entity, in declaration order."""
        return self._children_of_type(entity_name, EdgeType.HAS_ATTRIBUTE)

    def get_states_for_entity(self, entity_name: str) -> list[dict[str, Any]]:
        """Get all states for an entity."""
        return self._children_of_type(entity_name, EdgeType.HAS_STATE)

    def get_state(self, entity_name: str, state_name: str) -> dict[str, Any] | None:
        """Get a state node by name, or None if undefined."""
        node_id = f"state:{entity_name}.{state_name}"
        if self._graph.has_node(node_id):
            return dict(self._graph.nodes[node_id])
        return None

    def get_relationship(
        self, entity_name: str, relation_name: str
    ) -> dict[str, Any] | None:
        """Get the metadata of a named relation exposed by an entity.

        Returns:
            The edge data plus ``source`` and ``target`` entity names, or
            None if the entity has no such relation.
        """
        entity_id = f"entity:{entity_name}"
        if not self._graph.has_node(entity_id):
            return None

        for _, target, key, data in self._graph.out_edges(
            entity_id, keys=True, data=True
        ):
            if key == relation_name and data.get("edge_type") in RELATIONSHIP_EDGE_TYPES:
                rel = dict(data)
                rel["source"] = entity_name
                rel["target"] = self._graph.nodes[target].get(
                    "name", target.replace("entity:", "")
                )
                return rel
        return None

    def get_relationships_for_entity(self, entity_name: str) -> list[dict[str, Any]]:
        """Get all relationships for an entity (both directions)."""
        entity_id = f"entity:{entity_name}"
        if not self._graph.has_node(entity_id):
            return []

        relationships = []

        for _, target, data in self._graph.out_edges(entity_id, data=True):
            if data.get("edge_type") in RELATIONSHIP_EDGE_TYPES:
                relationships.append({
                    "name": data["name"],
                    "type": data["edge_type"].value,
                    "target": target.replace("entity:", ""),
                    "direction": "outgoing",
                })

        for source, _, data in self._graph.in_edges(entity_id, data=True):
            if data.get("edge_type") in RELATIONSHIP_EDGE_TYPES:
                relationships.append({
                    "name": data["name"],
                    "type": data["edge_type"].value,
                    "target": source.replace("entity:", ""),
                    "direction": "incoming",
                })

        return relationships

    def has_any_relationships(self, entity_name: str) -> bool:
        """Check if an entity has any relationships (in or out)."""
        return bool(self.get_relationships_for_entity(entity_name))

    def iter_entity_relationships(self) -> Iterator[tuple[str, str, str, str]]:
        """Iterate over all entity relationships.

        Yields:
            Tuples of (from_entity, to_entity, relation_name, relationship_type).
        """
        for source, target, data in self._graph.edges(data=True):
            edge_type = data.get("edge_type")
            if edge_type in RELATIONSHIP_EDGE_TYPES:
                yield (
                    source.replace("entity:", ""),
                    target.replace("entity:", ""),
                    data["name"],
                    edge_type.value,
                )
