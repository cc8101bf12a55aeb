"""Builder for converting a TrellisSchema to a ModelGraph."""

from ..schema.models import TrellisSchema
from .model_graph import ModelGraph


def build_graph(schema: TrellisSchema) -> ModelGraph:
    """Build a ModelGraph from a TrellisSchema.

    Args:
        schema: The parsed entity schema.

    Returns:
        A ModelGraph representing the schema.
    """
    graph = ModelGraph()

    # Add all entities first
    for entity_name, entity in schema.entities.items():
        graph.add_entity(
            entity_name,
            has_template=entity.has_template,
        )

        for attr in entity.attributes:
            graph.add_attribute(
                entity_name,
                attr.name,
                attr_type=attr.type,
                fake=attr.fake,
                default=attr.default,
                unique=attr.unique,
                optional=attr.optional,
            )

        for state in entity.states:
            graph.add_state(entity_name, state.name, state.attributes)

    # Add relationships (after all entities exist)
    for entity_name, entity in schema.entities.items():
        for rel in entity.relationships:
            graph.add_relationship(
                entity_name,
                rel.target,
                rel.name,
                rel.type,
                foreign_key=rel.foreign_key,
                owner_key=rel.owner_key,
                pivot_table=rel.pivot_table,
                pivot_host_key=rel.pivot_host_key,
                pivot_related_key=rel.pivot_related_key,
                morph_name=rel.morph_name,
            )

    return graph
