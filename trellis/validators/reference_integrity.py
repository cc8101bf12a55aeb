"""Reference integrity validator."""

from collections import Counter

from ..graph.model_graph import ModelGraph
from ..schema.models import TrellisSchema
from .base import ValidationResult


def check_reference_integrity(schema: TrellisSchema, graph: ModelGraph) -> ValidationResult:
    """Check that relations can be resolved at materialization time.

    This validator checks:
    - Relationship targets reference defined entities
    - Relation names are unique per entity
    - Polymorphic relations name their morph columns

    Args:
        schema: The parsed schema.
        graph: The schema graph.

    Returns:
        ValidationResult with errors for broken relations.
    """
    result = ValidationResult()

    for entity_name, entity in schema.entities.items():
        for rel in entity.relationships:
            if not graph.has_entity(rel.target):
                result.add_error(
                    code="UNDEFINED_ENTITY_REF",
                    message=f"Relation '{rel.name}' references undefined entity '{rel.target}'",
                    entity=entity_name,
                    relation=rel.name,
                    referenced_entity=rel.target,
                    relationship_type=rel.type,
                )

            if rel.type.startswith("morph_") and not rel.morph_name:
                result.add_error(
                    code="MISSING_MORPH_NAME",
                    message=f"Polymorphic relation '{rel.name}' has no morph_name",
                    entity=entity_name,
                    relation=rel.name,
                )

        counts = Counter(rel.name for rel in entity.relationships)
        for name, count in counts.items():
            if count > 1:
                result.add_error(
                    code="DUPLICATE_RELATION",
                    message=f"Relation '{name}' is declared {count} times",
                    entity=entity_name,
                    relation=name,
                )

    return result
