"""Orphan entity detection validator."""

from ..graph.model_graph import ModelGraph
from .base import ValidationResult


def check_orphan_entities(graph: ModelGraph) -> ValidationResult:
    """Check for entities with no relationships.

    An orphan entity can still be built on its own, but it can never be
    reached through a relation path. This may indicate a missing relation.

    Args:
        graph: The schema graph to check.

    Returns:
        ValidationResult with warnings for orphan entities.
    """
    result = ValidationResult()

    entity_names = graph.get_entity_names()
    if len(entity_names) < 2:
        return result

    for entity_name in entity_names:
        if not graph.has_any_relationships(entity_name):
            result.add_warning(
                code="ORPHAN_ENTITY",
                message=f"Entity '{entity_name}' has no relationships to other entities",
                entity=entity_name,
            )

    return result
