"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..graph.builder import build_graph
from ..graph.model_graph import ModelGraph
from ..schema.loader import parse_schema
from ..schema.models import TrellisSchema
from .base import ValidationResult
from .fake_providers import check_fake_providers
from .orphan_detector import check_orphan_entities
from .reference_integrity import check_reference_integrity


def run_validators(schema: TrellisSchema, graph: ModelGraph) -> ValidationResult:
    """Run all validators on a schema.

    Args:
        schema: The parsed schema.
        graph: The schema graph.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    # Run reference integrity first (most fundamental)
    result.merge(check_reference_integrity(schema, graph))
    result.merge(check_orphan_entities(graph))
    result.merge(check_fake_providers(schema))

    return result


def validate_schema_file(path: str | Path) -> ValidationResult:
    """Load and validate a schema file.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the schema fails validation.
    """
    schema = parse_schema(path)
    graph = build_graph(schema)
    return run_validators(schema, graph)
