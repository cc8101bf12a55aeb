"""Schema layer for parsing and validating YAML entity schemas."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import (
    Attribute,
    Entity,
    Relationship,
    State,
    TrellisSchema,
    snake_case,
)
from .loader import load_yaml, parse_schema, parse_schema_data, parse_schema_from_string

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "Attribute",
    "Entity",
    "Relationship",
    "State",
    "TrellisSchema",
    "snake_case",
    "load_yaml",
    "parse_schema",
    "parse_schema_data",
    "parse_schema_from_string",
]
