"""Relationship kind resolution."""

from .errors import UnresolvableRelationError
from .kinds import KIND_BY_TYPE, RelationDescriptor, RelationKind
from .resolver import MetadataProvider, RelationResolver

__all__ = [
    "UnresolvableRelationError",
    "KIND_BY_TYPE",
    "RelationDescriptor",
    "RelationKind",
    "MetadataProvider",
    "RelationResolver",
]
