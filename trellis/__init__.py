"""Trellis: declarative graphs of related test entities.

Example:
    >>> factory = Factory.from_file("schema.yaml")
    >>> user = factory("User").with_(2, "servers").with_(3, "servers.sites").create()
"""

__version__ = "0.1.0"

from .config import FactoryConfig
from .errors import TrellisError
from .factory import (
    Builder,
    BuilderConsumedError,
    Factory,
    FactoryError,
    TemplateError,
    UnknownStateError,
)
from .persistence import InMemoryStore, Persistence, PersistenceError, Record
from .relations import RelationDescriptor, RelationKind, UnresolvableRelationError
from .spec import BranchPolicy, InvalidPathError

__all__ = [
    "__version__",
    "FactoryConfig",
    "TrellisError",
    "Builder",
    "BuilderConsumedError",
    "Factory",
    "FactoryError",
    "TemplateError",
    "UnknownStateError",
    "InMemoryStore",
    "Persistence",
    "PersistenceError",
    "Record",
    "RelationDescriptor",
    "RelationKind",
    "UnresolvableRelationError",
    "BranchPolicy",
    "InvalidPathError",
]
