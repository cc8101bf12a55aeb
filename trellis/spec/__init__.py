"""Declaration parsing and the relation spec tree."""

from .errors import InvalidPathError
from .node import DeclarationMode, RelationSpecNode
from .path import Declaration, parse_declaration, parse_path, validate_count
from .tree import BranchPolicy, SpecTree

__all__ = [
    "InvalidPathError",
    "DeclarationMode",
    "RelationSpecNode",
    "Declaration",
    "parse_declaration",
    "parse_path",
    "validate_count",
    "BranchPolicy",
    "SpecTree",
]
