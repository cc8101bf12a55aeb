"""Relationship resolution exceptions."""

from ..errors import TrellisError


class UnresolvableRelationError(TrellisError):
    """Raised when an entity exposes no relation with the requested name."""

    def __init__(self, entity: str, relation: str, message: str | None = None):
        self.entity = entity
        self.relation = relation
        super().__init__(
            message or f"Entity '{entity}' has no relation named '{relation}'"
        )
