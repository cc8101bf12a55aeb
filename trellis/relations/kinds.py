"""Relationship kinds and resolved relation descriptors."""

from dataclasses import dataclass
from enum import Enum


class RelationKind(str, Enum):
    """How two entities are wired together."""

    OWNING_TO_ONE = "owning_to_one"  # host holds the foreign key
    OWNED_TO_MANY = "owned_to_many"  # related entity holds the foreign key
    MANY_TO_MANY = "many_to_many"  # association record links both keys
    POLYMORPHIC_TO_MANY = "polymorphic_to_many"  # foreign key plus type column


# Schema relationship type -> kind
KIND_BY_TYPE: dict[str, RelationKind] = {
    "belongs_to": RelationKind.OWNING_TO_ONE,
    "has_one": RelationKind.OWNED_TO_MANY,
    "has_many": RelationKind.OWNED_TO_MANY,
    "belongs_to_many": RelationKind.MANY_TO_MANY,
    "morph_one": RelationKind.POLYMORPHIC_TO_MANY,
    "morph_many": RelationKind.POLYMORPHIC_TO_MANY,
}


@dataclass(frozen=True)
class RelationDescriptor:
    """Everything needed to link a host entity to a related entity."""

    name: str
    kind: RelationKind
    host_type: str
    related_type: str
    foreign_key: str
    owner_key: str = "id"
    foreign_key_owner: str = "related"  # "host" or "related"
    many: bool = True
    pivot_table: str | None = None
    pivot_host_key: str | None = None
    pivot_related_key: str | None = None
    morph_type_column: str | None = None
    morph_type: str | None = None

    @property
    def is_pivot(self) -> bool:
        """Whether linking writes an association record."""
        return self.kind == RelationKind.MANY_TO_MANY

    @property
    def materializes_before_host(self) -> bool:
        """Whether the related entity must exist before the host is persisted."""
        return self.kind == RelationKind.OWNING_TO_ONE
