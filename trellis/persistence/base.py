"""Records and the persistence protocol the materializer talks to."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Protocol

if TYPE_CHECKING:
    from ..relations.kinds import RelationDescriptor


@dataclass(eq=False)
class Record:
    """An entity instance produced by a builder.

    Attribute values are reachable as items (``record["name"]``) or as
    attributes (``record.name``); related records the builder created are
    reachable the same way through ``relations``.
    """

    entity_type: str
    attributes: dict[str, Any] = field(default_factory=dict)
    key_name: str = "id"
    relations: dict[str, Any] = field(default_factory=dict)
    pivot: dict[str, Any] | None = None
    persisted: bool = False

    @property
    def key(self) -> Any:
        """The primary key, or None for records that were only made."""
        return self.attributes.get(self.key_name)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.attributes[name]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name in ("attributes", "relations"):
            raise AttributeError(name)
        if name in self.attributes:
            return self.attributes[name]
        if name in self.relations:
            return self.relations[name]
        raise AttributeError(
            f"{self.entity_type} record has no attribute or relation '{name}'"
        )

    def add_related(self, relation: str, records: list["Record"], many: bool) -> None:
        """Attach related records under a relation name."""
        if many:
            self.relations.setdefault(relation, []).extend(records)
        elif records:
            self.relations[relation] = records[0]

    def to_dict(self, include_relations: bool = True) -> dict[str, Any]:
        """Render the record (and optionally its related records) as plain data."""
        data: dict[str, Any] = dict(self.attributes)
        if self.pivot is not None:
            data["pivot"] = dict(self.pivot)
        if include_relations:
            for name, related in self.relations.items():
                if isinstance(related, list):
                    data[name] = [r.to_dict() for r in related]
                else:
                    data[name] = related.to_dict()
        return data

    def __repr__(self) -> str:
        return f"<Record {self.entity_type} {self.key_name}={self.key!r}>"


class Persistence(Protocol):
    """The storage collaborator used by ``create``."""

    def persist(self, entity_type: str, attributes: Mapping[str, Any]) -> Record:
        """Insert a new entity and return it with its key set."""
        ...

    def link(
        self,
        host: Record,
        child: Record,
        descriptor: "RelationDescriptor",
        pivot: Mapping[str, Any] | None = None,
    ) -> None:
        """Write the foreign key or association record joining two entities."""
        ...
