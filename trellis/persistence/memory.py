"""In-memory persistence for tests and dry-run seeding."""

import itertools
import logging
from typing import Any, Iterator, Mapping

from ..relations.kinds import RelationDescriptor, RelationKind
from .base import Record
from .errors import PersistenceError

logger = logging.getLogger(__name__)


class InMemoryStore:
    """A dict-backed store with auto-increment keys per entity type.

    Association records are kept per pivot table as plain dicts.
    """

    def __init__(self, key_name: str = "id"):
        self.key_name = key_name
        self._tables: dict[str, list[Record]] = {}
        self._pivots: dict[str, list[dict[str, Any]]] = {}
        self._sequences: dict[str, Iterator[int]] = {}

    # -------------------------------------------------------------------------
    # Persistence protocol
    # -------------------------------------------------------------------------

    def persist(self, entity_type: str, attributes: Mapping[str, Any]) -> Record:
        """Insert a record, assigning the next key when none is given.

        Raises:
            PersistenceError: If an explicit key is already taken.
        """
        data = dict(attributes)
        key = data.get(self.key_name)

        if key is None:
            key = next(self._sequence(entity_type))
            while self.find(entity_type, key) is not None:
                key = next(self._sequence(entity_type))
            data[self.key_name] = key
        elif self.find(entity_type, key) is not None:
            raise PersistenceError(
                f"Duplicate key {self.key_name}={key!r} for {entity_type}", entity_type
            )

        record = Record(
            entity_type=entity_type,
            attributes=data,
            key_name=self.key_name,
            persisted=True,
        )
        self._tables.setdefault(entity_type, []).append(record)
        logger.debug("Persisted %s %s=%r", entity_type, self.key_name, key)
        return record

    def link(
        self,
        host: Record,
        child: Record,
        descriptor: RelationDescriptor,
        pivot: Mapping[str, Any] | None = None,
    ) -> None:
        """Wire ``child`` to ``host`` according to the relation kind.

        Raises:
            PersistenceError: If either record has not been persisted here.
        """
        for record in (host, child):
            if not record.persisted or self.find(record.entity_type, record.key) is None:
                raise PersistenceError(
                    f"Cannot link unsaved {record.entity_type} record", record.entity_type
                )

        if descriptor.kind == RelationKind.OWNING_TO_ONE:
            host.attributes[descriptor.foreign_key] = child.get(descriptor.owner_key)
        elif descriptor.kind == RelationKind.MANY_TO_MANY:
            row = dict(pivot or {})
            row[descriptor.pivot_host_key] = host.get(descriptor.owner_key)
            row[descriptor.pivot_related_key] = child.key
            self._pivots.setdefault(descriptor.pivot_table, []).append(row)
        else:
            child.attributes[descriptor.foreign_key] = host.get(descriptor.owner_key)
            if descriptor.kind == RelationKind.POLYMORPHIC_TO_MANY:
                child.attributes[descriptor.morph_type_column] = descriptor.morph_type

        logger.debug(
            "Linked %s %r -[%s]-> %s %r",
            host.entity_type,
            host.key,
            descriptor.name,
            child.entity_type,
            child.key,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _sequence(self, entity_type: str) -> Iterator[int]:
        if entity_type not in self._sequences:
            self._sequences[entity_type] = itertools.count(1)
        return self._sequences[entity_type]

    def all(self, entity_type: str) -> list[Record]:
        """All records of a type, in insertion order."""
        return list(self._tables.get(entity_type, []))

    def find(self, entity_type: str, key: Any) -> Record | None:
        """Find a record by primary key."""
        for record in self._tables.get(entity_type, []):
            if record.key == key:
                return record
        return None

    def where(self, entity_type: str, **criteria: Any) -> list[Record]:
        """Records whose attributes equal every given value."""
        return [
            record
            for record in self._tables.get(entity_type, [])
            if all(record.get(name) == value for name, value in criteria.items())
        ]

    def count(self, entity_type: str | None = None) -> int:
        """Number of records of one type, or of all types."""
        if entity_type is not None:
            return len(self._tables.get(entity_type, []))
        return sum(len(records) for records in self._tables.values())

    def entity_types(self) -> list[str]:
        """Entity types that have at least one record."""
        return [name for name, records in self._tables.items() if records]

    def pivots(self, table: str, **criteria: Any) -> list[dict[str, Any]]:
        """Association rows of a pivot table, optionally filtered."""
        return [
            dict(row)
            for row in self._pivots.get(table, [])
            if all(row.get(name) == value for name, value in criteria.items())
        ]

    def pivot_tables(self) -> list[str]:
        return list(self._pivots.keys())

    def related(self, record: Record, descriptor: RelationDescriptor) -> list[Record]:
        """Query the records linked to ``record`` through a relation."""
        owner_value = record.get(descriptor.owner_key)

        if descriptor.kind == RelationKind.OWNING_TO_ONE:
            value = record.get(descriptor.foreign_key)
            return [
                r
                for r in self._tables.get(descriptor.related_type, [])
                if value is not None and r.get(descriptor.owner_key) == value
            ]

        if descriptor.kind == RelationKind.MANY_TO_MANY:
            keys = [
                row[descriptor.pivot_related_key]
                for row in self.pivots(
                    descriptor.pivot_table, **{descriptor.pivot_host_key: owner_value}
                )
            ]
            found = (self.find(descriptor.related_type, key) for key in keys)
            return [r for r in found if r is not None]

        criteria = {descriptor.foreign_key: owner_value}
        if descriptor.kind == RelationKind.POLYMORPHIC_TO_MANY:
            criteria[descriptor.morph_type_column] = descriptor.morph_type
        return self.where(descriptor.related_type, **criteria)

    def reset(self) -> None:
        """Drop all records, association rows and key sequences."""
        self._tables.clear()
        self._pivots.clear()
        self._sequences.clear()
