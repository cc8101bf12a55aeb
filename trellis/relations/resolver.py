"""Resolve relation names to relationship kinds and key names."""

import logging
from typing import Any, Protocol

from ..schema.models import snake_case
from .errors import UnresolvableRelationError
from .kinds import KIND_BY_TYPE, RelationDescriptor, RelationKind

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    """Anything that can describe the relations an entity exposes."""

    def has_entity(self, name: str) -> bool: ...

    def get_relationship(
        self, entity_name: str, relation_name: str
    ) -> dict[str, Any] | None: ...


class RelationResolver:
    """Classify relations by querying an entity metadata provider.

    Descriptors are cached per (host type, relation name) since the schema
    does not change during a factory's lifetime.
    """

    def __init__(self, metadata: MetadataProvider, default_owner_key: str = "id"):
        self.metadata = metadata
        self.default_owner_key = default_owner_key
        self._cache: dict[tuple[str, str], RelationDescriptor] = {}

    def resolve(self, host_type: str, relation_name: str) -> RelationDescriptor:
        """Resolve a relation exposed by ``host_type``.

        Args:
            host_type: The entity type the relation starts from.
            relation_name: The relation name as used in a path segment.

        Returns:
            A RelationDescriptor with the kind, related type and key names.

        Raises:
            UnresolvableRelationError: If the host type is unknown or exposes
                no relation with that name.
        """
        cache_key = (host_type, relation_name)
        if cache_key in self._cache:
            return self._cache[cache_key]

        if not self.metadata.has_entity(host_type):
            raise UnresolvableRelationError(
                host_type,
                relation_name,
                f"Cannot resolve '{relation_name}': entity '{host_type}' is not defined",
            )

        rel = self.metadata.get_relationship(host_type, relation_name)
        if rel is None:
            raise UnresolvableRelationError(host_type, relation_name)

        descriptor = self._describe(host_type, relation_name, rel)
        logger.debug(
            "Resolved %s.%s as %s -> %s",
            host_type,
            relation_name,
            descriptor.kind.value,
            descriptor.related_type,
        )
        self._cache[cache_key] = descriptor
        return descriptor

    def _describe(
        self, host_type: str, relation_name: str, rel: dict[str, Any]
    ) -> RelationDescriptor:
        rel_type = getattr(rel["edge_type"], "value", rel["edge_type"])
        kind = KIND_BY_TYPE[rel_type]
        related_type = rel["target"]
        owner_key = rel.get("owner_key") or self.default_owner_key

        if kind == RelationKind.OWNING_TO_ONE:
            return RelationDescriptor(
                name=relation_name,
                kind=kind,
                host_type=host_type,
                related_type=related_type,
                foreign_key=rel.get("foreign_key") or f"{relation_name}_id",
                owner_key=owner_key,
                foreign_key_owner="host",
                many=False,
            )

        if kind == RelationKind.MANY_TO_MANY:
            host_snake = snake_case(host_type)
            related_snake = snake_case(related_type)
            host_key = rel.get("pivot_host_key") or f"{host_snake}_id"
            related_key = rel.get("pivot_related_key") or f"{related_snake}_id"
            if host_key == related_key:
                # Self-referencing many-to-many needs distinct columns.
                related_key = f"related_{related_key}"
            return RelationDescriptor(
                name=relation_name,
                kind=kind,
                host_type=host_type,
                related_type=related_type,
                foreign_key=host_key,
                owner_key=owner_key,
                foreign_key_owner="pivot",
                many=True,
                pivot_table=rel.get("pivot_table")
                or "_".join(sorted([host_snake, related_snake])),
                pivot_host_key=host_key,
                pivot_related_key=related_key,
            )

        many = rel_type.endswith("_many")

        if kind == RelationKind.POLYMORPHIC_TO_MANY:
            morph_name = rel.get("morph_name")
            if not morph_name:
                raise UnresolvableRelationError(
                    host_type,
                    relation_name,
                    f"Polymorphic relation '{host_type}.{relation_name}' has no morph_name",
                )
            return RelationDescriptor(
                name=relation_name,
                kind=kind,
                host_type=host_type,
                related_type=related_type,
                foreign_key=rel.get("foreign_key") or f"{morph_name}_id",
                owner_key=owner_key,
                foreign_key_owner="related",
                many=many,
                morph_type_column=f"{morph_name}_type",
                morph_type=host_type,
            )

        return RelationDescriptor(
            name=relation_name,
            kind=kind,
            host_type=host_type,
            related_type=related_type,
            foreign_key=rel.get("foreign_key") or f"{snake_case(host_type)}_id",
            owner_key=owner_key,
            foreign_key_owner="related",
            many=many,
        )
