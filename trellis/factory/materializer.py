"""Turn a declaration tree into records and the links between them."""

import logging
from typing import Any, Callable

from ..persistence.base import Persistence, Record
from ..relations.kinds import RelationDescriptor, RelationKind
from ..relations.resolver import RelationResolver
from ..spec.node import RelationSpecNode
from .attributes import AttributeFactory

logger = logging.getLogger(__name__)

OWNED_KINDS = (RelationKind.OWNED_TO_MANY, RelationKind.POLYMORPHIC_TO_MANY)


class Materializer:
    """Creates entities depth-first and wires them by relation kind.

    A run has two passes. ``prepare`` walks the whole tree first: it runs
    customizers, resolves every relation and checks every state, so a broken
    declaration fails before anything is persisted. ``materialize`` then
    creates the records.
    """

    def __init__(
        self,
        resolver: RelationResolver,
        attributes: AttributeFactory,
        persistence: Persistence,
        scope_builder: Callable[[RelationSpecNode], Any],
        key_name: str = "id",
    ):
        self.resolver = resolver
        self.attributes = attributes
        self.persistence = persistence
        self.scope_builder = scope_builder
        self.key_name = key_name

    def run(self, root: RelationSpecNode, entity_type: str, persist: bool = True) -> list[Record]:
        """Prepare and materialize a tree rooted at ``root``.

        Args:
            root: The builder's root node.
            entity_type: The entity type the root produces.
            persist: False to build records in memory only.

        Returns:
            The root records, in creation order.
        """
        self.prepare(root, entity_type)
        return self.materialize(root, persist=persist)

    # -------------------------------------------------------------------------
    # Preparation
    # -------------------------------------------------------------------------

    def prepare(self, node: RelationSpecNode, entity_type: str) -> None:
        """Resolve types and relations for a subtree without creating anything.

        Raises:
            UnresolvableRelationError: If a declared relation does not exist.
            UnknownStateError: If a declared state does not exist.
        """
        node.target_type = entity_type
        self._customize(node)
        self.attributes.check_states(entity_type, node.states)

        for child in node.ordered_children():
            descriptor = self.resolver.resolve(entity_type, child.relation)
            child.descriptor = descriptor
            if child.pivot and not descriptor.is_pivot:
                logger.debug(
                    "Ignoring pivot attributes on %s.%s (%s)",
                    entity_type,
                    child.relation,
                    descriptor.kind.value,
                )
            if not descriptor.many and child.instance_count > 1:
                logger.warning(
                    "%s.%s is a to-one relation but declares count=%d; only the first is linked",
                    entity_type,
                    child.relation,
                    child.instance_count,
                )
            self.prepare(child, descriptor.related_type)

    def _customize(self, node: RelationSpecNode) -> None:
        """Run a node's customizer once.

        Count and states passed directly to the declaration win over whatever
        the customizer sets.
        """
        if node.customizer is None or node.customized:
            return

        declared_count = node.count
        declared_states = list(node.states)

        node.customizer(self.scope_builder(node))
        node.customized = True

        if declared_count is not None:
            node.count = declared_count
        if declared_states:
            node.states = declared_states

    # -------------------------------------------------------------------------
    # Materialization
    # -------------------------------------------------------------------------

    def materialize(
        self,
        node: RelationSpecNode,
        persist: bool = True,
        inject: dict[str, Any] | None = None,
    ) -> list[Record]:
        """Create ``node.instance_count`` records for a prepared node.

        Args:
            node: A node that has been through ``prepare``.
            persist: False to skip the persistence layer.
            inject: Key columns set by the parent; they override everything.

        Returns:
            The created records, in ascending creation order.
        """
        return [
            self._materialize_one(node, persist, inject)
            for _ in range(node.instance_count)
        ]

    def _materialize_one(
        self,
        node: RelationSpecNode,
        persist: bool,
        inject: dict[str, Any] | None,
    ) -> Record:
        entity_type = node.target_type
        children = [(child, child.descriptor) for child in node.ordered_children()]

        attributes = self.attributes.build(
            entity_type, node.states, node.overrides, node.fillers
        )

        # Owning side first: the host needs the related key before it exists.
        owners: list[tuple[RelationSpecNode, RelationDescriptor, Record]] = []
        for child, descriptor in children:
            if not descriptor.materializes_before_host:
                continue
            owner = self.materialize(child, persist)[0]
            attributes[descriptor.foreign_key] = owner.get(descriptor.owner_key)
            owners.append((child, descriptor, owner))

        if inject:
            attributes.update(inject)

        record = self._store(entity_type, attributes, persist)

        for child, descriptor, owner in owners:
            if persist:
                self.persistence.link(record, owner, descriptor)
            record.add_related(child.relation, [owner], many=False)

        for child, descriptor in children:
            if descriptor.kind not in OWNED_KINDS:
                continue
            keys = {descriptor.foreign_key: record.get(descriptor.owner_key)}
            if descriptor.kind == RelationKind.POLYMORPHIC_TO_MANY:
                keys[descriptor.morph_type_column] = descriptor.morph_type
            if descriptor.many:
                related = self.materialize(child, persist, keys)
            else:
                # Only the first instance of a to-one relation gets the host key.
                related = [self._materialize_one(child, persist, keys)]
                for _ in range(child.instance_count - 1):
                    self._materialize_one(child, persist, None)
            if persist:
                for item in related:
                    self.persistence.link(record, item, descriptor)
            record.add_related(child.relation, related, many=descriptor.many)

        for child, descriptor in children:
            if not descriptor.is_pivot:
                continue
            related = self.materialize(child, persist)
            for item in related:
                item.pivot = self.attributes.pivot_attributes(child.pivot)
                if persist:
                    self.persistence.link(record, item, descriptor, item.pivot)
            record.add_related(child.relation, related, many=True)

        return record

    def _store(self, entity_type: str, attributes: dict[str, Any], persist: bool) -> Record:
        if persist:
            return self.persistence.persist(entity_type, attributes)
        return Record(entity_type=entity_type, attributes=attributes, key_name=self.key_name)
