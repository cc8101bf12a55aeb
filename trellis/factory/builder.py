"""The fluent builder API and the factory that hands out builders."""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from faker import Faker

from ..config import FactoryConfig
from ..graph.builder import build_graph
from ..graph.model_graph import ModelGraph
from ..persistence.base import Persistence, Record
from ..persistence.memory import InMemoryStore
from ..relations.resolver import RelationResolver
from ..schema.loader import parse_schema, parse_schema_from_string
from ..schema.models import TrellisSchema
from ..spec.node import DeclarationMode, RelationSpecNode
from ..spec.path import parse_declaration, validate_count
from ..spec.tree import SpecTree
from .attributes import AttributeFactory
from .errors import BuilderConsumedError, FactoryError
from .materializer import Materializer

logger = logging.getLogger(__name__)


class Builder:
    """Declares one entity and the graph of related entities around it.

    Example:
        >>> user = (
        ...     factory("User")
        ...     .with_(2, "servers")
        ...     .with_(3, "active", "servers.sites", {"region": "eu"})
        ...     .create()
        ... )

    Every declaring method returns the builder itself. ``create``, ``make``
    and ``raw`` consume it.
    """

    def __init__(
        self,
        factory: "Factory",
        entity_type: str,
        tree: SpecTree | None = None,
        scoped: bool = False,
    ):
        self.factory = factory
        self.entity_type = entity_type
        self.tree = tree if tree is not None else SpecTree(
            policy=factory.config.branch_policy
        )
        self._scoped = scoped
        self._repeated = False
        self._consumed = False

    @property
    def node(self) -> RelationSpecNode:
        """The node this builder declares."""
        return self.tree.root

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def with_(self, *args: Any, **kwargs: Any) -> "Builder":
        """Declare related entities along a relation path.

        Accepts ``(count?, *states, path, overrides_or_customizer?)``. A path
        declared again merges into the existing node.
        """
        self.tree.declare(parse_declaration(*args, **kwargs), DeclarationMode.MERGE)
        return self

    def and_with(self, *args: Any, **kwargs: Any) -> "Builder":
        """Like ``with_``, but always starts a new sibling branch.

        Later ``with_`` calls that share the prefix attach to the new branch.
        """
        self.tree.declare(parse_declaration(*args, **kwargs), DeclarationMode.FORCE_NEW)
        return self

    def fill(self, filler: Callable[[Faker], Mapping[str, Any]]) -> "Builder":
        """Attach an attribute callback to the most recently declared node."""
        self.tree.fill(filler)
        return self

    def fill_pivot(
        self, pivot: Mapping[str, Any] | Callable[[Faker], Mapping[str, Any]]
    ) -> "Builder":
        """Attach association attributes to the most recently declared node."""
        self.tree.fill_pivot(pivot)
        return self

    def when(self, condition: Any, callback: Callable[["Builder"], Any]) -> "Builder":
        """Call ``callback(self)`` right away if ``condition`` is truthy."""
        if condition:
            callback(self)
        return self

    def times(self, count: int) -> "Builder":
        """Create ``count`` root entities; results are always a list."""
        self.node.count = validate_count(count)
        self._repeated = True
        return self

    def states(self, *states: str | Iterable[str]) -> "Builder":
        """Apply state traits to the root entities."""
        for state in states:
            if isinstance(state, str):
                self.node.add_states([state])
            else:
                self.node.add_states(state)
        return self

    def state(self, state: str) -> "Builder":
        return self.states(state)

    def describe(self) -> dict[str, Any]:
        """The declaration tree as plain data."""
        return self.tree.describe()

    # -------------------------------------------------------------------------
    # Terminal operations
    # -------------------------------------------------------------------------

    def create(self, **attributes: Any) -> Record | list[Record]:
        """Materialize and persist the declared graph."""
        return self._run(attributes, persist=True)

    def make(self, **attributes: Any) -> Record | list[Record]:
        """Materialize the declared graph in memory without persisting."""
        return self._run(attributes, persist=False)

    def raw(self, **attributes: Any) -> dict[str, Any] | list[dict[str, Any]]:
        """Build the root attribute dicts only; relations are ignored."""
        self._consume(attributes)
        materializer = self.factory.materializer
        materializer.prepare(self.node, self.entity_type)
        rows = [
            materializer.attributes.build(
                self.entity_type, self.node.states, self.node.overrides, self.node.fillers
            )
            for _ in range(self.node.instance_count)
        ]
        return self._unwrap(rows)

    def _run(self, attributes: dict[str, Any], persist: bool) -> Record | list[Record]:
        self._consume(attributes)
        logger.debug(
            "%s %s x%d",
            "Creating" if persist else "Making",
            self.entity_type,
            self.node.instance_count,
        )
        records = self.factory.materializer.run(self.node, self.entity_type, persist=persist)
        return self._unwrap(records)

    def _consume(self, attributes: dict[str, Any]) -> None:
        if self._scoped:
            raise FactoryError(
                f"Builder scoped to '{'.'.join(self.node.path)}' cannot be materialized directly"
            )
        if self._consumed:
            raise BuilderConsumedError(
                f"Builder for {self.entity_type} has already been materialized"
            )
        self._consumed = True
        if attributes:
            self.node.merge_overrides(attributes)

    def _unwrap(self, items: list[Any]) -> Any:
        if len(items) == 1 and not self._repeated:
            return items[0]
        return items


class Factory:
    """Owns the schema, Faker and persistence collaborators.

    Call the factory with an entity type to get a fresh builder.
    """

    def __init__(
        self,
        schema: TrellisSchema | ModelGraph,
        persistence: Persistence | None = None,
        config: FactoryConfig | None = None,
    ):
        self.config = config or FactoryConfig()
        self.graph = schema if isinstance(schema, ModelGraph) else build_graph(schema)
        self.persistence = (
            persistence
            if persistence is not None
            else InMemoryStore(key_name=self.config.key_name)
        )

        faker = Faker(self.config.locale)
        if self.config.seed is not None:
            faker.seed_instance(self.config.seed)

        self.attributes = AttributeFactory(self.graph, faker)
        self.resolver = RelationResolver(self.graph, default_owner_key=self.config.key_name)
        self.materializer = Materializer(
            self.resolver,
            self.attributes,
            self.persistence,
            scope_builder=self._scope_builder,
            key_name=self.config.key_name,
        )

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "Factory":
        """Create a factory from a YAML schema file."""
        return cls(parse_schema(path), **kwargs)

    @classmethod
    def from_string(cls, yaml_string: str, **kwargs: Any) -> "Factory":
        """Create a factory from a YAML schema string."""
        return cls(parse_schema_from_string(yaml_string), **kwargs)

    def for_entity(self, entity_type: str) -> Builder:
        """A fresh builder for ``entity_type``."""
        return Builder(self, entity_type)

    __call__ = for_entity

    def _scope_builder(self, node: RelationSpecNode) -> Builder:
        return Builder(
            self,
            node.target_type,
            tree=SpecTree(root=node, policy=self.config.branch_policy),
            scoped=True,
        )
