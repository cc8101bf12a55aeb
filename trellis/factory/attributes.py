"""Attribute generation: schema templates, states, overrides and fillers."""

import copy
from typing import Any, Callable, Iterable, Mapping

from faker import Faker

from ..graph.model_graph import ModelGraph
from .errors import TemplateError, UnknownStateError

# Faker provider used for an attribute that names a type but no ``fake``
TYPE_PROVIDERS = {
    "string": "word",
    "str": "word",
    "text": "sentence",
    "int": "random_int",
    "integer": "random_int",
    "float": "pyfloat",
    "decimal": "pydecimal",
    "bool": "pybool",
    "boolean": "pybool",
    "date": "date_object",
    "datetime": "date_time",
    "email": "email",
    "uuid": "uuid4",
    "url": "url",
    "name": "name",
}


class AttributeFactory:
    """Builds attribute dicts for entities.

    Precedence, lowest to highest: schema template, states in declared order,
    overrides, fillers.
    """

    def __init__(self, graph: ModelGraph, faker: Faker):
        self.graph = graph
        self.faker = faker

    def defaults(self, entity_type: str) -> dict[str, Any]:
        """Generate template values for every attribute the schema declares.

        Entity types without a template produce an empty dict.
        """
        return {
            attr["name"]: self._generate(entity_type, attr)
            for attr in self.graph.get_attributes(entity_type)
        }

    def _generate(self, entity_type: str, attr: Mapping[str, Any]) -> Any:
        if attr.get("default") is not None:
            return copy.deepcopy(attr["default"])

        if attr.get("optional") and not attr.get("fake"):
            return None

        provider_name = attr.get("fake") or TYPE_PROVIDERS.get(attr.get("attr_type", ""))
        if provider_name is None:
            return None

        proxy = self.faker.unique if attr.get("unique") else self.faker
        provider = getattr(proxy, provider_name, None)
        if not callable(provider):
            raise TemplateError(
                f"Unknown fake provider '{provider_name}' for {entity_type}.{attr['name']}",
                entity_type,
            )
        return provider()

    def state_attributes(self, entity_type: str, state: str) -> dict[str, Any]:
        """Look up the overrides a state applies.

        Raises:
            UnknownStateError: If the entity does not define the state.
        """
        node = self.graph.get_state(entity_type, state)
        if node is None:
            raise UnknownStateError(entity_type, state)
        return copy.deepcopy(node["attributes"])

    def check_states(self, entity_type: str, states: Iterable[str]) -> None:
        """Raise UnknownStateError for the first undefined state."""
        for state in states:
            if self.graph.get_state(entity_type, state) is None:
                raise UnknownStateError(entity_type, state)

    def build(
        self,
        entity_type: str,
        states: Iterable[str] = (),
        overrides: Mapping[str, Any] | None = None,
        fillers: Iterable[Callable[[Faker], Mapping[str, Any]]] = (),
    ) -> dict[str, Any]:
        """Build the attribute dict for one entity instance.

        Callable override values are called with the attributes built so far.
        Fillers are called with the Faker instance and must return a mapping.
        """
        attributes = self.defaults(entity_type)

        for state in states:
            attributes.update(self.state_attributes(entity_type, state))

        for name, value in (overrides or {}).items():
            attributes[name] = value(attributes) if callable(value) else value

        for filler in fillers:
            attributes.update(self._call_filler(entity_type, filler))

        return attributes

    def pivot_attributes(
        self, pivots: Iterable[Mapping[str, Any] | Callable[[Faker], Mapping[str, Any]]]
    ) -> dict[str, Any]:
        """Resolve pivot fillers into the attributes of one association record."""
        attributes: dict[str, Any] = {}
        for pivot in pivots:
            if isinstance(pivot, Mapping):
                attributes.update(pivot)
            else:
                attributes.update(self._call_filler("pivot", pivot))
        return attributes

    def _call_filler(self, entity_type: str, filler: Callable[[Faker], Any]) -> dict[str, Any]:
        result = filler(self.faker)
        if not isinstance(result, Mapping):
            raise TemplateError(
                f"Filler for {entity_type} must return a mapping, got {type(result).__name__}",
                entity_type,
            )
        return dict(result)
