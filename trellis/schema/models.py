"""Pydantic models for Trellis entity schemas."""

import re
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

RelationshipType = Literal[
    "belongs_to",
    "has_one",
    "has_many",
    "belongs_to_many",
    "morph_one",
    "morph_many",
]

RELATIONSHIP_TYPES: tuple[str, ...] = (
    "belongs_to",
    "has_one",
    "has_many",
    "belongs_to_many",
    "morph_one",
    "morph_many",
)

TO_MANY_TYPES = {"has_many", "belongs_to_many", "morph_many"}


def snake_case(name: str) -> str:
    """Convert an entity name like ``BlogPost`` to ``blog_post``."""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
    return name.lower().replace(" ", "_").replace("-", "_")


class Attribute(BaseModel):
    """An attribute of an entity and how to fake it."""

    name: str
    type: str = "string"
    fake: str | None = None
    default: Any = None
    unique: bool = False
    optional: bool = False  # None unless a default or fake is given
    description: str | None = None


class State(BaseModel):
    """A named set of attribute overrides."""

    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class Relationship(BaseModel):
    """A named relationship from one entity to another."""

    name: str = ""
    type: RelationshipType
    target: str
    foreign_key: str | None = None
    owner_key: str | None = None
    pivot_table: str | None = None
    pivot_host_key: str | None = None
    pivot_related_key: str | None = None
    morph_name: str | None = None

    @model_validator(mode="after")
    def default_name(self) -> "Relationship":
        """Derive a relation name from the target when none is given."""
        if not self.name:
            name = snake_case(self.target)
            if self.type in TO_MANY_TYPES:
                name += "s"
            self.name = name
        return self

    @property
    def many(self) -> bool:
        """Whether the relation produces a collection."""
        return self.type in TO_MANY_TYPES


class Entity(BaseModel):
    """An entity type in the schema."""

    name: str = ""  # Will be set from the key
    attributes: list[Attribute] = Field(default_factory=list)
    states: list[State] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_entity(cls, data: Any) -> Any:
        """Normalize shorthand relationship, state and attribute syntax."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data
        data = dict(data)

        relationships = data.get("relationships") or []
        if not isinstance(relationships, list):
            relationships = []

        # {has_many: Post, name: posts} -> {type: has_many, target: Post, name: posts}
        normalized_rels = []
        for rel in relationships:
            if isinstance(rel, dict) and "type" not in rel:
                rel = dict(rel)
                for rel_type in RELATIONSHIP_TYPES:
                    if rel_type in rel:
                        rel["type"] = rel_type
                        rel["target"] = rel.pop(rel_type)
                        break
            normalized_rels.append(rel)

        # Entity-level shorthand (belongs_to: User)
        for rel_type in RELATIONSHIP_TYPES:
            if rel_type in data:
                targets = data.pop(rel_type)
                if isinstance(targets, str):
                    targets = [targets]
                for target in targets:
                    normalized_rels.append({"type": rel_type, "target": target})

        data["relationships"] = normalized_rels

        # States: {admin: {role: admin}} or [admin, {name: banned, attributes: {...}}]
        states = data.get("states")
        if isinstance(states, dict):
            data["states"] = [
                {"name": name, "attributes": attrs or {}}
                for name, attrs in states.items()
            ]
        elif states:
            data["states"] = [
                {"name": state} if isinstance(state, str) else state
                for state in states
            ]

        attributes = data.get("attributes")
        if attributes:
            data["attributes"] = [
                {"name": attr} if isinstance(attr, str) else attr
                for attr in attributes
            ]

        return data

    @property
    def has_template(self) -> bool:
        """Whether the entity declares any generated attributes."""
        return bool(self.attributes)

    def get_state(self, name: str) -> State | None:
        """Get a state by name."""
        for state in self.states:
            if state.name == name:
                return state
        return None

    def get_relationship(self, name: str) -> Relationship | None:
        """Get a relationship by name."""
        for rel in self.relationships:
            if rel.name == name:
                return rel
        return None


class TrellisSchema(BaseModel):
    """Root model for a Trellis schema file."""

    entities: dict[str, Entity] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_schema(cls, data: Any) -> Any:
        """Set entity names from their keys."""
        if not isinstance(data, dict):
            return data

        entities = data.get("entities")
        if entities is None:
            data["entities"] = {}
        elif isinstance(entities, dict):
            for name, entity_data in list(entities.items()):
                if entity_data is None:
                    entity_data = {}
                    entities[name] = entity_data
                if isinstance(entity_data, dict):
                    entity_data["name"] = name

        return data

    def get_entity(self, name: str) -> Entity | None:
        """Get an entity by name."""
        return self.entities.get(name)

    def get_all_entity_names(self) -> list[str]:
        """Get all entity names."""
        return list(self.entities.keys())
