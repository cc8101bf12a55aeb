"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from trellis.schema.models import (
    Attribute,
    Entity,
    Relationship,
    State,
    TrellisSchema,
    snake_case,
)


class TestSnakeCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("User", "user"),
            ("BlogPost", "blog_post"),
            ("HTTPServer", "httpserver"),
            ("line-item", "line_item"),
        ],
    )
    def test_snake_case(self, name, expected):
        assert snake_case(name) == expected


class TestAttribute:
    def test_defaults(self):
        attr = Attribute(name="email")

        assert attr.type == "string"
        assert attr.fake is None
        assert attr.unique is False


class TestRelationship:
    def test_explicit_name(self):
        rel = Relationship(name="owner", type="belongs_to", target="User")
        assert rel.name == "owner"
        assert rel.many is False

    def test_derived_name_for_to_many(self):
        rel = Relationship(type="has_many", target="BlogPost")
        assert rel.name == "blog_posts"
        assert rel.many is True

    def test_derived_name_for_to_one(self):
        rel = Relationship(type="belongs_to", target="BlogPost")
        assert rel.name == "blog_post"

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            Relationship(type="has_few", target="User")


class TestEntityNormalization:
    def test_shorthand_relationship_in_list(self):
        entity = Entity.model_validate(
            {"relationships": [{"has_many": "Post", "name": "posts"}]}
        )

        rel = entity.relationships[0]
        assert rel.type == "has_many"
        assert rel.target == "Post"
        assert rel.name == "posts"

    def test_entity_level_shorthand(self):
        entity = Entity.model_validate({"belongs_to": ["Team", "User"]})

        assert [(r.type, r.target) for r in entity.relationships] == [
            ("belongs_to", "Team"),
            ("belongs_to", "User"),
        ]

    def test_states_as_mapping(self):
        entity = Entity.model_validate(
            {"states": {"admin": {"role": "admin"}, "plain": None}}
        )

        assert entity.get_state("admin").attributes == {"role": "admin"}
        assert entity.get_state("plain").attributes == {}

    def test_states_as_list(self):
        entity = Entity.model_validate(
            {"states": ["draft", {"name": "live", "attributes": {"live": True}}]}
        )

        assert [s.name for s in entity.states] == ["draft", "live"]
        assert entity.get_state("live").attributes == {"live": True}

    def test_attribute_shorthand(self):
        entity = Entity.model_validate({"attributes": ["title"]})

        assert entity.attributes[0].name == "title"
        assert entity.attributes[0].type == "string"
        assert entity.has_template

    def test_empty_entity_has_no_template(self):
        entity = Entity.model_validate(None)

        assert not entity.has_template
        assert entity.get_relationship("anything") is None

    def test_input_is_not_mutated(self):
        data = {"belongs_to": "User"}
        Entity.model_validate(data)

        assert data == {"belongs_to": "User"}


class TestTrellisSchema:
    def test_entity_names_from_keys(self):
        schema = TrellisSchema.model_validate(
            {"entities": {"User": {}, "Note": None}}
        )

        assert schema.get_entity("User").name == "User"
        assert schema.get_entity("Note").name == "Note"
        assert schema.get_all_entity_names() == ["User", "Note"]

    def test_state_model(self):
        state = State(name="admin", attributes={"role": "admin"})
        assert state.attributes["role"] == "admin"
