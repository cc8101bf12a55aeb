"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from trellis.config import FactoryConfig
from trellis.factory.builder import Factory
from trellis.graph.builder import build_graph
from trellis.schema.loader import parse_schema, parse_schema_from_string


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def minimal_schema_yaml() -> str:
    """Return a minimal valid schema YAML string."""
    return """
entities:
  User:
    attributes:
      - name: email
        fake: email
    relationships:
      - has_many: Post
        name: posts

  Post:
    belongs_to: User
    attributes:
      - name: title
        fake: sentence
"""


@pytest.fixture
def minimal_schema(minimal_schema_yaml):
    """Return a parsed minimal schema."""
    return parse_schema_from_string(minimal_schema_yaml)


@pytest.fixture
def minimal_graph(minimal_schema):
    """Return a graph built from the minimal schema."""
    return build_graph(minimal_schema)


@pytest.fixture
def hosting_schema(examples_dir):
    """Return the parsed hosting example schema."""
    return parse_schema(examples_dir / "hosting.yaml")


@pytest.fixture
def hosting_graph(hosting_schema):
    """Return a graph built from the hosting schema."""
    return build_graph(hosting_schema)


@pytest.fixture
def factory(hosting_schema):
    """Return a seeded factory over the hosting schema with an in-memory store."""
    return Factory(hosting_schema, config=FactoryConfig(seed=1234))


@pytest.fixture
def store(factory):
    """Return the factory's in-memory store."""
    return factory.persistence
