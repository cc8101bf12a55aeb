"""Persistence collaborators."""

from .base import Persistence, Record
from .errors import PersistenceError
from .memory import InMemoryStore

__all__ = [
    "Persistence",
    "Record",
    "PersistenceError",
    "InMemoryStore",
]
