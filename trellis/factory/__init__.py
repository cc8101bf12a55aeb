"""Builders, attribute generation and materialization."""

from .attributes import AttributeFactory
from .builder import Builder, Factory
from .errors import BuilderConsumedError, FactoryError, TemplateError, UnknownStateError
from .materializer import Materializer

__all__ = [
    "AttributeFactory",
    "Builder",
    "Factory",
    "BuilderConsumedError",
    "FactoryError",
    "TemplateError",
    "UnknownStateError",
    "Materializer",
]
