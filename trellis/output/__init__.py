"""Output formatting."""

from .formatter import (
    format_schema_summary,
    format_seed_result,
    format_validation_result,
    summarize_schema,
)

__all__ = [
    "format_schema_summary",
    "format_seed_result",
    "format_validation_result",
    "summarize_schema",
]
