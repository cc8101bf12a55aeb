"""Validators for structural validation of Trellis schemas."""

from .base import Severity, ValidationIssue, ValidationResult
from .fake_providers import check_fake_providers
from .orphan_detector import check_orphan_entities
from .reference_integrity import check_reference_integrity
from .runner import run_validators, validate_schema_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_fake_providers",
    "check_orphan_entities",
    "check_reference_integrity",
    "run_validators",
    "validate_schema_file",
]
