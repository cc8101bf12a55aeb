"""Seed plan exceptions."""

from ..errors import TrellisError


class PlanError(TrellisError):
    """Raised when a seed plan is malformed."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
