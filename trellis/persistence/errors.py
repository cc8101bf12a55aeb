"""Persistence exceptions."""

from ..errors import TrellisError


class PersistenceError(TrellisError):
    """Raised when the persistence layer cannot store or link a record."""

    def __init__(self, message: str, entity: str | None = None):
        self.entity = entity
        super().__init__(message)
