"""Factory exceptions."""

from ..errors import TrellisError


class FactoryError(TrellisError):
    """Base exception for builder and materialization errors."""

    pass


class UnknownStateError(FactoryError):
    """Raised when a declared state is not defined for the entity."""

    def __init__(self, entity: str, state: str):
        self.entity = entity
        self.state = state
        super().__init__(f"Entity '{entity}' has no state named '{state}'")


class TemplateError(FactoryError):
    """Raised when attribute generation is misconfigured."""

    def __init__(self, message: str, entity: str | None = None):
        self.entity = entity
        super().__init__(message)


class BuilderConsumedError(FactoryError):
    """Raised when a builder is materialized more than once."""

    pass
