"""Pydantic models for YAML seed plans."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PlanDeclaration(BaseModel):
    """One ``with_`` (or ``and_with``) call."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    count: int | None = Field(default=None, ge=1)
    states: list[str] = Field(default_factory=list)
    attributes: dict[str, Any] = Field(default_factory=dict)
    pivot: dict[str, Any] = Field(default_factory=dict)
    new_branch: bool = Field(default=False, alias="and")

    @model_validator(mode="before")
    @classmethod
    def normalize_shorthand(cls, data: Any) -> Any:
        """Accept a bare path string."""
        if isinstance(data, str):
            return {"path": data}
        return data

    @field_validator("states", mode="before")
    @classmethod
    def normalize_states(cls, value: Any) -> Any:
        """Accept a single state name."""
        if isinstance(value, str):
            return [value]
        return value


class SeedPlan(BaseModel):
    """A single top-level builder call."""

    model_config = ConfigDict(populate_by_name=True)

    entity: str
    count: int | None = Field(default=None, ge=1)
    states: list[str] = Field(default_factory=list)
    attributes: dict[str, Any] = Field(default_factory=dict)
    declarations: list[PlanDeclaration] = Field(default_factory=list, alias="with")

    @field_validator("states", mode="before")
    @classmethod
    def normalize_states(cls, value: Any) -> Any:
        """Accept a single state name."""
        if isinstance(value, str):
            return [value]
        return value
