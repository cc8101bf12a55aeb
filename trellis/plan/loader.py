"""Load seed plans and apply them to a factory."""

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ..persistence.base import Record
from ..schema.loader import flatten_validation_errors, load_yaml, load_yaml_string
from .errors import PlanError
from .models import SeedPlan

if TYPE_CHECKING:
    from ..factory.builder import Builder, Factory


def parse_plan(path: str | Path) -> SeedPlan:
    """Load and parse a YAML seed plan file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        PlanError: If the data is not a valid plan.
    """
    return parse_plan_data(load_yaml(path))


def parse_plan_from_string(yaml_string: str) -> SeedPlan:
    """Parse a YAML string into a SeedPlan."""
    return parse_plan_data(load_yaml_string(yaml_string))


def parse_plan_data(data: dict) -> SeedPlan:
    """Validate raw data as a SeedPlan.

    Raises:
        PlanError: If the data fails validation.
    """
    try:
        return SeedPlan.model_validate(data)
    except ValidationError as e:
        errors = flatten_validation_errors(e)
        raise PlanError(f"Plan validation failed with {len(errors)} error(s)", errors) from e


def apply_plan(factory: "Factory", plan: SeedPlan) -> "Builder":
    """Translate a plan into builder calls.

    Root ``attributes`` are not applied here; pass them to ``create`` or
    ``make`` (``run_plan`` does).

    Returns:
        A configured, unconsumed builder.
    """
    builder = factory.for_entity(plan.entity)
    if plan.count is not None:
        builder.times(plan.count)
    if plan.states:
        builder.states(*plan.states)

    for declaration in plan.declarations:
        args: list = []
        if declaration.count is not None:
            args.append(declaration.count)
        args.extend(declaration.states)
        args.append(declaration.path)
        if declaration.attributes:
            args.append(declaration.attributes)

        if declaration.new_branch:
            builder.and_with(*args)
        else:
            builder.with_(*args)

        if declaration.pivot:
            builder.fill_pivot(declaration.pivot)

    return builder


def run_plan(factory: "Factory", plan: SeedPlan, persist: bool = True) -> list[Record]:
    """Apply a plan and materialize it.

    Returns:
        The root records, always as a list.
    """
    builder = apply_plan(factory, plan)
    if persist:
        result = builder.create(**plan.attributes)
    else:
        result = builder.make(**plan.attributes)
    return result if isinstance(result, list) else [result]
