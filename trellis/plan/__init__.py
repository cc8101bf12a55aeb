"""YAML seed plans."""

from .errors import PlanError
from .loader import apply_plan, parse_plan, parse_plan_data, parse_plan_from_string, run_plan
from .models import PlanDeclaration, SeedPlan

__all__ = [
    "PlanError",
    "apply_plan",
    "parse_plan",
    "parse_plan_data",
    "parse_plan_from_string",
    "run_plan",
    "PlanDeclaration",
    "SeedPlan",
]
