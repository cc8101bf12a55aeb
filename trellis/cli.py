"""Command-line interface for Trellis."""

import logging
import sys

import click
from pydantic import ValidationError

from . import __version__
from .config import FactoryConfig
from .errors import TrellisError
from .output.formatter import (
    format_schema_summary,
    format_seed_result,
    format_validation_result,
)
from .plan.errors import PlanError
from .schema.errors import SchemaLoadError, SchemaValidationError
from .validators.runner import validate_schema_file


def _report_load_error(e: Exception) -> None:
    """Print a schema or plan loading error and exit with code 2."""
    if isinstance(e, SchemaLoadError):
        click.echo(f"Error loading file: {e}", err=True)
    elif isinstance(e, SchemaValidationError):
        click.echo(f"Schema validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
    elif isinstance(e, PlanError):
        click.echo(f"Plan error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
    sys.exit(2)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """Trellis: declarative graphs of related test entities."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(schema_file: str, output_format: str, strict: bool):
    """Validate a Trellis schema file.

    SCHEMA_FILE is the path to a YAML schema file.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or schema error
    """
    try:
        result = validate_schema_file(schema_file)
    except (SchemaLoadError, SchemaValidationError) as e:
        _report_load_error(e)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors or (strict and result.has_warnings):
        sys.exit(1)
    sys.exit(0)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def inspect(schema_file: str, output_format: str):
    """List entities, states and relation kinds of a schema.

    SCHEMA_FILE is the path to a YAML schema file.
    """
    from .graph.builder import build_graph
    from .schema.loader import parse_schema

    try:
        graph = build_graph(parse_schema(schema_file))
    except (SchemaLoadError, SchemaValidationError) as e:
        _report_load_error(e)

    click.echo(format_schema_summary(graph, output_format))  # type: ignore
    sys.exit(0)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.argument("plan_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--make",
    "make_only",
    is_flag=True,
    default=False,
    help="Build records in memory without persisting them",
)
@click.option("--seed", type=int, default=None, help="Faker seed [env: TRELLIS_SEED]")
@click.option("--locale", default=None, help="Faker locale [env: TRELLIS_LOCALE]")
@click.option(
    "--branch-policy",
    type=click.Choice(["latest", "all"]),
    default=None,
    help="How bare declarations pick among and_with branches [env: TRELLIS_BRANCH_POLICY]",
)
@click.option("--key-name", default=None, help="Primary key column [env: TRELLIS_KEY_NAME]")
def seed(
    schema_file: str,
    plan_file: str,
    output_format: str,
    make_only: bool,
    seed: int | None,
    locale: str | None,
    branch_policy: str | None,
    key_name: str | None,
):
    """Run a seed plan against an in-memory store and print the result.

    SCHEMA_FILE is the YAML schema; PLAN_FILE is the YAML seed plan.

    Exit codes:
      0 - Success
      1 - The plan could not be materialized
      2 - File, schema, plan or configuration error
    """
    from .factory.builder import Factory
    from .plan.loader import parse_plan, run_plan

    options = {
        "seed": seed,
        "locale": locale,
        "branch_policy": branch_policy,
        "key_name": key_name,
    }

    try:
        config = FactoryConfig(**{k: v for k, v in options.items() if v is not None})
    except ValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    try:
        factory = Factory.from_file(schema_file, config=config)
        plan = parse_plan(plan_file)
    except (SchemaLoadError, SchemaValidationError, PlanError) as e:
        _report_load_error(e)

    try:
        records = run_plan(factory, plan, persist=not make_only)
    except TrellisError as e:
        click.echo(f"Seed failed: {type(e).__name__}: {e}", err=True)
        sys.exit(1)

    store = None if make_only else factory.persistence
    click.echo(format_seed_result(records, store, output_format))  # type: ignore
    sys.exit(0)


if __name__ == "__main__":
    main()
