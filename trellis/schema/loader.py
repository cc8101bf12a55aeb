"""YAML loading and parsing for Trellis schemas."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import TrellisSchema


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def load_yaml_string(yaml_string: str) -> dict:
    """Parse a YAML string that must contain a mapping.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed or is not a mapping.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return data


def parse_schema(path: str | Path) -> TrellisSchema:
    """Load and parse a YAML file into a TrellisSchema.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed TrellisSchema.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    return parse_schema_data(load_yaml(path))


def parse_schema_from_string(yaml_string: str) -> TrellisSchema:
    """Parse a YAML string into a TrellisSchema.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    return parse_schema_data(load_yaml_string(yaml_string))


def flatten_validation_errors(error: ValidationError) -> list[dict]:
    """Turn a pydantic ValidationError into a list of loc/msg/type dicts."""
    return [
        {
            "loc": ".".join(str(x) for x in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def parse_schema_data(data: dict) -> TrellisSchema:
    """Parse raw data into a TrellisSchema.

    Args:
        data: The raw YAML data.

    Returns:
        The parsed TrellisSchema.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return TrellisSchema.model_validate(data)
    except ValidationError as e:
        errors = flatten_validation_errors(e)
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e
