"""Output formatting for validation results, schema summaries and seed runs."""

import json
from typing import Any, Literal

from ..graph.model_graph import ModelGraph
from ..persistence.base import Record
from ..persistence.memory import InMemoryStore
from ..relations.errors import UnresolvableRelationError
from ..relations.resolver import RelationResolver
from ..validators.base import Severity, ValidationIssue, ValidationResult

OutputFormat = Literal["text", "json"]


def format_validation_result(
    result: ValidationResult,
    format: OutputFormat = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_validation_json(result)
    return _format_validation_text(result)


def _format_validation_text(result: ValidationResult) -> str:
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    for title, issues in (("ERRORS:", errors), ("WARNINGS:", warnings)):
        lines.append(title)
        if issues:
            lines.extend(f"  {_format_issue_text(issue)}" for issue in issues)
        else:
            lines.append("  (none)")
        lines.append("")

    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    location = f"[{issue.location}] " if issue.location else ""

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_validation_json(result: ValidationResult) -> str:
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "entity": issue.entity,
                "relation": issue.relation,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def summarize_schema(graph: ModelGraph) -> list[dict[str, Any]]:
    """Describe every entity with its attributes, states and resolved relations."""
    resolver = RelationResolver(graph)
    entities = []

    for entity_name in graph.get_entity_names():
        relations = []
        for rel in graph.get_relationships_for_entity(entity_name):
            if rel["direction"] != "outgoing":
                continue
            try:
                descriptor = resolver.resolve(entity_name, rel["name"])
            except UnresolvableRelationError as e:
                relations.append({"name": rel["name"], "target": rel["target"], "error": str(e)})
                continue
            entry = {
                "name": descriptor.name,
                "type": rel["type"],
                "kind": descriptor.kind.value,
                "target": descriptor.related_type,
                "foreign_key": descriptor.foreign_key,
            }
            if descriptor.pivot_table:
                entry["pivot_table"] = descriptor.pivot_table
            if descriptor.morph_type_column:
                entry["morph_type_column"] = descriptor.morph_type_column
            relations.append(entry)

        entities.append({
            "name": entity_name,
            "attributes": [attr["name"] for attr in graph.get_attributes(entity_name)],
            "states": [state["name"] for state in graph.get_states_for_entity(entity_name)],
            "relations": relations,
        })

    return entities


def format_schema_summary(graph: ModelGraph, format: OutputFormat = "text") -> str:
    """Format the entities and relation kinds of a schema."""
    entities = summarize_schema(graph)
    if format == "json":
        return json.dumps({"entities": entities}, indent=2)

    lines: list[str] = []
    for entity in entities:
        lines.append(entity["name"])
        if entity["attributes"]:
            lines.append(f"  attributes: {', '.join(entity['attributes'])}")
        if entity["states"]:
            lines.append(f"  states: {', '.join(entity['states'])}")
        for rel in entity["relations"]:
            if "error" in rel:
                lines.append(f"  {rel['name']} -> {rel['target']} (unresolvable: {rel['error']})")
                continue
            extra = f" via {rel['pivot_table']}" if "pivot_table" in rel else ""
            lines.append(
                f"  {rel['name']} -> {rel['target']} [{rel['kind']}] key {rel['foreign_key']}{extra}"
            )
    if not lines:
        lines.append("(no entities)")
    return "\n".join(lines)


def format_seed_result(
    records: list[Record],
    store: InMemoryStore | None = None,
    format: OutputFormat = "text",
) -> str:
    """Format the records produced by a seed run.

    Args:
        records: The root records.
        store: The store the records were persisted to, for table totals and
            pivot rows. None for in-memory runs.
        format: Output format ("text" or "json").
    """
    if format == "json":
        data: dict[str, Any] = {"records": [r.to_dict() for r in records]}
        if store is not None:
            data["totals"] = {t: store.count(t) for t in store.entity_types()}
            data["pivots"] = {t: store.pivots(t) for t in store.pivot_tables()}
        return json.dumps(data, indent=2, default=str)

    lines: list[str] = []
    for record in records:
        _format_record_text(record, lines, indent=0)

    if store is not None:
        lines.append("")
        lines.append("Totals:")
        for entity_type in store.entity_types():
            lines.append(f"  {entity_type}: {store.count(entity_type)}")
        for table in store.pivot_tables():
            lines.append(f"  {table} (pivot): {len(store.pivots(table))}")

    return "\n".join(lines)


def _format_record_text(record: Record, lines: list[str], indent: int, label: str = "") -> None:
    pad = "  " * indent
    attrs = ", ".join(
        f"{name}={value!r}"
        for name, value in record.attributes.items()
        if name != record.key_name
    )
    key = f" #{record.key}" if record.key is not None else ""
    prefix = f"{label}: " if label else ""
    pivot = f" pivot={record.pivot!r}" if record.pivot else ""
    lines.append(f"{pad}{prefix}{record.entity_type}{key} ({attrs}){pivot}")

    for name, related in record.relations.items():
        items = related if isinstance(related, list) else [related]
        for item in items:
            _format_record_text(item, lines, indent + 1, label=name)
