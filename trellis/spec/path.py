"""Parse relation paths and normalize declaration arguments."""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from .errors import InvalidPathError

SEGMENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Declaration:
    """A normalized ``with_``/``and_with`` call."""

    segments: tuple[str, ...]
    count: int | None = None
    states: tuple[str, ...] = ()
    overrides: dict[str, Any] = field(default_factory=dict)
    customizer: Callable[[Any], Any] | None = None

    @property
    def path(self) -> str:
        """The dotted relation path."""
        return ".".join(self.segments)


def parse_path(path: str) -> tuple[str, ...]:
    """Split a dotted relation path into segments.

    Args:
        path: A path such as ``"servers.sites"``.

    Returns:
        The relation names, in traversal order.

    Raises:
        InvalidPathError: If the path is empty or any segment is not a valid
            relation name.
    """
    if not isinstance(path, str):
        raise InvalidPathError(
            f"Relation path must be a string, got {type(path).__name__}"
        )
    if not path:
        raise InvalidPathError("Relation path is empty", path)

    segments = tuple(path.split("."))
    for segment in segments:
        if not segment:
            raise InvalidPathError(f"Relation path '{path}' has an empty segment", path)
        if not SEGMENT_PATTERN.match(segment):
            raise InvalidPathError(
                f"Invalid relation name '{segment}' in path '{path}'", path
            )
    return segments


def validate_count(count: Any) -> int:
    """Check that a count is a positive integer."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidPathError(f"Count must be an integer, got {count!r}")
    if count < 1:
        raise InvalidPathError(f"Count must be at least 1, got {count}")
    return count


def _collect_states(items: Iterable[Any]) -> list[str]:
    states: list[str] = []
    for item in items:
        if isinstance(item, str):
            states.append(item)
        elif isinstance(item, (list, tuple)) and all(isinstance(s, str) for s in item):
            states.extend(item)
        else:
            raise InvalidPathError(f"Unexpected declaration argument {item!r}")
    return states


def parse_declaration(
    *args: Any,
    count: int | None = None,
    states: str | Iterable[str] | None = None,
    attributes: Mapping[str, Any] | Callable[[Any], Any] | None = None,
) -> Declaration:
    """Normalize the ``(count?, *states, path, overrides_or_customizer?)`` overload.

    Examples:
        >>> parse_declaration("servers").segments
        ('servers',)
        >>> d = parse_declaration(2, "active", "servers.sites", {"name": "x"})
        >>> (d.count, d.states, d.segments)
        (2, ('active',), ('servers', 'sites'))

    Raises:
        InvalidPathError: If the arguments do not form a declaration.
    """
    items = list(args)

    declared_count = None
    if items and isinstance(items[0], int) and not isinstance(items[0], bool):
        declared_count = items.pop(0)

    trailing = None
    if items and (isinstance(items[-1], Mapping) or callable(items[-1])):
        trailing = items.pop()

    if not items:
        raise InvalidPathError("Declaration has no relation path")

    segments = parse_path(items.pop())
    state_names = _collect_states(items)

    if count is not None:
        if declared_count is not None:
            raise InvalidPathError("Count given both positionally and as a keyword")
        declared_count = count
    if declared_count is not None:
        declared_count = validate_count(declared_count)

    if states is not None:
        state_names.extend(_collect_states([states]))

    if attributes is not None:
        if trailing is not None:
            raise InvalidPathError("Attributes given both positionally and as a keyword")
        trailing = attributes

    overrides: dict[str, Any] = {}
    customizer = None
    if isinstance(trailing, Mapping):
        overrides = dict(trailing)
    elif trailing is not None:
        customizer = trailing

    return Declaration(
        segments=segments,
        count=declared_count,
        states=tuple(dict.fromkeys(state_names)),
        overrides=overrides,
        customizer=customizer,
    )
