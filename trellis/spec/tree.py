"""The mutable declaration tree behind a builder."""

import logging
from enum import Enum
from typing import Any

from .node import DeclarationMode, Filler, PivotFiller, RelationSpecNode
from .path import Declaration

logger = logging.getLogger(__name__)


class BranchPolicy(str, Enum):
    """How a bare declaration picks among siblings sharing a relation name.

    Siblings only exist once ``and_with`` has created one.
    """

    LATEST = "latest"  # newest sibling only; earlier branches are cut off
    ALL = "all"  # every sibling with the name


class SpecTree:
    """Resolves declarations into nodes below an attachment point.

    The attachment point is the tree's root node: the builder's own node for
    a top-level builder, or the node a customizer was declared on for a
    scoped sub-builder.
    """

    def __init__(
        self,
        root: RelationSpecNode | None = None,
        policy: BranchPolicy | str = BranchPolicy.LATEST,
    ):
        self.root = root if root is not None else RelationSpecNode()
        self.policy = BranchPolicy(policy)
        self._current: list[RelationSpecNode] = [self.root]

    @property
    def current(self) -> list[RelationSpecNode]:
        """Nodes targeted by the most recent declaration."""
        return list(self._current)

    def declare(
        self, declaration: Declaration, mode: DeclarationMode = DeclarationMode.MERGE
    ) -> list[RelationSpecNode]:
        """Apply a declaration to the tree.

        Args:
            declaration: The normalized declaration.
            mode: MERGE to reuse an existing node at the final segment,
                FORCE_NEW to always add a sibling there.

        Returns:
            The nodes the declaration landed on.
        """
        frontier = [self.root]
        for segment in declaration.segments[:-1]:
            frontier = [
                child for node in frontier for child in self._descend(node, segment)
            ]

        final = declaration.segments[-1]
        targets: list[RelationSpecNode] = []
        for node in frontier:
            if mode == DeclarationMode.FORCE_NEW:
                targets.append(node.add_child(final, origin=DeclarationMode.FORCE_NEW))
            else:
                targets.extend(self._descend(node, final))

        for target in targets:
            self._apply(target, declaration)

        logger.debug(
            "Declared %s (%s) count=%s states=%s on %d node(s)",
            declaration.path,
            mode.value,
            declaration.count,
            list(declaration.states),
            len(targets),
        )
        self._current = targets
        return targets

    def _descend(self, node: RelationSpecNode, segment: str) -> list[RelationSpecNode]:
        matches = node.find_children(segment)
        if not matches:
            return [node.add_child(segment)]
        if self.policy == BranchPolicy.ALL:
            return matches
        return [matches[-1]]

    @staticmethod
    def _apply(node: RelationSpecNode, declaration: Declaration) -> None:
        if declaration.count is not None:
            node.count = declaration.count
        node.add_states(declaration.states)
        if declaration.overrides:
            node.merge_overrides(declaration.overrides)
        if declaration.customizer is not None:
            node.customizer = declaration.customizer

    def fill(self, filler: Filler) -> None:
        """Attach an attribute filler to the current nodes."""
        for node in self._current:
            node.fillers.append(filler)

    def fill_pivot(self, pivot: PivotFiller) -> None:
        """Attach pivot attributes to the current nodes."""
        for node in self._current:
            node.pivot.append(pivot)

    def describe(self) -> dict[str, Any]:
        """Render the whole tree as plain data."""
        return self.root.describe()
