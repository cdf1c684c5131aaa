"""Hierarchy index for categories and collections.

Categories and collections both form forests through an optional
``parent_id``. This module builds a child lookup from a flat snapshot and
answers descendant-closure queries over it.

Example:
    index = HierarchyIndex(categories)
    index.descendants(1)   # {4, 7, 9}
    index.closure(1)       # {1, 4, 7, 9}
"""

from collections.abc import Iterable
from typing import Protocol

import structlog

logger = structlog.get_logger()


class HierarchyNode(Protocol):
    """Anything with an identity and an optional parent reference."""

    @property
    def id(self) -> int: ...

    @property
    def parent_id(self) -> int | None: ...


class HierarchyIndex:
    """Reverse adjacency map (parent -> children) over a node snapshot.

    Traversal is iterative with a visited set, so malformed input that
    contains a cycle terminates instead of recursing forever.
    """

    def __init__(self, nodes: Iterable[HierarchyNode]) -> None:
        """Build the child lookup.

        Args:
            nodes: Snapshot of nodes (categories or collections).
        """
        self._ids: set[int] = set()
        self._children: dict[int, list[int]] = {}

        for node in nodes:
            self._ids.add(node.id)
            if node.parent_id is not None:
                self._children.setdefault(node.parent_id, []).append(node.id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def children(self, node_id: int) -> list[int]:
        """Get direct children of a node.

        Args:
            node_id: Parent node ID.

        Returns:
            List of child IDs (empty for leaves or unknown IDs).
        """
        return list(self._children.get(node_id, []))

    def descendants(self, root_id: int) -> set[int]:
        """Get the transitive descendants of a node, excluding the node itself.

        Args:
            root_id: Node to start from.

        Returns:
            Set of descendant IDs.
        """
        visited: set[int] = {root_id}
        stack = list(self._children.get(root_id, []))
        result: set[int] = set()

        while stack:
            node_id = stack.pop()
            if node_id in visited:
                logger.debug(
                    "Hierarchy cycle or shared node skipped",
                    root_id=root_id,
                    node_id=node_id,
                )
                continue
            visited.add(node_id)
            result.add(node_id)
            stack.extend(self._children.get(node_id, []))

        return result

    def closure(self, root_id: int) -> set[int]:
        """Get a node together with all of its descendants.

        Args:
            root_id: Node to start from.

        Returns:
            Set containing ``root_id`` and every descendant ID.
        """
        return {root_id} | self.descendants(root_id)


def descendants_of(nodes: Iterable[HierarchyNode], root_id: int) -> set[int]:
    """Compute descendants of ``root_id`` from a flat snapshot.

    Args:
        nodes: Snapshot of nodes.
        root_id: Node to start from.

    Returns:
        Set of descendant IDs, excluding ``root_id``.
    """
    return HierarchyIndex(nodes).descendants(root_id)
