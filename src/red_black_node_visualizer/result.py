"""ImportedTree dataclass for decoded tree strings.

This module provides the result type returned by ``import_tree()`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from red_black_node_visualizer.tree.nodes import DecodedNode

__all__ = ["ImportedTree"]


@dataclass(frozen=True, slots=True)
class ImportedTree:
    """Result of decoding a tree string.

    Attributes:
        root: Root node, or None when the exported node was a dummy leaf.
        nodes: Every node of the tree, indexed by id (in-order rank).
        selected_node: Node to highlight initially, if the tree string named
            one and it exists.
        title: Title text, if any.
    """

    root: DecodedNode | None
    nodes: list[DecodedNode]
    selected_node: DecodedNode | None
    title: str | None

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def has_error(self) -> bool:
        """Whether any node of the tree has an error."""
        return self.root is not None and self.root.subtree_has_error

    def error_nodes(self) -> list[DecodedNode]:
        """Return the nodes with ``has_error`` set, in id order."""
        return [node for node in self.nodes if node.has_error]
