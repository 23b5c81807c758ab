"""Independent red-black invariant check over a canonical tree.

The tree library's own ``check_node`` / ``check_subtree`` hooks may assume a
structurally sound red-black tree (and may loop forever on a cyclic one), so
the exporter only calls them after this check reports no violations.

Checked, in order:
1. The root's original ``parent`` pointer is ``None``.
2. No canonical node has a divergent pointer, apart from the root's parent.
3. The root is black.
4. No red node has a red parent.
5. Every root-to-leaf path has the same number of black nodes.
"""

from __future__ import annotations

from red_black_node_visualizer.tree.sanitizer import CanonicalTree
from red_black_node_visualizer.tree.traversal import iter_postorder

__all__ = ["is_valid_red_black", "red_black_violations"]


def red_black_violations(tree: CanonicalTree) -> list[str]:
    """Return a description of each invariant violation; empty when valid.

    An empty tree is valid.
    """
    root = tree.root
    if root is None:
        return []

    violations: list[str] = []
    if root.raw.parent is not None:
        violations.append("root has a parent pointer")
    # The root's parent entry is covered by the check above.
    divergent = sum(
        1
        for rank, record in tree.divergences.items()
        if rank != root.rank or record.left is not None or record.right is not None
    )
    if divergent:
        violations.append(
            f"{divergent} node(s) have pointers that disagree "
            "with the tree structure"
        )
    if root.raw.is_red:
        violations.append("root is red")

    black_heights: dict[int, int] = {}
    for node in iter_postorder(root):
        is_red = bool(node.raw.is_red)
        if is_red and node.parent is not None and node.parent.raw.is_red:
            violations.append(f"red node #{node.rank} has a red parent")
        left_height = black_heights.pop(id(node.left), 0)
        right_height = black_heights.pop(id(node.right), 0)
        if left_height != right_height:
            violations.append(f"unequal black heights below node #{node.rank}")
        black_heights[id(node)] = max(left_height, right_height) + (0 if is_red else 1)
    return violations


def is_valid_red_black(tree: CanonicalTree) -> bool:
    """Return True when ``red_black_violations`` finds nothing."""
    return not red_black_violations(tree)
