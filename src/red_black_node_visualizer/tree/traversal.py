"""Stack-based traversals shared by canonical and decoded trees.

Both ``CanonicalNode`` and ``DecodedNode`` expose ``left`` and ``right``;
these generators only rely on those two attributes.  Malformed input can
produce very deep canonical trees, so nothing here recurses.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def iter_preorder(root: Any) -> Iterator[Any]:
    """Yield every node of the subtree, each before its children."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def iter_postorder(root: Any) -> Iterator[Any]:
    """Yield every node of the subtree, each after both of its children."""
    if root is None:
        return
    stack: list[tuple[Any, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        if node.right is not None:
            stack.append((node.right, False))
        if node.left is not None:
            stack.append((node.left, False))


def iter_inorder(root: Any) -> Iterator[Any]:
    """Yield every node of the subtree in in-order (rank) order."""
    stack: list[Any] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right
