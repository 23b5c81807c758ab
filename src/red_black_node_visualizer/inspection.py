"""Human-readable diagnostics for imported trees.

``describe_errors`` explains why a node has ``has_error`` set, one message
per problem.  ``next_error_node`` steps through the error nodes of a tree in
id order, skipping subtrees whose ``subtree_has_error`` is False.
"""

from __future__ import annotations

from typing import cast

from red_black_node_visualizer.tree.nodes import DecodedNode, ParentLink

__all__ = ["describe_errors", "next_error_node"]


def _node_label(node: DecodedNode) -> str:
    return f"node #{node.id:,}"


def _parent_errors(node: DecodedNode) -> list[str]:
    link = node.parent_link
    if link is ParentLink.CANONICAL and node.unsanitized_parent is node.parent:
        return []
    if node.parent is not None:
        return [
            f"The node is a child of {_node_label(node.parent)}, but its parent "
            "pointer does not match this node."
        ]
    if link is ParentLink.SELF:
        return ["The node is its own parent."]
    if link is ParentLink.CYCLIC:
        return [
            "Repeatedly following parent pointers results in a cycle that "
            "leads back to this node."
        ]
    return ["The node's parent does not appear in the visualization."]


def _child_errors(node: DecodedNode) -> list[str]:
    messages: list[str] = []
    left = node.unsanitized_left
    right = node.unsanitized_right

    # A divergent child pointer that reaches the root means child pointers cycle.
    reaches_root = (left is not node.left and left is not None and left.parent is None) or (
        right is not node.right and right is not None and right.parent is None
    )
    if reaches_root and left is not node and right is not node:
        messages.append(
            "Repeatedly following child pointers results in a cycle that "
            "leads back to this node."
        )
    elif left is right and left is not None and left is not node:
        messages.append("The left and right children are the same.")

    for side, child, unsanitized, ref in (
        ("left", node.left, left, node.left_ref),
        ("right", node.right, right, node.right_ref),
    ):
        if unsanitized is node:
            messages.append(f"The node is its own {side} child.")
        elif unsanitized is None and ref is not None:
            messages.append(
                f"The {side} child does not appear in the visualization."
            )
        elif (
            unsanitized is not child
            and unsanitized is not None
            and unsanitized.parent is not None
            and unsanitized.parent is not node
        ):
            messages.append(
                f"The {side} child is also the child of "
                f"{_node_label(unsanitized.parent)}."
            )
    return messages


def describe_errors(node: DecodedNode) -> list[str]:
    """Return one message per error of ``node``; empty when it has none.

    Metadata must have been derived (``import_tree`` does this).
    """
    if not node.has_error:
        return []

    parent = node.parent
    messages = _parent_errors(node) + _child_errors(node)
    if node.is_red and parent is None:
        messages.append("Red root node.")
    if node.is_red and parent is not None and parent.is_red:
        messages.append("Red child of red node.")
    if parent is None and not node.are_black_paths_equal:
        messages.append(
            "Not all root-to-leaf paths have the same number of black nodes."
        )
    if node.node_error is not None:
        messages.append(f"check_node() raised an exception: {node.node_error}")
    if node.use_subtree_error and node.subtree_error is not None:
        messages.append(f"check_subtree() raised an exception: {node.subtree_error}")
    return messages


def _next_error_after(start: DecodedNode) -> DecodedNode | None:
    """Return the first error node after ``start`` in id order, if any."""
    node = start
    while True:
        right = node.right
        if right is not None and right.subtree_has_error:
            return _first_error_in(right)
        # Climb to the nearest ancestor that comes after ``node`` in id order.
        while node.parent is not None and node.parent.right is node:
            node = node.parent
        parent = node.parent
        if parent is None or parent.has_error:
            return parent
        node = parent


def _first_error_in(subtree: DecodedNode) -> DecodedNode:
    """Return the first error node of a subtree whose ``subtree_has_error`` is set."""
    node = subtree
    while True:
        left = node.left
        if left is not None and left.subtree_has_error:
            node = left
        elif node.has_error:
            return node
        else:
            # The error is in the right subtree.
            node = cast(DecodedNode, node.right)


def next_error_node(
    root: DecodedNode | None, node: DecodedNode | None = None
) -> DecodedNode | None:
    """Return the next node with an error after ``node``, wrapping around.

    When no node after ``node`` has an error, returns the first error node of
    the tree (which may be ``node`` itself).  When ``node`` is None, returns
    the first error node.  Returns None when the tree has no errors.
    """
    if root is None:
        return None
    if node is not None:
        found = _next_error_after(node)
        if found is not None:
            return found

    first = root.min()
    if first.has_error:
        return first
    return _next_error_after(first)
