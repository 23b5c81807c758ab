"""Metadata derivation for decoded trees.

``derive_metadata`` fills in the derived fields of every ``DecodedNode`` in
two phases:

- Top-down (needs the parent's values): ``depth`` and ``black_depth``.
- Bottom-up (needs the children's values): ``size``, ``height``,
  ``black_height``, ``are_black_paths_equal`` and the error flags.

A node has an error when any of these holds:

- its original ``parent`` differs from its parent, or is not in the tree
- its original ``left`` / ``right`` differs from its left / right child
- it is a red root, or a red child of a red node
- it is the root and not all root-to-leaf paths have the same black count
- the per-node check failed (``node_error``)
- it is the root, the subtree check failed (``subtree_error``) and no other
  node in the tree has an error

The last rule keeps the subtree check's message from duplicating a more
specific error found elsewhere (``use_subtree_error``).
"""

from __future__ import annotations

from red_black_node_visualizer.tree.nodes import DecodedNode, ParentLink
from red_black_node_visualizer.tree.traversal import iter_postorder, iter_preorder

__all__ = ["derive_metadata"]


def derive_metadata(root: DecodedNode | None) -> None:
    """Set the derived fields of every node in the tree rooted at ``root``.

    The unsanitized pointers must already be resolved (``TreeDecoder`` does
    this).  Mutates the nodes in place.
    """
    if root is None:
        return
    for node in iter_preorder(root):
        _set_from_parent(node)
    for node in iter_postorder(root):
        _set_from_children(node)
        _set_error_flags(node)


def _set_from_parent(node: DecodedNode) -> None:
    colour_weight = 0 if node.is_red else 1
    parent = node.parent
    if parent is None:
        node.depth = 0
        node.black_depth = colour_weight
    else:
        node.depth = parent.depth + 1
        node.black_depth = parent.black_depth + colour_weight


def _set_from_children(node: DecodedNode) -> None:
    colour_weight = 0 if node.is_red else 1
    left = node.left
    right = node.right

    size = 1
    height = 0
    child_black_height = 0
    children_balanced = True
    for child in (left, right):
        if child is None:
            continue
        size += child.size
        height = max(height, child.height + 1)
        child_black_height = max(child_black_height, child.black_height)
        children_balanced = children_balanced and child.are_black_paths_equal

    left_black_height = left.black_height if left is not None else 0
    right_black_height = right.black_height if right is not None else 0
    node.size = size
    node.height = height
    node.black_height = child_black_height + colour_weight
    node.are_black_paths_equal = (
        children_balanced and left_black_height == right_black_height
    )


def _has_pointer_error(node: DecodedNode) -> bool:
    return (
        node.parent_link is not ParentLink.CANONICAL
        or node.unsanitized_parent is not node.parent
        or not node.is_unsanitized_parent_in_tree
        or node.left_ref is not None
        or node.right_ref is not None
        or node.unsanitized_left is not node.left
        or node.unsanitized_right is not node.right
    )


def _set_error_flags(node: DecodedNode) -> None:
    parent = node.parent
    has_error = (
        _has_pointer_error(node)
        or (node.is_red and (parent is None or parent.is_red))
        or (parent is None and not node.are_black_paths_equal)
        or node.node_error is not None
    )
    subtree_has_error = (
        has_error
        or (node.left is not None and node.left.subtree_has_error)
        or (node.right is not None and node.right.subtree_has_error)
    )

    node.use_subtree_error = (
        parent is None and not subtree_has_error and node.subtree_error is not None
    )
    if node.use_subtree_error:
        has_error = True
        subtree_has_error = True
    node.has_error = has_error
    node.subtree_has_error = subtree_has_error
