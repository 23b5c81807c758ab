"""DecodedNode dataclass and ParentLink StrEnum for imported trees.

A ``DecodedNode`` mirrors one canonical node of an exported tree.  The
decoder sets the fields read from the tree string and the unsanitized
pointers; ``derive_metadata`` fills in the rest.  Once derived, a tree is
treated as read-only.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from red_black_node_visualizer.tree.traversal import iter_inorder


class ParentLink(StrEnum):
    """Relationship between a node's original ``parent`` pointer and its parent.

    - CANONICAL: The original parent is the node's parent in the tree.
    - IN_TREE:   The original parent is a different node of the tree.
    - SELF:      The node is its own parent.
    - ABSENT:    The original parent is ``None`` but the node is not the root.
    - OUTSIDE:   The original parent does not appear in the tree.
    - CYCLIC:    Following ``parent`` pointers leads around a cycle.
    """

    CANONICAL = auto()
    IN_TREE = auto()
    SELF = auto()
    ABSENT = auto()
    OUTSIDE = auto()
    CYCLIC = auto()


@dataclass(eq=False, slots=True)
class DecodedNode:
    """A node of an imported tree, with its derived metadata.

    Attributes read from the tree string:
        is_red:         The node's colour.
        debug_str:      Debug string, if any.
        node_error:     Text of the failure raised by the per-node hook.
        subtree_error:  Text of the failure raised by the subtree hook (root only).
        parent, left, right:  Structure of the sanitized tree.
        parent_ref:     Raw ``p`` value: ``None`` when omitted.
        has_parent_ref: Whether ``p`` was present at all (``p: null`` counts).
        left_ref, right_ref:  Integer ``l`` / ``r`` references, if any.

    Attributes resolved by the decoder:
        id:             In-order rank; unique and dense over ``0..n-1``.
        unsanitized_parent / unsanitized_left / unsanitized_right:
                        The node's pointers in the original tree, as nodes
                        of this tree (``None`` for a leaf, no parent, or a
                        node outside the tree).
        parent_link:    How the original ``parent`` relates to ``parent``.
        is_unsanitized_parent_in_tree:  False when the original parent is a
                        node that does not appear in this tree.

    Attributes set by ``derive_metadata``:
        size, depth, height, black_depth, black_height,
        are_black_paths_equal, has_error, subtree_has_error,
        use_subtree_error (whether ``subtree_error`` counts as an error).
    """

    is_red: bool
    debug_str: str | None = None
    node_error: str | None = None
    subtree_error: str | None = None
    parent: DecodedNode | None = None
    left: DecodedNode | None = None
    right: DecodedNode | None = None
    parent_ref: int | None = None
    has_parent_ref: bool = False
    left_ref: int | None = None
    right_ref: int | None = None

    id: int = -1
    unsanitized_parent: DecodedNode | None = None
    unsanitized_left: DecodedNode | None = None
    unsanitized_right: DecodedNode | None = None
    parent_link: ParentLink = ParentLink.CANONICAL
    is_unsanitized_parent_in_tree: bool = True

    size: int = 1
    depth: int = 0
    height: int = 0
    black_depth: int = 0
    black_height: int = 0
    are_black_paths_equal: bool = True
    has_error: bool = False
    subtree_has_error: bool = False
    use_subtree_error: bool = False

    def __repr__(self) -> str:
        colour = "red" if self.is_red else "black"
        return f"DecodedNode(id={self.id}, {colour})"

    def min(self) -> DecodedNode:
        """Return the first node of the subtree rooted at this node."""
        node = self
        while node.left is not None:
            node = node.left
        return node

    def successor(self) -> DecodedNode | None:
        """Return the node immediately after this one in its tree, if any."""
        if self.right is not None:
            return self.right.min()
        node = self
        while node.parent is not None and node.parent.right is node:
            node = node.parent
        return node.parent

    def iter_inorder(self) -> Iterator[DecodedNode]:
        """Iterate over the subtree rooted at this node in id order."""
        return iter_inorder(self)
