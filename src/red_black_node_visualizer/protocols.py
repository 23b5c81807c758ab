"""Structural interfaces for the red-black tree library being visualized.

The visualizer never imports the tree library.  Any node object with the
attributes below satisfies ``RedBlackNode``, and any object with
``check_node`` / ``check_subtree`` methods satisfies ``NodeValidator``,
no inheritance required.

Example::

    from red_black_node_visualizer.protocols import RedBlackNode

    class Node:
        def __init__(self) -> None:
            self.left = self.right = self.parent = None
            self.is_red = False

    assert isinstance(Node(), RedBlackNode)  # structural conformance
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RedBlackNode(Protocol):
    """A node as exposed by the red-black tree library.

    ``left``, ``right`` and ``parent`` may be ``None``, the library's dummy
    leaf, or any other node (including the node itself).  A node with a
    ``None`` child is treated as a dummy leaf.
    """

    left: Any
    right: Any
    parent: Any
    is_red: bool


@runtime_checkable
class NodeValidator(Protocol):
    """Capability that runs the tree library's own consistency checks.

    Both methods signal a failure by raising.  ``check_subtree`` may assume
    that the subtree satisfies the red-black invariants.
    """

    def check_node(self, node: Any) -> None: ...

    def check_subtree(self, node: Any) -> None: ...


class DebugStringGetter(Protocol):
    """Computes the debug string shown for a node, or ``None`` for none."""

    def __call__(self, node: Any) -> str | None: ...
