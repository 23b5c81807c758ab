"""Shared fixtures: small hand-built trees and a large valid red-black tree.

All trees are built from ``rb_support.SumNode`` objects with the shared
``LEAF`` dummy leaf.
"""

from __future__ import annotations

import pytest

from rb_support import RedBlackTree, SumNode, build_tree, make_node


@pytest.fixture
def two_node_tree() -> tuple[SumNode, SumNode]:
    """Black root 7 with a red left child 6; valid in every respect.

    Returns (root, child).
    """
    root = make_node(7)
    child = make_node(6, is_red=True)
    root.left = child
    child.parent = root
    root.sum = 13
    return root, child


@pytest.fixture
def three_node_tree() -> tuple[SumNode, SumNode, SumNode]:
    """Black root 2 with red children 1 and 3.

    Returns (left, root, right), i.e. nodes in rank order.
    """
    root = make_node(2)
    left = make_node(1, is_red=True)
    right = make_node(3, is_red=True)
    root.left = left
    root.right = right
    left.parent = root
    right.parent = root
    root.sum = 6
    return left, root, right


@pytest.fixture(scope="module")
def large_values() -> list[int]:
    return list(range(1000))


@pytest.fixture
def large_tree(large_values: list[int]) -> RedBlackTree:
    """A valid 1,000-node red-black tree holding 0..999."""
    return build_tree(large_values)
