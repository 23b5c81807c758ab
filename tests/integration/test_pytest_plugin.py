"""Integration tests for the red-black-node-visualizer pytest plugin.

These tests verify that the assert_valid_tree fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require red-black-node-visualizer to be installed (even in
editable mode via ``pip install -e .``). The pytest11 entry point is only
registered at install time -- running from a raw source checkout without
installing will not discover the fixture.
"""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from rb_support import RedBlackTree, debug_value, make_node


def test_fixture_passes_valid_tree(assert_valid_tree: Any, large_tree: RedBlackTree) -> None:
    """A freshly built red-black tree has no errors."""
    tree_str = assert_valid_tree(large_tree.nodes[0])
    assert json.loads(tree_str)["tree"]["c"] is False


def test_fixture_fails_red_root(assert_valid_tree: Any) -> None:
    with pytest.raises(AssertionError, match=r"has 1 node\(s\) with errors"):
        assert_valid_tree(make_node(1, is_red=True))


def test_fixture_error_message_contents(assert_valid_tree: Any) -> None:
    """AssertionError message should name the node and describe each error."""
    node = make_node(18)
    node.sum = 4
    with pytest.raises(AssertionError) as exc_info:
        assert_valid_tree(node, debug_string_getter=debug_value)

    error_message = str(exc_info.value)
    assert "node #0 (18):" in error_message
    assert "check_node() raised an exception: RuntimeError: sum is wrong" in error_message


def test_fixture_limits_reported_nodes(assert_valid_tree: Any) -> None:
    """Only the first ten error nodes are spelled out."""
    nodes = [make_node(i) for i in range(12)]
    for node in nodes:
        node.parent = node
    root = nodes[0]
    chain = root
    for node in nodes[1:]:
        chain.right = node
        chain = node
    with pytest.raises(AssertionError) as exc_info:
        assert_valid_tree(root)

    error_message = str(exc_info.value)
    assert "has 12 node(s) with errors" in error_message
    assert "... and 2 more" in error_message
    assert "node #10:" not in error_message


def test_fixture_returns_callable(assert_valid_tree: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_valid_tree), (
        "assert_valid_tree fixture must return a callable, not a direct value"
    )


def test_plugin_discovery() -> None:
    """Verify assert_valid_tree appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_valid_tree" in result.stdout, (
        f"assert_valid_tree not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
