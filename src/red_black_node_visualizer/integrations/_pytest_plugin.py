"""pytest plugin for red-black-node-visualizer.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from red_black_node_visualizer import export_tree, import_tree
from red_black_node_visualizer.inspection import describe_errors

# At most this many error nodes are spelled out in a failure message.
_MAX_REPORTED_NODES = 10


@pytest.fixture(scope="session")
def assert_valid_tree() -> Any:
    """Fixture that returns a callable red-black tree asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to export_tree() / import_tree(), which use fresh objects per
    call).

    Usage in tests::

        def test_insert(assert_valid_tree):
            tree.insert(5)
            assert_valid_tree(tree.root)

    Returns:
        A callable ``_assert(node, debug_string_getter=None) -> str`` that
        raises ``AssertionError`` when the tree containing ``node`` has any
        structural, red-black or validation error, and otherwise returns the
        tree string.
    """

    def _assert(node: Any, debug_string_getter: Any = None) -> str:
        """Assert that the tree containing ``node`` has no errors.

        Args:
            node: Any node of the tree.
            debug_string_getter: Optional debug-string callable, included in
                the failure message for each error node.

        Raises:
            AssertionError: Listing every error node (up to a limit) with its
                id, debug string and error descriptions.
        """
        tree_str = export_tree(node, debug_string_getter=debug_string_getter)
        imported = import_tree(tree_str)
        error_nodes = imported.error_nodes()
        if not error_nodes:
            return tree_str

        lines = [f"red-black tree has {len(error_nodes)} node(s) with errors:"]
        for error_node in error_nodes[:_MAX_REPORTED_NODES]:
            label = f"#{error_node.id}"
            if error_node.debug_str is not None:
                label += f" ({error_node.debug_str})"
            lines.append(f"  node {label}:")
            lines.extend(f"    - {message}" for message in describe_errors(error_node))
        if len(error_nodes) > _MAX_REPORTED_NODES:
            lines.append(f"  ... and {len(error_nodes) - _MAX_REPORTED_NODES} more")
        raise AssertionError("\n".join(lines))

    return _assert
