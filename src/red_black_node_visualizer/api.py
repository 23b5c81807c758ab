"""Public API functions for red-black-node-visualizer.

This module provides the user-facing functions: export_tree, import_tree and
sanitize.  Each call creates a fresh TreeExporter (or TreeDecoder) to
guarantee zero global state mutation between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from red_black_node_visualizer.config import ExportConfig
from red_black_node_visualizer.exporter import TreeExporter
from red_black_node_visualizer.result import ImportedTree
from red_black_node_visualizer.tree.sanitizer import CanonicalTree, Sanitizer
from red_black_node_visualizer.wire.decoder import TreeDecoder

if TYPE_CHECKING:
    from red_black_node_visualizer.protocols import DebugStringGetter, NodeValidator

__all__ = ["export_tree", "import_tree", "sanitize"]


def export_tree(
    node: Any,
    title: str | None = None,
    debug_string_getter: DebugStringGetter | None = None,
    validator: NodeValidator | None = None,
    config: ExportConfig | None = None,
) -> str:
    """Return a tree string for the red-black tree that contains ``node``.

    The tree string may be passed to ``import_tree`` or to a renderer.
    ``node`` is highlighted initially, unless structural errors keep it out
    of the visualization.

    Args:
        node:                Any node of the tree.
        title:               Title text to display, if any.
        debug_string_getter: Computes the debug string for each node, e.g.
                             the value stored in it.  ``None`` for none.
        validator:           Runs the library's validation hooks.  Defaults
                             to calling ``check_node`` / ``check_subtree`` on
                             the nodes.
        config:              Export options.  Defaults to ``ExportConfig()``.

    Returns:
        The compact JSON tree string.
    """
    exporter = TreeExporter(
        debug_string_getter=debug_string_getter, validator=validator, config=config
    )
    return exporter.export(node, title)


def import_tree(data: str | bytes | dict[str, Any]) -> ImportedTree:
    """Decode a tree string and derive the metadata of every node.

    Args:
        data: A tree string as returned by ``export_tree``, or its parsed
              JSON object.

    Returns:
        An ``ImportedTree`` with root, nodes by id, selected node and title.

    Raises:
        TreeParseError: If ``data`` is not a well-formed tree string.
    """
    return TreeDecoder().decode(data)


def sanitize(node: Any) -> CanonicalTree:
    """Return the canonical tree for the tree that contains ``node``."""
    return Sanitizer().sanitize(node)
