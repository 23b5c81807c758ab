"""TreeEncoder: serializes a canonical tree into the tree string format.

Per node the record fields are emitted in the order ``c``, ``d``, ``e``,
``se``, ``p``, ``l``, ``r``.  Validation hooks only run when the canonical
tree passes ``red_black_violations``; the per-node hook runs for every node,
the subtree hook for the root only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from red_black_node_visualizer.config import ExportConfig
from red_black_node_visualizer.tree.invariants import is_valid_red_black
from red_black_node_visualizer.tree.sanitizer import (
    CanonicalNode,
    CanonicalTree,
    Divergence,
    DivergenceKind,
)
from red_black_node_visualizer.tree.traversal import iter_postorder
from red_black_node_visualizer.validation import ValidatorBridge
from red_black_node_visualizer.wire import schema as wire
from red_black_node_visualizer.wire.text import dump_document

if TYPE_CHECKING:
    from red_black_node_visualizer.protocols import DebugStringGetter

__all__ = ["TreeEncoder"]

_PARENT_SENTINELS = {
    DivergenceKind.OUTSIDE: wire.PARENT_OUTSIDE,
    DivergenceKind.ABSENT: wire.PARENT_ABSENT,
    DivergenceKind.SELF: wire.PARENT_SELF,
    DivergenceKind.CYCLIC: wire.PARENT_CYCLIC,
}


class TreeEncoder:
    """Encodes ``CanonicalTree`` objects as tree strings.

    Args:
        bridge: Runs the validation hooks.  Defaults to ``ValidatorBridge()``.
        debug_string_getter: Optional callable returning a node's debug
            string, or ``None`` to omit it.
        config: Export options.  Defaults to ``ExportConfig()``.
    """

    def __init__(
        self,
        bridge: ValidatorBridge | None = None,
        debug_string_getter: DebugStringGetter | None = None,
        config: ExportConfig | None = None,
    ) -> None:
        self._bridge = bridge if bridge is not None else ValidatorBridge()
        self._debug_string_getter = debug_string_getter
        self._config = config if config is not None else ExportConfig()

    def encode(self, tree: CanonicalTree, title: str | None = None) -> dict[str, Any]:
        """Return the root JSON object for ``tree``.

        Args:
            tree:  The canonical tree.
            title: Title text to display with the tree, if any.

        Returns:
            A dict with optional ``title`` and ``selectedNode`` and a
            required ``tree`` entry (``None`` for an empty tree).
        """
        document: dict[str, Any] = {}
        if title is not None:
            document[wire.TITLE] = title
        root = tree.root
        if root is None:
            document[wire.TREE] = None
            return document
        if tree.selected_rank is not None:
            document[wire.SELECTED_NODE] = tree.selected_rank
        document[wire.TREE] = self._encode_nodes(tree, root)
        return document

    def dumps(self, tree: CanonicalTree, title: str | None = None) -> str:
        """Return the tree string for ``tree``."""
        return dump_document(
            self.encode(tree, title),
            ensure_ascii=self._config.ensure_ascii,
            indent=self._config.indent,
        )

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def _encode_nodes(self, tree: CanonicalTree, root: CanonicalNode) -> dict[str, Any]:
        """Build the nested records bottom-up and return the root record."""
        is_valid = is_valid_red_black(tree)
        records: dict[int, dict[str, Any]] = {}
        for node in iter_postorder(root):
            records[id(node)] = self._encode_node(tree, node, records, is_valid)
        return records[id(root)]

    def _encode_node(
        self,
        tree: CanonicalTree,
        node: CanonicalNode,
        records: dict[int, dict[str, Any]],
        is_valid: bool,
    ) -> dict[str, Any]:
        raw = node.raw
        record: dict[str, Any] = {wire.COLOR: bool(raw.is_red)}
        if self._debug_string_getter is not None:
            debug_str = self._debug_string_getter(raw)
            if debug_str is not None:
                record[wire.DEBUG] = debug_str

        if is_valid and self._config.run_node_checks:
            error = self._bridge.node_error(raw)
            if error is not None:
                record[wire.NODE_ERROR] = error
        if is_valid and self._config.run_subtree_check and node.parent is None:
            error = self._bridge.subtree_error(raw)
            if error is not None:
                record[wire.SUBTREE_ERROR] = error

        divergence = tree.divergence(node.rank)
        if divergence is not None and divergence.parent is not None:
            record[wire.PARENT] = _parent_value(divergence.parent)

        left_divergence = divergence.left if divergence is not None else None
        right_divergence = divergence.right if divergence is not None else None
        _put_child(record, wire.LEFT, node.left, left_divergence, records)
        _put_child(record, wire.RIGHT, node.right, right_divergence, records)
        return record


def _parent_value(divergence: Divergence) -> int:
    if divergence.rank is not None:
        return divergence.rank
    return _PARENT_SENTINELS[divergence.kind]


def _put_child(
    record: dict[str, Any],
    key: str,
    child: CanonicalNode | None,
    divergence: Divergence | None,
    records: dict[int, dict[str, Any]],
) -> None:
    if child is not None:
        record[key] = records.pop(id(child))
    elif divergence is not None:
        record[key] = (
            divergence.rank if divergence.rank is not None else wire.CHILD_OUTSIDE
        )
