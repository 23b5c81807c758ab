"""TreeDecoder: parses a tree string back into DecodedNode objects.

Decoding happens in three passes:

1. Build the ``DecodedNode`` tree from the nested records.
2. Number the nodes in in-order, the numbering used by the sanitizer, and
   resolve ``p`` / ``l`` / ``r`` references through the resulting id table.
3. Derive metadata (``derive_metadata``).

Malformed JSON and records of the wrong shape raise ``TreeParseError``.
References to unknown ids, sentinels and error strings are regular data.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from red_black_node_visualizer.errors import TreeParseError
from red_black_node_visualizer.metadata import derive_metadata
from red_black_node_visualizer.result import ImportedTree
from red_black_node_visualizer.tree.nodes import DecodedNode, ParentLink
from red_black_node_visualizer.tree.traversal import iter_inorder
from red_black_node_visualizer.wire import schema as wire
from red_black_node_visualizer.wire.text import load_document

logger = logging.getLogger(__name__)

__all__ = ["TreeDecoder"]

_SENTINEL_LINKS = {
    wire.PARENT_ABSENT: ParentLink.ABSENT,
    wire.PARENT_SELF: ParentLink.SELF,
    wire.PARENT_CYCLIC: ParentLink.CYCLIC,
}

_OPTIONAL_TEXT_FIELDS = (wire.DEBUG, wire.NODE_ERROR, wire.SUBTREE_ERROR)


def _is_int(value: Any) -> bool:
    # bool subclasses int; JSON true/false are never ranks.
    return isinstance(value, int) and not isinstance(value, bool)


class TreeDecoder:
    """Decodes tree strings into ``ImportedTree`` results.

    A decoder holds no state between calls.

    Example::

        imported = TreeDecoder().decode('{"tree":{"c":false,"l":{"c":true}}}')
        imported.root.size          # 2
        imported.nodes[0].is_red    # True
    """

    def decode(self, data: str | bytes | dict[str, Any]) -> ImportedTree:
        """Decode a tree string (or its already-parsed JSON object).

        Args:
            data: The tree string, as produced by ``export_tree``, or the
                result of ``json.loads`` on it.

        Returns:
            The imported tree with all metadata derived.

        Raises:
            TreeParseError: If ``data`` is not well-formed.
        """
        document = self._load(data) if isinstance(data, (str, bytes)) else data
        if not isinstance(document, dict):
            msg = f"tree string must be a JSON object, got {type(document).__name__}"
            raise TreeParseError(msg)

        title = document.get(wire.TITLE)
        if title is not None and not isinstance(title, str):
            msg = f"'{wire.TITLE}' must be a string, got {title!r}"
            raise TreeParseError(msg)
        selected = document.get(wire.SELECTED_NODE)
        if selected is not None and not _is_int(selected):
            msg = f"'{wire.SELECTED_NODE}' must be an integer, got {selected!r}"
            raise TreeParseError(msg)
        if wire.TREE not in document:
            msg = f"tree string is missing the '{wire.TREE}' entry"
            raise TreeParseError(msg)

        tree_record = document[wire.TREE]
        if tree_record is None:
            return ImportedTree(root=None, nodes=[], selected_node=None, title=title)

        root = self._build(tree_record)
        nodes = list(iter_inorder(root))
        for node_id, node in enumerate(nodes):
            node.id = node_id
        for node in nodes:
            self._resolve_pointers(node, nodes)
        derive_metadata(root)

        selected_node = None
        if selected is not None and 0 <= selected < len(nodes):
            selected_node = nodes[selected]
        logger.debug(
            "Decoded tree: %d nodes, errors=%s", len(nodes), root.subtree_has_error
        )
        return ImportedTree(
            root=root, nodes=nodes, selected_node=selected_node, title=title
        )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _load(data: str | bytes) -> Any:
        try:
            text = data.decode("utf-8") if isinstance(data, bytes) else data
            return load_document(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exception:
            msg = f"tree string is not valid JSON: {exception}"
            raise TreeParseError(msg) from exception

    def _build(self, tree_record: Any) -> DecodedNode:
        """Build the DecodedNode tree from the nested records, without recursion."""
        root = self._make_node(tree_record, None)
        stack = [(root, tree_record)]
        while stack:
            node, record = stack.pop()
            for key in (wire.LEFT, wire.RIGHT):
                value = record.get(key)
                if value is None:
                    continue
                if isinstance(value, dict):
                    child = self._make_node(value, node)
                    if key == wire.LEFT:
                        node.left = child
                    else:
                        node.right = child
                    stack.append((child, value))
                elif _is_int(value):
                    if key == wire.LEFT:
                        node.left_ref = value
                    else:
                        node.right_ref = value
                else:
                    msg = f"'{key}' must be a node record or an integer, got {value!r}"
                    raise TreeParseError(msg)
        return root

    @staticmethod
    def _make_node(record: Any, parent: DecodedNode | None) -> DecodedNode:
        if not isinstance(record, dict):
            msg = f"node record must be a JSON object, got {record!r}"
            raise TreeParseError(msg)
        is_red = record.get(wire.COLOR)
        if not isinstance(is_red, bool):
            msg = f"node record needs a boolean '{wire.COLOR}', got {is_red!r}"
            raise TreeParseError(msg)
        for key in _OPTIONAL_TEXT_FIELDS:
            value = record.get(key)
            if value is not None and not isinstance(value, str):
                msg = f"'{key}' must be a string, got {value!r}"
                raise TreeParseError(msg)
        parent_ref = record.get(wire.PARENT)
        if parent_ref is not None and not _is_int(parent_ref):
            msg = f"'{wire.PARENT}' must be an integer, got {parent_ref!r}"
            raise TreeParseError(msg)

        return DecodedNode(
            is_red=is_red,
            debug_str=record.get(wire.DEBUG),
            node_error=record.get(wire.NODE_ERROR),
            subtree_error=record.get(wire.SUBTREE_ERROR),
            parent=parent,
            parent_ref=parent_ref,
            has_parent_ref=wire.PARENT in record,
        )

    # ------------------------------------------------------------------
    # Unsanitized pointers
    # ------------------------------------------------------------------

    @staticmethod
    def _lookup(nodes: list[DecodedNode], node_id: int | None) -> DecodedNode | None:
        if node_id is None or not 0 <= node_id < len(nodes):
            return None
        return nodes[node_id]

    def _resolve_pointers(self, node: DecodedNode, nodes: list[DecodedNode]) -> None:
        """Set the unsanitized pointers and parent link of ``node``."""
        ref = node.parent_ref
        if not node.has_parent_ref or (ref is None and node.parent is None):
            # A null parent on the root is its canonical parent.
            node.unsanitized_parent = node.parent
            node.parent_link = ParentLink.CANONICAL
        elif ref is None:
            node.parent_link = ParentLink.ABSENT
        elif ref >= 0:
            target = self._lookup(nodes, ref)
            if target is None:
                node.parent_link = ParentLink.OUTSIDE
                node.is_unsanitized_parent_in_tree = False
            elif target is node:
                node.parent_link = ParentLink.SELF
            elif target is node.parent:
                node.unsanitized_parent = target
                node.parent_link = ParentLink.CANONICAL
            else:
                node.unsanitized_parent = target
                node.parent_link = ParentLink.IN_TREE
        else:
            node.parent_link = _SENTINEL_LINKS.get(ref, ParentLink.OUTSIDE)
            node.is_unsanitized_parent_in_tree = node.parent_link in (
                ParentLink.ABSENT,
                ParentLink.SELF,
            )

        if node.left_ref is None:
            node.unsanitized_left = node.left
        else:
            node.unsanitized_left = self._lookup(nodes, node.left_ref)
        if node.right_ref is None:
            node.unsanitized_right = node.right
        else:
            node.unsanitized_right = self._lookup(nodes, node.right_ref)
