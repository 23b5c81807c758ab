"""TreeExporter: orchestrator that wires Sanitizer + ValidatorBridge + TreeEncoder.

Architecture:
- export() sanitizes the tree containing the given node, which produces the
  canonical tree, the in-order ranks and the divergence records.
- The encoder then runs the independent red-black check, calls the
  validation hooks through the bridge when that check passes, and writes the
  nested records.
- Library nodes are only read, never written.  The caller must keep the
  tree from being mutated by other threads for the duration of the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from red_black_node_visualizer.config import ExportConfig
from red_black_node_visualizer.tree.sanitizer import CanonicalTree, Sanitizer
from red_black_node_visualizer.validation import ValidatorBridge
from red_black_node_visualizer.wire.encoder import TreeEncoder

if TYPE_CHECKING:
    from red_black_node_visualizer.protocols import DebugStringGetter, NodeValidator

logger = logging.getLogger(__name__)

__all__ = ["TreeExporter"]


class TreeExporter:
    """Exports red-black trees as tree strings.

    Example::

        from red_black_node_visualizer.exporter import TreeExporter

        exporter = TreeExporter(debug_string_getter=lambda node: str(node.value))
        tree_str = exporter.export(node, title="After insert")
    """

    def __init__(
        self,
        debug_string_getter: DebugStringGetter | None = None,
        validator: NodeValidator | None = None,
        config: ExportConfig | None = None,
    ) -> None:
        """Initialise the exporter.

        Args:
            debug_string_getter: Computes the debug string shown for each
                node; ``None`` to show none.
            validator: Runs the library's validation hooks.  Defaults to
                ``HookValidator()``, which calls ``node.check_node()`` and
                ``node.check_subtree()``.
            config: Export options.  Defaults to ``ExportConfig()``.
        """
        self._config = config if config is not None else ExportConfig()
        self._sanitizer = Sanitizer()
        self._encoder = TreeEncoder(
            bridge=ValidatorBridge(validator),
            debug_string_getter=debug_string_getter,
            config=self._config,
        )

    def sanitize(self, node: Any) -> CanonicalTree:
        """Return the canonical tree for the tree containing ``node``."""
        return self._sanitizer.sanitize(node)

    def export_document(self, node: Any, title: str | None = None) -> dict[str, Any]:
        """Return the tree string for ``node`` as a JSON-ready dict."""
        return self._encoder.encode(self.sanitize(node), title)

    def export(self, node: Any, title: str | None = None) -> str:
        """Return the tree string for the tree that contains ``node``.

        ``node`` is highlighted in the visualization, unless structural
        errors keep it out of the canonical tree.

        Args:
            node:  Any node of the tree.  A dummy leaf exports an empty tree.
            title: Title text to display with the tree, if any.
        """
        tree = self.sanitize(node)
        tree_str = self._encoder.dumps(tree, title)
        logger.debug("Exported %d nodes into %d characters", len(tree), len(tree_str))
        return tree_str
