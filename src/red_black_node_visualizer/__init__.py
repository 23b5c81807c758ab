"""Red-black node visualizer - portable, error-annotated snapshots of red-black trees."""

from __future__ import annotations

import logging

from red_black_node_visualizer.api import export_tree, import_tree, sanitize
from red_black_node_visualizer.cache import ImportCache
from red_black_node_visualizer.config import ExportConfig
from red_black_node_visualizer.errors import TreeParseError
from red_black_node_visualizer.exporter import TreeExporter
from red_black_node_visualizer.inspection import describe_errors, next_error_node
from red_black_node_visualizer.result import ImportedTree
from red_black_node_visualizer.tree.nodes import DecodedNode, ParentLink
from red_black_node_visualizer.viewer import ViewerRegistry, show_in_web_browser, write_html

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "DecodedNode",
    "ExportConfig",
    "ImportCache",
    "ImportedTree",
    "ParentLink",
    "TreeExporter",
    "TreeParseError",
    "ViewerRegistry",
    "describe_errors",
    "export_tree",
    "import_tree",
    "next_error_node",
    "sanitize",
    "show_in_web_browser",
    "write_html",
]
