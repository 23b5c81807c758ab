"""Field names and reserved values of the tree string format.

A tree string is a JSON object::

    {"title": "...", "selectedNode": 3, "tree": <record or null>}

Each node record carries ``c`` (colour, required), ``d`` (debug string),
``e`` (per-node check failure), ``se`` (subtree check failure, root only),
``p`` (parent divergence), and ``l`` / ``r`` (nested child record, or the
integer rank of a divergent child pointer).  Canonical structure is carried
by nesting alone, so only anomalies cost extra space.
"""

from __future__ import annotations

TITLE = "title"
SELECTED_NODE = "selectedNode"
TREE = "tree"

COLOR = "c"
DEBUG = "d"
NODE_ERROR = "e"
SUBTREE_ERROR = "se"
PARENT = "p"
LEFT = "l"
RIGHT = "r"

# Parent sentinels; ranks are never negative.
PARENT_OUTSIDE = -1
PARENT_ABSENT = -2
PARENT_SELF = -3
PARENT_CYCLIC = -4

# Child pointer that refers to a node outside the tree.
CHILD_OUTSIDE = -1

# Separators for the compact form.
COMPACT_SEPARATORS = (",", ":")
