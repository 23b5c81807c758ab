"""Tree subpackage: canonicalization and tree node primitives.

Re-exports the public API for the tree module:
- Sanitizer / CanonicalTree: builds the canonical tree for a node graph
- Divergence / DivergenceKind / DivergenceRecord: pointer divergence records
- DecodedNode / ParentLink: nodes of an imported tree
- red_black_violations: independent red-black invariant check
"""

from red_black_node_visualizer.tree.invariants import (
    is_valid_red_black,
    red_black_violations,
)
from red_black_node_visualizer.tree.nodes import DecodedNode, ParentLink
from red_black_node_visualizer.tree.sanitizer import (
    CanonicalNode,
    CanonicalTree,
    Divergence,
    DivergenceKind,
    DivergenceRecord,
    Sanitizer,
    find_root,
    is_leaf,
)

__all__ = [
    "CanonicalNode",
    "CanonicalTree",
    "DecodedNode",
    "Divergence",
    "DivergenceKind",
    "DivergenceRecord",
    "ParentLink",
    "Sanitizer",
    "find_root",
    "is_leaf",
    "is_valid_red_black",
    "red_black_violations",
]
