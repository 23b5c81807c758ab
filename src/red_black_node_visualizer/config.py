"""ExportConfig: options controlling how trees are exported.

ExportConfig is a frozen (immutable) dataclass.  Infrastructure limits such
as the viewer-session cap and the import cache size are constructor
arguments of the objects that own them, not part of this config.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Immutable configuration for tree export.

    Attributes:
        run_node_checks: Call the per-node validation hook for every node of
            a tree that passes the red-black invariant check.  Default True.
        run_subtree_check: Call the whole-subtree validation hook on the root
            of a tree that passes the red-black invariant check.  Default True.
        ensure_ascii: Escape every non-ASCII character in the tree string.
            Default True, which keeps tree strings safe to embed anywhere.
        indent: JSON indentation for human inspection.  ``None`` (default)
            produces the compact form.
    """

    run_node_checks: bool = True
    run_subtree_check: bool = True
    ensure_ascii: bool = True
    indent: int | None = None

    def __post_init__(self) -> None:
        if self.indent is not None and self.indent < 0:
            msg = f"indent must be None or >= 0, got {self.indent}"
            raise ValueError(msg)
