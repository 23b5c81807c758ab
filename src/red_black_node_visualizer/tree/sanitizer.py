"""Sanitizer: converts a possibly malformed node graph into a canonical tree.

The sanitizer only follows ``left`` and ``right`` pointers when building the
canonical tree.  Every node reachable from the root through child pointers
that do not pass through a dummy leaf appears exactly once; the first path
that reaches a node wins.  ``parent`` pointers are only used to find the
root and to compute divergences.

Ranks are assigned in in-order position during the walk.  The decoder
numbers decoded nodes the same way, so a rank written by the encoder
identifies the same node on the other side.

Node identity is object identity: nodes are keyed by ``id()`` and never
compared with ``==``, so library nodes that override ``__eq__`` or
``__hash__`` are handled correctly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

logger = logging.getLogger(__name__)

__all__ = [
    "CanonicalNode",
    "CanonicalTree",
    "Divergence",
    "DivergenceKind",
    "DivergenceRecord",
    "Sanitizer",
    "find_root",
    "is_leaf",
]


def is_leaf(node: Any) -> bool:
    """Return whether ``node`` is a leaf boundary.

    ``None`` and any node with at least one ``None`` child count as dummy
    leaves, whatever their other fields hold.
    """
    return node is None or node.left is None or node.right is None


def find_root(node: Any) -> tuple[Any, bool]:
    """Follow ``parent`` pointers from ``node`` up to the root.

    Stops at a node whose parent is ``None`` or a dummy leaf, or at the first
    node reached twice.  In the latter case the repeated node becomes the
    effective root.

    Returns:
        ``(root, cycled)`` where ``cycled`` is True when the climb stopped
        because of a parent cycle.
    """
    seen: set[int] = set()
    root = node
    while not is_leaf(root.parent):
        if id(root) in seen:
            return root, True
        seen.add(id(root))
        root = root.parent
    return root, False


class DivergenceKind(StrEnum):
    """How an original pointer differs from the canonical tree.

    - RANK:    Points at a canonical node other than the canonical one.
    - OUTSIDE: Points at a node that does not appear in the canonical tree.
    - ABSENT:  ``parent`` is ``None`` although the node is not the root.
    - SELF:    ``parent`` is the node itself.
    - CYCLIC:  Repeatedly following ``parent`` never reaches ``None``.
    """

    RANK = auto()
    OUTSIDE = auto()
    ABSENT = auto()
    SELF = auto()
    CYCLIC = auto()


@dataclass(frozen=True, slots=True)
class Divergence:
    """One divergent pointer.  ``rank`` is set only for ``DivergenceKind.RANK``."""

    kind: DivergenceKind
    rank: int | None = None


@dataclass(slots=True)
class DivergenceRecord:
    """Pointer divergences of one canonical node; ``None`` means no divergence."""

    parent: Divergence | None = None
    left: Divergence | None = None
    right: Divergence | None = None

    @property
    def is_empty(self) -> bool:
        return self.parent is None and self.left is None and self.right is None


@dataclass(eq=False, slots=True)
class CanonicalNode:
    """A node of the canonical tree, wrapping the library node ``raw``."""

    raw: Any
    parent: CanonicalNode | None = None
    left: CanonicalNode | None = None
    right: CanonicalNode | None = None
    rank: int = -1


@dataclass(eq=False)
class CanonicalTree:
    """Result of sanitizing the tree that contains a node.

    Attributes:
        root:          Canonical root, or ``None`` for an empty tree.
        nodes:         Canonical nodes indexed by rank.
        divergences:   Divergence records keyed by rank, for divergent nodes only.
        root_cycled:   Whether root discovery stopped on a parent cycle.
        selected_rank: Rank of the node passed to ``Sanitizer.sanitize``, if
                       that node appears in the canonical tree.
    """

    root: CanonicalNode | None
    nodes: list[CanonicalNode] = field(default_factory=list)
    divergences: dict[int, DivergenceRecord] = field(default_factory=dict)
    root_cycled: bool = False
    selected_rank: int | None = None
    _by_identity: dict[int, CanonicalNode] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def find(self, raw: Any) -> CanonicalNode | None:
        """Return the canonical node wrapping ``raw``, if ``raw`` is in the tree."""
        if raw is None:
            return None
        return self._by_identity.get(id(raw))

    def rank_of(self, raw: Any) -> int | None:
        canonical = self.find(raw)
        return canonical.rank if canonical is not None else None

    def divergence(self, rank: int) -> DivergenceRecord | None:
        return self.divergences.get(rank)


class Sanitizer:
    """Builds a ``CanonicalTree`` from any node of a possibly malformed tree.

    The sanitizer never mutates library nodes.  A ``Sanitizer`` holds no
    state between calls; one instance may be reused.

    Example::

        tree = Sanitizer().sanitize(node)
        for canonical in tree.nodes:        # in rank order
            record = tree.divergence(canonical.rank)
    """

    def sanitize(self, node: Any) -> CanonicalTree:
        """Sanitize the tree containing ``node``.

        Args:
            node: Any node of the tree.  A dummy leaf yields an empty tree.

        Returns:
            The canonical tree with ranks and divergence records filled in.
        """
        if is_leaf(node):
            return CanonicalTree(root=None)

        raw_root, cycled = find_root(node)
        root = CanonicalNode(raw_root)
        tree = CanonicalTree(root=root, root_cycled=cycled)
        self._walk(tree, root)
        self._compute_divergences(tree)
        tree.selected_rank = tree.rank_of(node)
        logger.debug(
            "Sanitized tree: %d nodes, %d divergent, root cycled=%s",
            len(tree.nodes),
            len(tree.divergences),
            cycled,
        )
        return tree

    # ------------------------------------------------------------------
    # Canonicalization
    # ------------------------------------------------------------------

    def _walk(self, tree: CanonicalTree, root: CanonicalNode) -> None:
        """Depth-first walk over child pointers, assigning in-order ranks.

        Equivalent to the recursive formulation "claim left child, recurse
        left, assign rank, claim right child, recurse right", run on an
        explicit stack.  A child is claimed (added to the visited set) just
        before it is descended into.
        """
        tree._by_identity[id(root.raw)] = root
        stack: list[tuple[CanonicalNode, bool]] = [(root, False)]
        while stack:
            node, left_done = stack.pop()
            if not left_done:
                stack.append((node, True))
                child = self._claim(tree, node, node.raw.left)
                if child is not None:
                    node.left = child
                    stack.append((child, False))
                continue

            node.rank = len(tree.nodes)
            tree.nodes.append(node)
            child = self._claim(tree, node, node.raw.right)
            if child is not None:
                node.right = child
                stack.append((child, False))

    @staticmethod
    def _claim(
        tree: CanonicalTree, parent: CanonicalNode, raw_child: Any
    ) -> CanonicalNode | None:
        """Return a new canonical node for ``raw_child``, or None if it is not claimable."""
        if is_leaf(raw_child) or id(raw_child) in tree._by_identity:
            return None
        child = CanonicalNode(raw_child, parent=parent)
        tree._by_identity[id(raw_child)] = child
        return child

    # ------------------------------------------------------------------
    # Divergences
    # ------------------------------------------------------------------

    def _compute_divergences(self, tree: CanonicalTree) -> None:
        chain_memo: dict[int, bool] = {}
        for node in tree.nodes:
            record = DivergenceRecord(
                parent=self._parent_divergence(tree, node, chain_memo),
                left=self._child_divergence(tree, node.left, node.raw.left),
                right=self._child_divergence(tree, node.right, node.raw.right),
            )
            if not record.is_empty:
                tree.divergences[node.rank] = record

    def _parent_divergence(
        self, tree: CanonicalTree, node: CanonicalNode, chain_memo: dict[int, bool]
    ) -> Divergence | None:
        raw_parent = node.raw.parent
        if node.parent is None:
            if raw_parent is None:
                return None
            if raw_parent is node.raw:
                return Divergence(DivergenceKind.SELF)
            if tree.root_cycled:
                return Divergence(DivergenceKind.CYCLIC)
            return Divergence(DivergenceKind.OUTSIDE)

        if raw_parent is node.parent.raw:
            return None
        if raw_parent is None:
            return Divergence(DivergenceKind.ABSENT)
        if raw_parent is node.raw:
            return Divergence(DivergenceKind.SELF)
        rank = tree.rank_of(raw_parent)
        if rank is not None:
            return Divergence(DivergenceKind.RANK, rank)
        if _parent_chain_cycles(raw_parent, chain_memo):
            return Divergence(DivergenceKind.CYCLIC)
        return Divergence(DivergenceKind.OUTSIDE)

    @staticmethod
    def _child_divergence(
        tree: CanonicalTree, canonical: CanonicalNode | None, raw_child: Any
    ) -> Divergence | None:
        if canonical is not None or is_leaf(raw_child):
            return None
        rank = tree.rank_of(raw_child)
        if rank is None:
            return Divergence(DivergenceKind.OUTSIDE)
        return Divergence(DivergenceKind.RANK, rank)


def _parent_chain_cycles(start: Any, memo: dict[int, bool]) -> bool:
    """Return whether following ``parent`` from ``start`` never reaches ``None``.

    Results are memoized per node identity in ``memo`` so that classifying
    every node of a tree stays linear overall.
    """
    path: list[Any] = []
    on_path: set[int] = set()
    node = start
    result = False
    while node is not None:
        key = id(node)
        if key in memo:
            result = memo[key]
            break
        if key in on_path:
            result = True
            break
        on_path.add(key)
        path.append(node)
        node = node.parent
    for visited in path:
        memo[id(visited)] = result
    return result
