"""ImportCache: LRU-backed cache of imported tree strings.

A renderer that switches back and forth between a handful of tree strings
(for example, successive snapshots of a tree under test) would otherwise
re-parse and re-derive each one every time.  ``ImportCache`` keeps the most
recently imported trees in memory, keyed by the tree string itself. LRU
eviction occurs silently when ``max_size`` is exceeded; no error is raised.

Each ``ImportCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    from red_black_node_visualizer.cache import ImportCache

    cache = ImportCache(max_size=16)
    first = cache.import_tree(tree_str)
    again = cache.import_tree(tree_str)   # same ImportedTree, no decoding
    assert first is again
"""

from __future__ import annotations

from cachetools import LRUCache

from red_black_node_visualizer.result import ImportedTree
from red_black_node_visualizer.wire.decoder import TreeDecoder


class ImportCache:
    """LRU cache in front of ``TreeDecoder``.

    Cached ``ImportedTree`` objects are shared between callers and must be
    treated as read-only.  Strings that fail to decode are not cached.

    Args:
        max_size: Maximum number of imported trees to hold in memory.
            Defaults to 64.  When exceeded, the least-recently-used entry is
            silently evicted.
    """

    def __init__(self, max_size: int = 64) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        self._decoder = TreeDecoder()
        self._cache: LRUCache[str, ImportedTree] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def import_tree(self, tree_str: str) -> ImportedTree:
        """Return the imported tree for ``tree_str``; decode only on a miss.

        Raises:
            TreeParseError: If ``tree_str`` is not a well-formed tree string.
        """
        imported = self._cache.get(tree_str)
        if imported is None:
            imported = self._decoder.decode(tree_str)
            self._cache[tree_str] = imported
        return imported

    def __contains__(self, tree_str: object) -> bool:
        return tree_str in self._cache

    def clear(self) -> None:
        """Drop every cached tree."""
        self._cache.clear()
