"""Tests for the Sanitizer.

Verifies:
- Root discovery through parent pointers, including parent cycles
- In-order ranks are dense and strictly increasing left to right
- Already valid trees produce no divergence records
- Self references, shared nodes and child cycles terminate and are recorded
- Parent divergence kinds (absent, self, in-tree rank, outside, cyclic)
- Library nodes are never modified
"""

from __future__ import annotations

from red_black_node_visualizer.tree.sanitizer import (
    Divergence,
    DivergenceKind,
    Sanitizer,
    find_root,
    is_leaf,
)
from rb_support import LEAF, RedBlackTree, SumNode, make_node


def _snapshot(nodes: list[SumNode]) -> list[tuple[object, object, object, bool]]:
    return [(n.left, n.right, n.parent, n.is_red) for n in nodes]


class TestIsLeaf:
    def test_none_is_leaf(self) -> None:
        assert is_leaf(None)

    def test_dummy_leaf_is_leaf(self) -> None:
        assert is_leaf(LEAF)

    def test_node_with_one_missing_child_is_leaf(self) -> None:
        node = make_node(1)
        node.right = None
        assert is_leaf(node)

    def test_internal_node_is_not_leaf(self) -> None:
        assert not is_leaf(make_node(1))


class TestFindRoot:
    def test_root_of_root_is_itself(self, two_node_tree) -> None:  # type: ignore[no-untyped-def]
        root, _ = two_node_tree
        assert find_root(root) == (root, False)

    def test_climbs_from_child(self, two_node_tree) -> None:  # type: ignore[no-untyped-def]
        root, child = two_node_tree
        assert find_root(child) == (root, False)

    def test_two_node_parent_cycle_stops_at_repeated_node(self) -> None:
        a = make_node(1)
        b = make_node(2)
        a.parent = b
        b.parent = a
        assert find_root(a) == (a, True)
        assert find_root(b) == (b, True)

    def test_self_parent(self) -> None:
        node = make_node(1)
        node.parent = node
        assert find_root(node) == (node, True)

    def test_stops_below_dummy_leaf_parent(self) -> None:
        node = make_node(1)
        node.parent = LEAF
        assert find_root(node) == (node, False)


class TestCanonicalStructure:
    def test_leaf_gives_empty_tree(self) -> None:
        tree = Sanitizer().sanitize(LEAF)
        assert tree.root is None
        assert len(tree) == 0
        assert tree.selected_rank is None

    def test_single_node(self) -> None:
        node = make_node(5)
        tree = Sanitizer().sanitize(node)
        assert tree.root is not None
        assert tree.root.raw is node
        assert [n.rank for n in tree.nodes] == [0]
        assert tree.divergences == {}
        assert tree.selected_rank == 0

    def test_ranks_follow_in_order(self, three_node_tree) -> None:  # type: ignore[no-untyped-def]
        left, root, right = three_node_tree
        tree = Sanitizer().sanitize(right)
        assert [n.raw for n in tree.nodes] == [left, root, right]
        assert [n.rank for n in tree.nodes] == [0, 1, 2]
        assert tree.rank_of(root) == 1
        assert tree.selected_rank == 2

    def test_canonical_links_mirror_tree(self, three_node_tree) -> None:  # type: ignore[no-untyped-def]
        left, root, right = three_node_tree
        tree = Sanitizer().sanitize(root)
        canonical_root = tree.root
        assert canonical_root is not None
        assert canonical_root.left is tree.find(left)
        assert canonical_root.right is tree.find(right)
        assert tree.find(left).parent is canonical_root  # type: ignore[union-attr]

    def test_large_tree_ranks_match_value_order(self, large_tree: RedBlackTree) -> None:
        tree = Sanitizer().sanitize(large_tree.root)
        assert len(tree) == 1000
        assert [n.raw.value for n in tree.nodes] == list(range(1000))
        assert [n.rank for n in tree.nodes] == list(range(1000))

    def test_valid_tree_has_no_divergences(self, large_tree: RedBlackTree) -> None:
        tree = Sanitizer().sanitize(large_tree.nodes[17])
        assert tree.divergences == {}
        assert not tree.root_cycled

    def test_sanitize_is_idempotent_on_valid_tree(self, large_tree: RedBlackTree) -> None:
        first = Sanitizer().sanitize(large_tree.root)
        second = Sanitizer().sanitize(large_tree.root)
        assert [n.raw for n in first.nodes] == [n.raw for n in second.nodes]
        assert second.divergences == {}

    def test_does_not_modify_nodes(self, three_node_tree) -> None:  # type: ignore[no-untyped-def]
        nodes = list(three_node_tree)
        nodes[0].right = nodes[1]  # shared node and cycle
        before = _snapshot(nodes)
        Sanitizer().sanitize(nodes[0])
        assert _snapshot(nodes) == before

    def test_deep_chain_does_not_recurse(self) -> None:
        nodes = [make_node(i) for i in range(5000)]
        for parent, child in zip(nodes, nodes[1:], strict=False):
            parent.right = child
            child.parent = parent
        tree = Sanitizer().sanitize(nodes[-1])
        assert len(tree) == 5000
        assert tree.divergences == {}
        assert tree.selected_rank == 4999


class TestChildDivergence:
    def test_self_right_child(self) -> None:
        node = make_node(1)
        node.right = node
        tree = Sanitizer().sanitize(node)
        assert len(tree) == 1
        record = tree.divergence(0)
        assert record is not None
        assert record.right == Divergence(DivergenceKind.RANK, 0)
        assert record.left is None
        assert record.parent is None

    def test_mutual_left_children(self) -> None:
        a = make_node(1)
        b = make_node(2, is_red=True)
        a.left = b
        b.left = a
        b.parent = a
        tree = Sanitizer().sanitize(a)
        # b is reached through a's left pointer; a is then already claimed.
        assert [n.raw for n in tree.nodes] == [b, a]
        assert tree.divergences[0].left == Divergence(DivergenceKind.RANK, 1)
        assert 1 not in tree.divergences

    def test_shared_child_kept_once(self) -> None:
        root = make_node(2)
        left = make_node(1)
        right = make_node(3)
        shared = make_node(4, is_red=True)
        root.left, root.right = left, right
        left.parent = right.parent = root
        left.right = shared
        right.left = shared
        shared.parent = left
        tree = Sanitizer().sanitize(root)
        assert [n.raw for n in tree.nodes] == [left, shared, root, right]
        assert tree.divergences[3].left == Divergence(DivergenceKind.RANK, 1)
        assert tree.find(shared).parent.raw is left  # type: ignore[union-attr]

    def test_same_left_and_right_child(self) -> None:
        root = make_node(1)
        child = make_node(2)
        root.left = root.right = child
        child.parent = root
        tree = Sanitizer().sanitize(root)
        assert [n.raw for n in tree.nodes] == [child, root]
        assert tree.divergences[1].right == Divergence(DivergenceKind.RANK, 0)


class TestParentDivergence:
    def test_absent_parent_on_child(self) -> None:
        root = make_node(1)
        child = make_node(2)
        root.right = child
        tree = Sanitizer().sanitize(root)
        assert tree.divergences[1].parent == Divergence(DivergenceKind.ABSENT)

    def test_wrong_parent_in_tree(self, three_node_tree) -> None:  # type: ignore[no-untyped-def]
        left, root, right = three_node_tree
        right.parent = left
        tree = Sanitizer().sanitize(root)
        assert tree.divergences[2].parent == Divergence(DivergenceKind.RANK, 0)

    def test_self_parent_on_child(self, three_node_tree) -> None:  # type: ignore[no-untyped-def]
        left, root, _ = three_node_tree
        left.parent = left
        tree = Sanitizer().sanitize(root)
        assert tree.divergences[0].parent == Divergence(DivergenceKind.SELF)

    def test_self_parent_on_root(self) -> None:
        node = make_node(1)
        node.parent = node
        tree = Sanitizer().sanitize(node)
        assert tree.root_cycled
        assert tree.divergences[0].parent == Divergence(DivergenceKind.SELF)

    def test_parent_cycle_on_root(self) -> None:
        a = make_node(1)
        b = make_node(2)
        a.parent = b
        b.parent = a
        tree = Sanitizer().sanitize(a)
        assert [n.raw for n in tree.nodes] == [a]
        assert tree.divergences[0].parent == Divergence(DivergenceKind.CYCLIC)

    def test_parent_outside_tree(self, two_node_tree) -> None:  # type: ignore[no-untyped-def]
        root, child = two_node_tree
        stranger = make_node(99)
        child.parent = stranger
        tree = Sanitizer().sanitize(root)
        assert tree.divergences[0].parent == Divergence(DivergenceKind.OUTSIDE)

    def test_parent_outside_tree_with_cycle(self, two_node_tree) -> None:  # type: ignore[no-untyped-def]
        root, child = two_node_tree
        x = make_node(50)
        y = make_node(51)
        x.parent = y
        y.parent = x
        child.parent = x
        tree = Sanitizer().sanitize(root)
        assert tree.divergences[0].parent == Divergence(DivergenceKind.CYCLIC)

    def test_dummy_leaf_parent_on_root(self) -> None:
        node = make_node(1)
        node.parent = LEAF
        tree = Sanitizer().sanitize(node)
        assert tree.divergences[0].parent == Divergence(DivergenceKind.OUTSIDE)

    def test_selected_node_outside_canonical_tree(self) -> None:
        root = make_node(1)
        orphan = make_node(2)
        orphan.parent = root  # root does not point back
        tree = Sanitizer().sanitize(orphan)
        assert [n.raw for n in tree.nodes] == [root]
        assert tree.selected_rank is None
