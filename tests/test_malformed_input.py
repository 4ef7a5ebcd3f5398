"""Unit tests for malformed collections and the opt-in guards.

Nothing is validated at construction; these tests pin down what happens
with orphans, duplicates and cyclic parent chains under the default and
the hardened configuration.
"""

import unittest

import pytest

from treestore import (
    CycleDetectedError,
    StoreConfig,
    TraversalDepthError,
    TreeItem,
    TreeStore,
    TreeStoreError,
)


def cyclic_items():
    """Two nodes pointing at each other, reachable from a real root."""
    return [
        TreeItem(id=1, parent="root"),
        TreeItem(id="a", parent="b"),
        TreeItem(id="b", parent="a"),
    ]


def chain_items(length):
    """A single path 0 -> 1 -> ... -> length-1."""
    items = [TreeItem(id=0, parent="root")]
    items.extend(TreeItem(id=i, parent=i - 1) for i in range(1, length))
    return items


class TestOrphans(unittest.TestCase):
    """Nodes whose parent is not in the collection."""

    def setUp(self):
        self.store = TreeStore([
            TreeItem(id=1, parent="root"),
            TreeItem(id=2, parent=99),
            TreeItem(id=3, parent=2),
        ])

    def test_orphan_is_found(self):
        self.assertEqual(self.store.get_item(2).parent, 99)

    def test_orphan_has_no_resolvable_ancestors(self):
        self.assertEqual(self.store.get_all_parents(2), [])

    def test_orphan_subtree_reachable_through_missing_parent(self):
        self.assertEqual([i.id for i in self.store.get_children(99)], [2])
        self.assertEqual([i.id for i in self.store.get_all_children(99)], [2, 3])

    def test_orphan_not_a_root(self):
        self.assertEqual([i.id for i in self.store.get_children("root")], [1])


class TestEmptyCollection(unittest.TestCase):

    def test_all_queries_are_empty(self):
        store = TreeStore([])
        self.assertEqual(store.get_all(), [])
        self.assertIsNone(store.get_item(1))
        self.assertEqual(store.get_children(1), [])
        self.assertEqual(store.get_all_children(1), [])
        self.assertEqual(store.get_all_parents(1), [])


class TestDefaultCycleBehaviour:
    """Without guards a cycle recurses until Python gives up."""

    def test_all_parents_recursion_error(self):
        store = TreeStore(cyclic_items())
        with pytest.raises(RecursionError):
            store.get_all_parents("a")

    def test_all_children_recursion_error(self):
        store = TreeStore(cyclic_items())
        with pytest.raises(RecursionError):
            store.get_all_children("a")

    def test_non_recursive_queries_unaffected(self):
        store = TreeStore(cyclic_items())
        assert store.get_item("a").parent == "b"
        assert [i.id for i in store.get_children("a")] == ["b"]


class TestCycleDetection:

    @pytest.fixture
    def store(self):
        return TreeStore(cyclic_items(), config=StoreConfig(detect_cycles=True))

    def test_all_parents_raises(self, store):
        with pytest.raises(CycleDetectedError) as exc_info:
            store.get_all_parents("a")
        assert exc_info.value.node_id == "a"
        assert exc_info.value.path == ["a", "b"]

    def test_all_children_raises(self, store):
        with pytest.raises(CycleDetectedError):
            store.get_all_children("a")

    def test_self_loop(self):
        store = TreeStore([TreeItem(id=1, parent=1)], config=StoreConfig(detect_cycles=True))
        with pytest.raises(CycleDetectedError):
            store.get_all_parents(1)

    def test_is_a_tree_store_error(self, store):
        with pytest.raises(TreeStoreError):
            store.get_all_parents("b")

    def test_acyclic_part_still_works(self, store):
        assert store.get_all_parents(1) == []
        assert store.get_all_children(1) == []


class TestDepthLimit:

    def test_within_limit(self):
        store = TreeStore(chain_items(5), config=StoreConfig(max_depth=10))
        assert [i.id for i in store.get_all_parents(4)] == [3, 2, 1, 0]
        assert [i.id for i in store.get_all_children(0)] == [1, 2, 3, 4]

    def test_parents_beyond_limit(self):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=3))
        with pytest.raises(TraversalDepthError) as exc_info:
            store.get_all_parents(9)
        assert exc_info.value.node_id == "9"
        assert exc_info.value.max_depth == 3

    def test_children_beyond_limit(self):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=3))
        with pytest.raises(TraversalDepthError):
            store.get_all_children(0)

    def test_parents_limit_applies_to_cached_chain(self):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=3))
        assert [i.id for i in store.get_all_parents(3)] == [2, 1, 0]

        with pytest.raises(TraversalDepthError) as exc_info:
            store.get_all_parents(6)
        assert exc_info.value.node_id == "6"

    def test_children_limit_applies_to_cached_subtree(self):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=3))
        assert [i.id for i in store.get_all_children(6)] == [7, 8, 9]

        with pytest.raises(TraversalDepthError) as exc_info:
            store.get_all_children(2)
        assert exc_info.value.node_id == "2"

    @pytest.mark.parametrize("warm_up", [None, 2, 3, 4])
    def test_same_answer_fresh_or_warm(self, warm_up):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=4))
        if warm_up is not None:
            store.get_all_parents(warm_up)

        assert len(store.get_all_parents(4)) == 4
        with pytest.raises(TraversalDepthError):
            store.get_all_parents(5)

    def test_cached_hit_at_top_level_within_limit(self):
        store = TreeStore(chain_items(10), config=StoreConfig(max_depth=3))
        store.get_all_children(7)
        assert [i.id for i in store.get_all_children(7)] == [8, 9]

    def test_hardened_handles_cycles(self):
        store = TreeStore(cyclic_items(), config=StoreConfig.hardened())
        with pytest.raises(CycleDetectedError):
            store.get_all_children("b")
