"""
Binary search tree generator tests.

INVARIANTS:
===========
- One compare per node visited on the way down
- Two-child delete locates the in-order successor before removing
- Invalid operations are failed logs that leave the tree untouched
- Node ids are never reused
"""

import pytest

from algorithms import generate
from algorithms.step import StepKind, VisualTag
from structures.tree import EMPTY_TREE


class TestSearch:

    def test_search_forty_after_five_inserts(self, bst_tree):
        log = generate("bst_search", bst_tree, value=40)
        target = bst_tree.find(40)
        assert log.last.visual_tag is VisualTag.FOUND
        assert log.last.targets == (target.id,)
        assert log.count(StepKind.COMPARE) == 3
        compared = [bst_tree.get(s.targets[0]).value for s in log if s.kind is StepKind.COMPARE]
        assert compared == [50, 30, 40]
        assert log.result == target.id

    def test_search_miss_is_not_a_failure(self, bst_tree):
        log = generate("bst_search", bst_tree, value=45)
        assert log.result is None
        assert not log.failed
        assert log.count(StepKind.COMPARE) == 3

    def test_search_on_empty_tree_fails(self):
        log = generate("bst_search", None, value=1)
        assert log.failed
        assert len(log) == 1


class TestInsert:

    def test_insert_descends_then_sets(self, bst_tree):
        log = generate("bst_insert", bst_tree, value=35)
        kinds = [s.kind for s in log]
        assert kinds == [StepKind.COMPARE] * 3 + [StepKind.SET]
        new = log.final.find(35)
        assert new.parent == bst_tree.find(40).id
        assert log.result == new.id

    def test_insert_into_empty_tree_makes_root(self):
        log = generate("bst_insert", EMPTY_TREE, value=8)
        assert log.final.get(log.final.root).value == 8
        assert log.count(StepKind.COMPARE) == 0

    def test_duplicate_insert_fails_and_keeps_tree(self, bst_tree):
        log = generate("bst_insert", bst_tree, value=30)
        assert log.failed
        assert log.final is bst_tree
        assert log.last.visual_tag is VisualTag.FAILED

    def test_build_skips_duplicates(self):
        log = generate("bst_build", None, values=[5, 3, 5, 8])
        assert log.final.values() == [3, 5, 8]
        assert len(log.result) == 3
        assert not log.failed

    def test_input_snapshot_is_untouched(self, bst_tree):
        before = bst_tree.values()
        generate("bst_insert", bst_tree, value=99)
        generate("bst_delete", bst_tree, value=50)
        assert bst_tree.values() == before


class TestDelete:

    def test_leaf_delete(self, bst_tree):
        log = generate("bst_delete", bst_tree, value=20)
        assert log.final.values() == [30, 40, 50, 70]
        assert log.last.kind is StepKind.SET
        assert log.last.visual_tag is VisualTag.DELETING

    def test_two_children_walks_to_successor_first(self, bst_tree):
        log = generate("bst_delete", bst_tree, value=30)
        successor_steps = [i for i, s in enumerate(log) if "successor" in s.meta]
        removal = len(log) - 1
        assert successor_steps and successor_steps[0] < removal
        assert log.final.values() == [20, 40, 50, 70]
        assert log.final.find(30) is None

    def test_two_children_keeps_node_identity(self, bst_tree):
        node30 = bst_tree.find(30).id
        node40 = bst_tree.find(40).id
        log = generate("bst_delete", bst_tree, value=30)
        assert log.final.get(node30).value == 40
        assert log.final.get(node40) is None

    def test_delete_root(self, bst_tree):
        log = generate("bst_delete", bst_tree, value=50)
        assert log.final.get(log.final.root).value == 70
        assert log.final.values() == [20, 30, 40, 70]

    def test_ids_are_not_reused(self, bst_tree):
        after_delete = generate("bst_delete", bst_tree, value=20).final
        after_insert = generate("bst_insert", after_delete, value=25).final
        assert after_insert.find(25).id == len(bst_tree.nodes)

    def test_missing_key_fails(self, bst_tree):
        log = generate("bst_delete", bst_tree, value=45)
        assert log.failed
        assert log.final is bst_tree
        assert log.count(StepKind.COMPARE) == 3

    def test_delete_from_empty_tree_fails(self):
        log = generate("bst_delete", None, value=1)
        assert log.failed
        assert len(log) == 1


class TestTraverse:

    @pytest.mark.parametrize("order, expected", [
        ("inorder",   [20, 30, 40, 50, 70]),
        ("preorder",  [50, 30, 20, 40, 70]),
        ("postorder", [20, 40, 30, 70, 50]),
    ])
    def test_orders(self, bst_tree, order, expected):
        log = generate("bst_traverse", bst_tree, order=order)
        assert log.result == expected
        assert all(s.visual_tag is VisualTag.VISITED for s in log)

    def test_unknown_order_is_a_programmer_error(self, bst_tree):
        with pytest.raises(ValueError):
            generate("bst_traverse", bst_tree, order="levelorder")

    def test_empty_tree_fails(self):
        assert generate("bst_traverse", None).failed
