"""
AVL tree generator tests.

INVARIANTS:
===========
- Every rotation is announced by a highlight on the unbalanced node
- After any sequence of inserts/deletes every balance factor is in {-1, 0, 1}
- Stored heights match the real subtree heights
"""

import pytest

from algorithms import generate
from algorithms.step import StepKind
from structures.tree import NIL


def rotation_steps(log):
    return [s for s in log if s.kind is StepKind.SET and "rotation" in s.meta]


def real_height(tree, nid):
    node = tree.get(nid)
    if node is None:
        return 0
    return 1 + max(real_height(tree, node.left), real_height(tree, node.right))


def assert_avl(tree):
    for node in tree.live_nodes():
        bf = tree.balance_of(node.id)
        assert bf in (-1, 0, 1), f"node {node.value} has balance factor {bf}"
        assert node.height == real_height(tree, node.id), f"stale height at {node.value}"
        for child in (node.left, node.right):
            if child != NIL:
                assert tree.get(child).parent == node.id
    values = tree.values()
    assert values == sorted(values)


class TestRotationCases:

    def test_ascending_three_is_one_rr_rotation(self):
        log = generate("avl_build", None, values=[10, 20, 30])
        rotations = rotation_steps(log)
        assert len(rotations) == 1
        assert rotations[0].meta["rotation"] == "RR"
        tree = log.final
        assert tree.get(tree.root).value == 20

    def test_descending_three_is_one_ll_rotation(self):
        log = generate("avl_build", None, values=[30, 20, 10])
        rotations = rotation_steps(log)
        assert [r.meta["rotation"] for r in rotations] == ["LL"]
        assert log.final.get(log.final.root).value == 20

    def test_left_right_case_rotates_twice(self):
        log = generate("avl_build", None, values=[30, 10, 20])
        rotations = rotation_steps(log)
        assert [(r.meta["rotation"], r.meta["direction"]) for r in rotations] == [("LR", "left"), ("LR", "right")]
        assert log.final.get(log.final.root).value == 20

    def test_right_left_case_rotates_twice(self):
        log = generate("avl_build", None, values=[10, 30, 20])
        rotations = rotation_steps(log)
        assert [(r.meta["rotation"], r.meta["direction"]) for r in rotations] == [("RL", "right"), ("RL", "left")]
        assert log.final.get(log.final.root).value == 20

    def test_imbalance_is_highlighted_before_rotating(self):
        log = generate("avl_build", None, values=[10, 20, 30])
        steps = list(log)
        first_rotation = steps.index(rotation_steps(log)[0])
        announce = steps[first_rotation - 1]
        assert announce.kind is StepKind.HIGHLIGHT
        assert abs(announce.meta["balance"]) > 1
        assert announce.meta["case"] == "RR"

    def test_single_insert_rotates_at_most_once_per_case(self):
        tree = generate("avl_build", None, values=[20, 10, 30, 5, 15]).final
        log = generate("avl_insert", tree, value=2)
        assert len(rotation_steps(log)) == 1
        assert_avl(log.final)


class TestDelete:

    def test_delete_triggers_rebalance(self):
        tree = generate("avl_build", None, values=[20, 10, 30, 40]).final
        log = generate("avl_delete", tree, value=10)
        assert [r.meta["rotation"] for r in rotation_steps(log)] == ["RR"]
        assert log.final.get(log.final.root).value == 30
        assert_avl(log.final)

    def test_delete_missing_fails(self):
        tree = generate("avl_build", None, values=[1, 2, 3]).final
        log = generate("avl_delete", tree, value=9)
        assert log.failed
        assert log.final is tree

    def test_duplicate_insert_fails(self):
        tree = generate("avl_build", None, values=[1, 2, 3]).final
        log = generate("avl_insert", tree, value=2)
        assert log.failed
        assert log.final is tree


class TestBalanceInvariant:

    @pytest.mark.parametrize("values", [
        list(range(1, 32)),
        list(range(31, 0, -1)),
        [50, 25, 75, 10, 30, 60, 90, 5, 15, 27, 35, 55, 65, 85, 95, 1, 2, 3, 4],
        [8, 3, 10, 1, 6, 14, 4, 7, 13, 12, 11, 2, 9, 5],
    ])
    def test_inserts_then_deletes_stay_balanced(self, values):
        tree = None
        for v in values:
            tree = generate("avl_insert", tree, value=v).final
            assert_avl(tree)
        for v in values[::2]:
            log = generate("avl_delete", tree, value=v)
            assert not log.failed
            tree = log.final
            assert_avl(tree)
        assert tree.values() == sorted(values[1::2])

    def test_ascending_build_is_logarithmic(self):
        tree = generate("avl_build", None, values=list(range(1, 64))).final
        assert tree.height_of(tree.root) == 6

    def test_search_uses_bst_descent(self):
        tree = generate("avl_build", None, values=[10, 20, 30, 40, 50, 60, 70]).final
        log = generate("avl_search", tree, value=70)
        assert log.result == tree.find(70).id
        assert log.count(StepKind.COMPARE) == 3
