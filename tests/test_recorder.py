"""
Recorder tests: per-family current structures, metrics and comparison.
"""

import pytest

from algorithms import ARRAY, BST, HEAP, STACK, GRAPH
from algorithms.step import StepKind
from engine.controller import PlaybackController
from engine.recorder import (
    Recorder, RunMetrics, compare, default_structures, DEFAULT_ARRAY,
)
from structures.tree import EMPTY_TREE


@pytest.fixture
def rec():
    return Recorder()


class TestStructures:

    def test_defaults(self, rec):
        assert rec.structure(ARRAY) == DEFAULT_ARRAY
        assert rec.structure(BST) is EMPTY_TREE
        assert rec.structure(STACK) == ()
        assert set(rec.structure(GRAPH).node_ids()) == set("ABCDEF")

    def test_unknown_family(self, rec):
        with pytest.raises(ValueError):
            rec.structure("trie")
        with pytest.raises(ValueError):
            rec.set_structure("trie", [1])

    def test_set_structure_normalises(self, rec):
        assert rec.set_structure(ARRAY, [4, 2]) == (4, 2)

    def test_reset_one_family(self, rec):
        rec.run_operation("heap_insert", value=5)
        rec.run_operation("stack_push", value=1)
        rec.reset_structures(HEAP)
        assert rec.structure(HEAP) == ()
        assert rec.structure(STACK) == (1,)

    def test_default_structures_are_fresh(self):
        assert default_structures()[GRAPH] is not default_structures()[GRAPH]


class TestRunOperation:

    def test_build_then_search_uses_the_built_tree(self, rec):
        rec.run_operation("bst_build", values=[50, 30, 70, 20, 40])
        assert len(rec.structure(BST)) == 5
        log = rec.run_operation("bst_search", value=40)
        assert not log.failed
        assert [s.targets for s in log if s.kind is StepKind.COMPARE] == [(0,), (1,), (4,)]

    def test_heap_operations_accumulate(self, rec):
        for v in (5, 9, 2):
            rec.run_operation("heap_insert", value=v)
        assert sorted(rec.structure(HEAP)) == [2, 5, 9]
        assert rec.structure(HEAP)[0] == 9
        log = rec.run_operation("heap_extract")
        assert log.result == 9
        assert sorted(rec.structure(HEAP)) == [2, 5]

    def test_failed_operation_keeps_the_structure(self, rec):
        log = rec.run_operation("stack_pop")
        assert log.failed
        assert rec.structure(STACK) == ()
        assert rec.metrics.failed

    def test_sorting_does_not_replace_the_array(self, rec):
        log = rec.run_operation("bubble_sort")
        assert log.final == tuple(sorted(DEFAULT_ARRAY))
        assert rec.structure(ARRAY) == DEFAULT_ARRAY

    def test_passed_data_becomes_the_structure(self, rec):
        rec.run_operation("bubble_sort", [3, 1, 2])
        assert rec.structure(ARRAY) == (3, 1, 2)

    def test_unknown_algorithm(self, rec):
        with pytest.raises(ValueError):
            rec.run_operation("bogo_sort")

    def test_unknown_parameter(self, rec):
        with pytest.raises(TypeError):
            rec.run_operation("bubble_sort", speed=2)

    def test_rejected_run_keeps_the_structure(self, rec):
        with pytest.raises(TypeError):
            rec.run_operation("bubble_sort", [5, 4], speed=2)
        assert rec.structure(ARRAY) == DEFAULT_ARRAY
        assert rec.log is None

    def test_incomparable_data_keeps_the_structure(self, rec):
        rec.run_operation("heap_build", [3, 9, 4])
        with pytest.raises(TypeError):
            rec.run_operation("heap_build", [1, "a", 2])
        assert rec.structure(HEAP) == (9, 3, 4)
        assert rec.log.algorithm == "heap_build"

    def test_loads_the_controller(self):
        controller = PlaybackController()
        rec = Recorder(controller=controller)
        log = rec.run_operation("bubble_sort", [3, 1, 2])
        assert controller.log is log
        assert controller.total_steps == 10
        assert controller.cursor == 0

    def test_capacity_default_is_injected(self):
        rec = Recorder(defaults={"capacity": 2})
        rec.run_operation("queue_enqueue", value=1)
        rec.run_operation("queue_enqueue", value=2)
        log = rec.run_operation("queue_enqueue", value=3)
        assert log.failed
        assert rec.structure("queue") == (1, 2)

    def test_explicit_capacity_wins(self):
        rec = Recorder(defaults={"capacity": 1})
        rec.run_operation("stack_push", value=1)
        log = rec.run_operation("stack_push", value=2, capacity=5)
        assert not log.failed


class TestMetrics:

    def test_counts(self, rec):
        rec.run_operation("bubble_sort", [3, 1, 2])
        m = rec.get_metrics()
        assert m.algo_label == "Bubble Sort"
        assert m.family == ARRAY
        assert (m.compares, m.swaps, m.sets) == (3, 2, 0)
        assert m.data_moves == 2
        assert m.total_steps == 10
        assert m.wall_time_ms >= 0

    def test_graph_metrics(self, rec):
        rec.run_operation("dijkstra", source="A", target="F")
        m = rec.metrics
        assert m.path_found
        assert m.path_length == 3
        assert m.path_cost == pytest.approx(6.0)
        assert m.nodes_visited == 6

    def test_export(self, rec):
        rec.run_operation("linear_search", [4, 8, 15], target=8)
        out = rec.export()
        assert out["algo_key"] == "linear_search"
        assert out["label"] == "Linear Search"
        assert out["metrics"]["compares"] == 2
        assert len(out["log"]["steps"]) == out["metrics"]["total_steps"]

    def test_export_before_any_run(self, rec):
        assert rec.export() == {"algo_key": "", "label": "", "metrics": {}, "log": {}}


class TestCompare:

    def test_merge_sort_compares_less_on_reversed_input(self):
        data = list(range(10, 0, -1))
        left, right = Recorder(), Recorder()
        left.run_operation("bubble_sort", data)
        right.run_operation("merge_sort", data)
        result = compare(left, right)
        assert result.winner_compares == "Merge Sort"
        assert result.left.compares == 45

    def test_identical_runs_tie(self):
        left, right = Recorder(), Recorder()
        left.run_operation("insertion_sort", [2, 3, 1])
        right.run_operation("insertion_sort", [2, 3, 1])
        result = compare(left, right)
        assert result.winner_compares == result.winner_moves == result.winner_steps == "tie"

    def test_accepts_metrics(self):
        a = RunMetrics(algo_label="A", compares=1, swaps=5, total_steps=3)
        b = RunMetrics(algo_label="B", compares=2, sets=1, total_steps=3)
        result = compare(a, b)
        assert result.winner_compares == "A"
        assert result.winner_moves == "B"
        assert result.winner_steps == "tie"
        assert result.to_dict()["left"]["data_moves"] == 5
