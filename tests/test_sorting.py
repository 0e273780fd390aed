"""
Comparison-sort generator tests.

Every sort must trace the real algorithm: its data-moving steps, replayed
against the input, rebuild exactly the sorted output it reports.
"""

from functools import total_ordering

import pytest

from algorithms import generate, get_algorithm
from algorithms.step import StepKind, VisualTag
from engine.projector import project, replay_array

SORTS = ["bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort", "heap_sort"]
STABLE_SORTS = [k for k in SORTS if get_algorithm(k).stable]

INPUTS = [
    [],
    [7],
    [2, 1],
    [5, 1, 4, 2, 8, 0, 2],
    [9, 8, 7, 6, 5, 4, 3, 2, 1],
    [1, 2, 3, 4, 5],
    [3, 3, 3, 1, 1],
]


@total_ordering
class Card:
    """Compares on `key` only, so equal keys can still be told apart."""

    def __init__(self, key, label):
        self.key   = key
        self.label = label

    def __eq__(self, other):
        return self.key == other.key

    def __lt__(self, other):
        return self.key < other.key

    def __repr__(self):
        return f"{self.key}{self.label}"


class TestSortsProduceSortedOutput:

    @pytest.mark.parametrize("key", SORTS)
    @pytest.mark.parametrize("data", INPUTS)
    def test_final_is_sorted_and_replayable(self, key, data):
        log = generate(key, data)
        assert list(log.final) == sorted(data)
        assert replay_array(log) == list(log.final), f"{key}: replay diverges from final"
        assert not log.failed

    @pytest.mark.parametrize("key", SORTS)
    def test_generation_is_deterministic(self, key):
        data = [5, 1, 4, 2, 8, 0, 2]
        assert generate(key, data) == generate(key, data)

    @pytest.mark.parametrize("key", SORTS)
    def test_input_is_not_mutated(self, key):
        data = [4, 3, 2, 1]
        generate(key, data)
        assert data == [4, 3, 2, 1]

    @pytest.mark.parametrize("key", SORTS)
    def test_everything_ends_sorted(self, key):
        data = [5, 1, 4, 2]
        log = generate(key, data)
        state = project(log, len(log))
        assert all(state.tag_of(i) is VisualTag.SORTED for i in range(len(data)))


class TestBubbleSortScenario:

    def test_three_compares_for_three_one_two(self, bubble_log):
        assert bubble_log.count(StepKind.COMPARE) == 3
        assert bubble_log.count(StepKind.SWAP) >= 1

    def test_final_projection_marks_all_sorted(self, bubble_log):
        state = project(bubble_log, len(bubble_log))
        assert [state.tag_of(i) for i in range(3)] == [VisualTag.SORTED] * 3
        assert state.structure == (1, 2, 3)

    def test_early_exit_on_sorted_input(self):
        log = generate("bubble_sort", [1, 2, 3, 4])
        assert log.count(StepKind.COMPARE) == 3
        assert log.count(StepKind.SWAP) == 0


class TestStability:

    @pytest.mark.parametrize("key", STABLE_SORTS)
    def test_equal_keys_keep_their_order(self, key):
        data = [Card(2, "a"), Card(1, "a"), Card(2, "b"), Card(1, "b"), Card(2, "c")]
        log = generate(key, data)
        labels = [(c.key, c.label) for c in log.final]
        assert labels == [(1, "a"), (1, "b"), (2, "a"), (2, "b"), (2, "c")]


class TestSortStepShape:

    def test_insertion_sort_moves_with_set_steps(self):
        log = generate("insertion_sort", [3, 2, 1])
        assert log.count(StepKind.SWAP) == 0
        assert log.count(StepKind.SET) > 0

    def test_merge_sort_writes_with_set_steps(self):
        log = generate("merge_sort", [4, 3, 2, 1])
        assert log.count(StepKind.SWAP) == 0
        assert all(s.value is not None for s in log if s.kind is StepKind.SET)

    def test_quick_sort_never_swaps_a_slot_with_itself(self):
        log = generate("quick_sort", [1, 2, 3, 4, 5])
        assert all(s.targets[0] != s.targets[1] for s in log if s.kind is StepKind.SWAP)

    def test_quick_sort_marks_pivots(self):
        log = generate("quick_sort", [3, 1, 2])
        assert any(s.visual_tag is VisualTag.PIVOT for s in log)

    def test_selection_sort_swaps_at_most_n_minus_one_times(self):
        data = [5, 4, 3, 2, 1, 0]
        log = generate("selection_sort", data)
        assert log.count(StepKind.SWAP) <= len(data) - 1

    def test_compare_steps_reference_valid_indices(self):
        data = [9, 4, 7, 1, 3]
        for key in SORTS:
            for s in generate(key, data):
                if s.kind in (StepKind.COMPARE, StepKind.SWAP):
                    assert all(0 <= t < len(data) for t in s.targets), key
