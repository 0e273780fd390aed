"""
Projector tests: project(log, cursor) is a pure fold over log[0:cursor].
"""

import random

from algorithms import generate
from algorithms.step import VisualTag, StepKind
from engine.controller import PlaybackController
from engine.projector import project, replay_array


class TestFold:

    def test_cursor_zero_is_the_initial_structure(self, bubble_log):
        state = project(bubble_log, 0)
        assert state.tags == {}
        assert state.structure == (3, 1, 2)
        assert state.description == ""
        assert state.step is None
        assert not state.is_final

    def test_cursor_is_clamped(self, bubble_log):
        assert project(bubble_log, -3) == project(bubble_log, 0)
        end = project(bubble_log, 999)
        assert end.cursor == len(bubble_log)
        assert end.is_final

    def test_current_step_overlays_its_tag(self, bubble_log):
        state = project(bubble_log, 2)
        assert state.step.kind is StepKind.COMPARE
        assert state.tag_of(0) is VisualTag.COMPARING
        assert state.tag_of(1) is VisualTag.COMPARING
        assert state.tag_of(2) is VisualTag.DEFAULT

    def test_transient_tags_do_not_linger(self, bubble_log):
        # step 2 swaps 0 and 1, step 3 compares 1 and 2
        assert project(bubble_log, 3).tag_of(0) is VisualTag.SWAPPING
        assert project(bubble_log, 4).tag_of(0) is VisualTag.DEFAULT

    def test_sorted_persists(self, bubble_log):
        assert project(bubble_log, 5).tag_of(2) is not VisualTag.SORTED
        for cursor in range(6, len(bubble_log) + 1):
            assert project(bubble_log, cursor).tag_of(2) is VisualTag.SORTED

    def test_structure_follows_snapshots(self, bubble_log):
        assert project(bubble_log, 2).structure == (3, 1, 2)
        assert project(bubble_log, 3).structure == (1, 3, 2)
        assert project(bubble_log, len(bubble_log)).structure == (1, 2, 3)

    def test_description_is_the_current_step(self, bubble_log):
        for cursor in range(1, len(bubble_log) + 1):
            assert project(bubble_log, cursor).description == bubble_log[cursor - 1].description

    def test_graph_frontier_then_visited(self, sample_graph):
        log = generate("bfs", sample_graph, source="A")
        final = project(log, len(log))
        assert all(final.tag_of(n) is VisualTag.VISITED for n in sample_graph.node_ids())


class TestPurity:

    def test_same_inputs_same_output(self, bubble_log):
        for cursor in range(len(bubble_log) + 1):
            assert project(bubble_log, cursor) == project(bubble_log, cursor)

    def test_backward_then_forward_is_identical(self, sample_graph):
        log = generate("dijkstra", sample_graph, source="A", target="F")
        controller = PlaybackController(log)
        controller.seek(7)
        before = controller.visual_state()
        for _ in range(3):
            controller.step_backward()
        for _ in range(3):
            controller.step_forward()
        assert controller.visual_state() == before

    def test_random_walk_matches_direct_projection(self):
        log = generate("quick_sort", [9, 4, 7, 1, 8, 2, 6])
        controller = PlaybackController(log)
        rng = random.Random(3)
        for _ in range(300):
            rng.choice([controller.step_forward, controller.step_backward])()
            assert controller.visual_state() == project(log, controller.cursor)

    def test_serialises(self, bubble_log):
        d = project(bubble_log, 2).to_dict()
        assert d["tags"] == {"0": "comparing", "1": "comparing"}
        assert d["structure"] == [3, 1, 2]
        assert d["pseudocode_line"] == 4


class TestReplayArray:

    def test_replay_reaches_the_final_array(self):
        log = generate("insertion_sort", [5, 2, 4, 6, 1, 3])
        assert replay_array(log) == [1, 2, 3, 4, 5, 6]

    def test_partial_replay(self, bubble_log):
        assert replay_array(bubble_log, 0) == [3, 1, 2]
        assert replay_array(bubble_log, 3) == [1, 3, 2]

    def test_stack_push_and_pop(self):
        pushed = generate("stack_push", (1, 2), value=3)
        assert replay_array(pushed) == [1, 2, 3]
        popped = generate("stack_pop", pushed.final)
        assert replay_array(popped) == [1, 2]
