"""
Step / OperationLog construction tests.

Steps and logs are frozen values: malformed ones must fail at
construction, and failure of an operation is a log, not an exception.
"""

import dataclasses

import pytest

from algorithms import generate
from algorithms.step import (
    Step, StepKind, VisualTag, OperationLog, Outcome,
    compare, set_value, swap, highlight, fail, record,
)
from structures.graph import Graph


class TestStep:

    def test_targets_are_normalised_to_a_tuple(self):
        s = compare([1, 2], "Compare")
        assert s.targets == (1, 2)

    def test_kind_must_be_a_step_kind(self):
        with pytest.raises(TypeError):
            Step("compare", "not an enum")

    def test_tag_must_be_a_visual_tag(self):
        with pytest.raises(TypeError):
            Step(StepKind.SET, "bad tag", (0,), tag="found")

    def test_steps_are_frozen(self):
        s = highlight((0,), "Look")
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.description = "changed"

    def test_meta_is_read_only(self):
        s = set_value((0,), "Write", meta={"parent": 0, "path": ["A", "B"]})
        with pytest.raises(TypeError):
            s.meta["parent"] = 999
        assert s.meta["parent"] == 0
        assert s.meta["path"] == ("A", "B")

    def test_meta_is_copied_in(self):
        extras = {"removed": 4}
        s = set_value((0,), "Remove", meta=extras)
        extras["removed"] = 5
        assert s.meta["removed"] == 4

    def test_steps_are_hashable(self):
        a = compare((0, 1), "Compare", meta={"lo": 0})
        b = compare((0, 1), "Compare", meta={"lo": 0})
        assert a == b
        assert len({a, b}) == 1

    def test_visual_tag_defaults_from_kind(self):
        assert compare((0, 1), "").visual_tag is VisualTag.COMPARING
        assert swap(0, 1, "").visual_tag is VisualTag.SWAPPING
        assert set_value((0,), "").visual_tag is VisualTag.INSERTING
        assert highlight((0,), "").visual_tag is VisualTag.CURRENT
        assert highlight((0,), "", tag=VisualTag.FOUND).visual_tag is VisualTag.FOUND

    def test_to_dict_is_json_friendly(self):
        d = set_value((3,), "Write", line=7, value=9, meta={"remove": True}).to_dict()
        assert d == {
            "kind": "set", "description": "Write", "targets": [3], "tag": "inserting",
            "value": 9, "pseudocode_line": 7, "meta": {"remove": True},
        }


class TestOperationLog:

    def test_rejects_non_step_entries(self):
        with pytest.raises(TypeError):
            OperationLog(steps=(compare((0,), ""), "oops"))

    def test_count_and_last(self):
        log = OperationLog(steps=[compare((0, 1), ""), swap(0, 1, ""), compare((1, 2), "")])
        assert len(log) == 3
        assert log.count(StepKind.COMPARE) == 2
        assert log.count(StepKind.SWAP) == 1
        assert log.last.targets == (1, 2)
        assert isinstance(log.steps, tuple)

    def test_empty_log_has_no_last(self):
        assert OperationLog().last is None


class TestRecord:

    def test_record_keeps_outcome(self):
        def gen():
            yield highlight((0,), "one")
            yield highlight((1,), "two")
            return Outcome(final=(2, 1), result="done")

        log = record(gen(), algorithm="demo", initial=(1, 2), params={"x": 1})
        assert len(log) == 2
        assert log.final == (2, 1)
        assert log.result == "done"
        assert log.params == {"x": 1}
        assert not log.failed
        with pytest.raises(TypeError):
            log.params["x"] = 2

    def test_failure_is_a_single_step_value(self):
        log = record(fail("Nothing to do."), initial=(1, 2, 3))
        assert log.failed
        assert len(log) == 1
        assert log.last.visual_tag is VisualTag.FAILED
        assert log.final == log.initial == (1, 2, 3)

    def test_missing_final_means_unchanged(self):
        def gen():
            yield highlight((), "noop")
            return Outcome(result=5)

        log = record(gen(), initial=(4,))
        assert log.final == (4,)


class TestRecordedLogsStayPut:

    def test_generated_log_cannot_be_edited(self):
        log = generate("bst_build", None, values=[50, 30])
        inserted = [s for s in log if "parent" in s.meta]
        with pytest.raises(TypeError):
            inserted[-1].meta["parent"] = 999
        assert inserted[-1].meta["parent"] == 0
        assert log.params["values"] == (50, 30)

    def test_found_path_is_a_tuple_everywhere(self):
        log = generate("bfs", Graph.sample(), source="A", target="F")
        assert log.result["path"] == ("A", "C", "E", "F")
        assert log[-1].meta["path"] == log[-2].meta["path"] == log.result["path"]
        assert log[-1].to_dict()["meta"] == {"path": ("A", "C", "E", "F")}
