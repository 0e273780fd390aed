"""
recorder.py — Run Recorder & Analytics
========================================
Runs one operation at a time against the current structure of its
family, hands the resulting log to the PlaybackController, and computes
the metrics the Analytics panel and Comparison Mode need.

Usage:
    rec = Recorder()
    rec.run_operation("bst_build", values=[50, 30, 70])
    rec.run_operation("bst_search", value=30)     # searches the tree built above
    rec.controller.play()
    metrics = rec.metrics                         # the analytics card

Every family (array, bst, avl, heap, stack, queue, graph) keeps its own
current structure.  An operation whose registry entry `mutates` replaces
that structure with the log's final snapshot; a failed log never does.

Comparison Mode:
    Run two operations, keep their RunMetrics, then call
    compare(left, right) → ComparisonResult.
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Union

from algorithms import (
    get_algorithm, generate, normalise_snapshot, AlgoInfo,
    FAMILIES, ARRAY, BST, AVL, HEAP, STACK, QUEUE, GRAPH,
)
from algorithms.step import OperationLog, StepKind
from algorithms.stack_queue import DEFAULT_CAPACITY
from structures.graph import Graph
from structures.tree import EMPTY_TREE
from engine.controller import PlaybackController

logger = logging.getLogger(__name__)

DEFAULT_ARRAY = (64, 34, 25, 12, 22, 11, 90)


def default_structures() -> Dict[str, Any]:
    """The structures a fresh session opens with."""
    return {
        ARRAY: DEFAULT_ARRAY,
        BST:   EMPTY_TREE,
        AVL:   EMPTY_TREE,
        HEAP:  (),
        STACK: (),
        QUEUE: (),
        GRAPH: Graph.sample(),
    }


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    family:        str   = ""
    compares:      int   = 0
    swaps:         int   = 0
    sets:          int   = 0
    highlights:    int   = 0
    total_steps:   int   = 0          # number of Steps in the log
    wall_time_ms:  float = 0.0        # wall-clock time to generate the log
    failed:        bool  = False
    # graph runs only
    nodes_visited: int   = 0
    path_length:   int   = 0          # number of edges on the final path
    path_cost:     float = 0.0        # total weight of the final path
    path_found:    bool  = False

    @property
    def data_moves(self) -> int:
        return self.swaps + self.sets

    @classmethod
    def from_log(
        cls,
        log: OperationLog,
        info: Optional[AlgoInfo] = None,
        wall_ms: float = 0.0,
        graph: Optional[Graph] = None,
    ) -> "RunMetrics":
        m = cls(
            algo_key=log.algorithm,
            algo_label=info.label if info else log.algorithm,
            family=info.family if info else "",
            compares=log.count(StepKind.COMPARE),
            swaps=log.count(StepKind.SWAP),
            sets=log.count(StepKind.SET),
            highlights=log.count(StepKind.HIGHLIGHT),
            total_steps=len(log),
            wall_time_ms=round(wall_ms, 2),
            failed=log.failed,
        )
        result = log.result if isinstance(log.result, dict) else {}
        path = result.get("path") or []
        m.nodes_visited = len(result.get("order") or [])
        m.path_found    = bool(path)
        m.path_length   = len(path) - 1 if len(path) > 1 else 0

        # path cost: sum edge weights along the path
        if graph is not None and len(path) > 1:
            for a, b in zip(path, path[1:]):
                e = graph.get_edge_between(a, b)
                if e:
                    m.path_cost += e.weight
        return m

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["data_moves"] = self.data_moves
        return d


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_compares: str = ""   # which run compared less
    winner_moves:    str = ""   # which run moved less data
    winner_steps:    str = ""   # which run has the shorter log

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":            self.left.to_dict(),
            "right":           self.right.to_dict(),
            "winner_compares": self.winner_compares,
            "winner_moves":    self.winner_moves,
            "winner_steps":    self.winner_steps,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        controller : The PlaybackController every new log is loaded into.
        structures : {family: current Domain Snapshot}.
        defaults   : Parameter defaults injected when an algorithm takes
                     them and the caller did not pass them (e.g. capacity).
        log        : The most recent OperationLog, or None.
        metrics    : RunMetrics of the most recent run, or None.
    """

    def __init__(
        self,
        controller: Optional[PlaybackController] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self.controller: PlaybackController   = controller or PlaybackController()
        self.structures: Dict[str, Any]       = default_structures()
        self.defaults:   Dict[str, Any]       = {"capacity": DEFAULT_CAPACITY}
        self.defaults.update(defaults or {})
        self.log:        Optional[OperationLog] = None
        self.metrics:    Optional[RunMetrics]   = None
        self._info:      Optional[AlgoInfo]     = None

    # ------------------------------------------------------------------
    # Structures
    # ------------------------------------------------------------------
    def structure(self, family: str) -> Any:
        if family not in FAMILIES:
            raise ValueError(f"Unknown family: {family}")
        return self.structures[family]

    def set_structure(self, family: str, data: Any) -> Any:
        """Replace a family's current structure with caller-supplied data."""
        if family not in FAMILIES:
            raise ValueError(f"Unknown family: {family}")
        self.structures[family] = normalise_snapshot(family, data)
        return self.structures[family]

    def reset_structures(self, family: Optional[str] = None) -> None:
        fresh = default_structures()
        if family is None:
            self.structures = fresh
        else:
            self.structures[family] = fresh[family]

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run_operation(self, key: str, data: Any = None, **params) -> OperationLog:
        """
        Generate the log for `key`, retire the controller's old log and
        load the new one.  `data`, when given, becomes the family's
        current structure, but only once generation has succeeded: a run
        that raises leaves every structure as it was.
        """
        info = get_algorithm(key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {key}")
        for name, value in self.defaults.items():
            if name in info.params and name not in params:
                params[name] = value

        if data is None:
            snapshot = self.structures[info.family]
        else:
            snapshot = normalise_snapshot(info.family, data)
        start = time.monotonic()
        log = generate(key, snapshot, **params)
        wall_ms = (time.monotonic() - start) * 1000

        if data is not None:
            self.structures[info.family] = snapshot
        if log.failed:
            logger.warning("%s failed: %s", key, log.last.description if log.last else "")
        elif info.mutates:
            self.structures[info.family] = log.final

        self.log     = log
        self._info   = info
        graph        = snapshot if info.family == GRAPH else None
        self.metrics = RunMetrics.from_log(log, info, wall_ms, graph=graph)
        self.controller.load(log)
        logger.info("ran %s: %d steps in %.2f ms", key, len(log), wall_ms)
        return log

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        log = self.log
        return {
            "algo_key": log.algorithm if log else "",
            "label":    self._info.label if self._info else "",
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "log":      log.to_dict() if log else {},
        }


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def _metrics_of(run: Union[Recorder, RunMetrics, None]) -> RunMetrics:
    if isinstance(run, Recorder):
        return run.metrics or RunMetrics()
    return run or RunMetrics()


def compare(left: Union[Recorder, RunMetrics], right: Union[Recorder, RunMetrics]) -> ComparisonResult:
    """Given two completed runs, produce a ComparisonResult."""
    l = _metrics_of(left)
    r = _metrics_of(right)

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_compares=winner(l.compares, r.compares, l.algo_label, r.algo_label),
        winner_moves   =winner(l.data_moves, r.data_moves, l.algo_label, r.algo_label),
        winner_steps   =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
