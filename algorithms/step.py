"""
step.py — Steps & Operation Logs
=================================
Every algorithm is a generator that yields Step objects and *returns*
an Outcome.  `record()` drains the generator eagerly into an
OperationLog, the immutable tape that playback and projection read.

A Step is one atomic action, expressed in a deliberately small
vocabulary:

    • compare    – two or more elements / nodes are being compared
    • set        – a value is written (insert, overwrite, remove, enqueue…)
    • swap       – two array slots exchange values
    • highlight  – something is pointed at (visit, pivot, found, failed…)

Algorithms map their domain actions ("rotate left", "sift down",
"enqueue neighbour") onto these kinds plus a free-text description and
an ordered tuple of target identifiers.

Design decisions:
  - Step and OperationLog are frozen dataclasses.  The generator is the
    only writer; controller and projector are pure readers.
  - `snapshot` holds the immutable domain structure AFTER a structural
    step (tuple for arrays, TreeSnapshot, TraversalSnapshot).  Steps
    that change nothing leave it None.
  - Failure is a value, not an exception: `fail()` yields a single
    "failed" highlight and the log is flagged `failed=True`.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Generator, Iterator, Mapping, Optional, Tuple, Union

Identifier = Union[int, str]


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of `mapping`; list values become tuples."""
    return MappingProxyType({k: tuple(v) if isinstance(v, list) else v for k, v in mapping.items()})


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------
class StepKind(Enum):
    COMPARE   = "compare"
    SET       = "set"
    SWAP      = "swap"
    HIGHLIGHT = "highlight"


class VisualTag(Enum):
    DEFAULT   = "default"
    CURRENT   = "current"      # the element being worked on right now
    COMPARING = "comparing"
    SWAPPING  = "swapping"
    SORTED    = "sorted"       # in its final position
    FOUND     = "found"
    INSERTING = "inserting"
    DELETING  = "deleting"
    VISITED   = "visited"      # graph node fully processed
    FRONTIER  = "frontier"     # discovered but not yet processed
    PIVOT     = "pivot"
    MINIMUM   = "minimum"
    PATH      = "path"         # on the reconstructed path
    FAILED    = "failed"


# Tags a step gets when the generator does not choose one explicitly.
DEFAULT_TAGS: Dict[StepKind, VisualTag] = {
    StepKind.COMPARE:   VisualTag.COMPARING,
    StepKind.SET:       VisualTag.INSERTING,
    StepKind.SWAP:      VisualTag.SWAPPING,
    StepKind.HIGHLIGHT: VisualTag.CURRENT,
}


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : StepKind — one of the four engine actions.
        description     : Human-readable text for the explanation panel.
        targets         : Ordered identifiers affected (array indices,
                          tree node ids, graph node / edge ids).
        tag             : VisualTag applied to the targets (derived from
                          `kind` when not given).
        value           : Value written by a `set` step (or compared
                          against, for searches).
        snapshot        : Immutable structure after this step, or None.
        pseudocode_line : 0-based line of the algorithm's PSEUDOCODE.
        meta            : Free-form, read-only extras (rotation case,
                          distances, removed value, …).
    """

    kind:            StepKind
    description:     str                        = ""
    targets:         Tuple[Identifier, ...]     = ()
    tag:             Optional[VisualTag]        = None
    value:           Any                        = None
    snapshot:        Any                        = None
    pseudocode_line: int                        = 0
    meta:            Mapping[str, Any]          = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not isinstance(self.kind, StepKind):
            raise TypeError(f"Step.kind must be a StepKind, got {self.kind!r}")
        if self.tag is not None and not isinstance(self.tag, VisualTag):
            raise TypeError(f"Step.tag must be a VisualTag, got {self.tag!r}")
        object.__setattr__(self, "targets", tuple(self.targets))
        object.__setattr__(self, "meta", _frozen(self.meta))

    @property
    def visual_tag(self) -> VisualTag:
        return self.tag or DEFAULT_TAGS[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":            self.kind.value,
            "description":     self.description,
            "targets":         list(self.targets),
            "tag":             self.visual_tag.value,
            "value":           self.value,
            "pseudocode_line": self.pseudocode_line,
            "meta":            dict(self.meta),
        }


# ---------------------------------------------------------------------------
# Step constructors: what algorithm generators actually call
# ---------------------------------------------------------------------------
def compare(targets, description: str, line: int = 0, **kw) -> Step:
    return Step(StepKind.COMPARE, description, tuple(targets), pseudocode_line=line, **kw)


def set_value(targets, description: str, line: int = 0, **kw) -> Step:
    return Step(StepKind.SET, description, tuple(targets), pseudocode_line=line, **kw)


def swap(i: int, j: int, description: str, line: int = 0, **kw) -> Step:
    return Step(StepKind.SWAP, description, (i, j), pseudocode_line=line, **kw)


def highlight(targets, description: str, line: int = 0, **kw) -> Step:
    return Step(StepKind.HIGHLIGHT, description, tuple(targets), pseudocode_line=line, **kw)


# ---------------------------------------------------------------------------
# Outcome: what a generator returns once it is exhausted
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Outcome:
    final:  Any  = None     # structure after the operation (None → unchanged)
    result: Any  = None     # operation-specific answer (found id, removed value, …)
    failed: bool = False


StepGenerator = Generator[Step, None, Outcome]


def fail(description: str, targets=()) -> Generator[Step, None, Outcome]:
    """Yield the single descriptive step of a failed operation."""
    yield highlight(targets, description, tag=VisualTag.FAILED)
    return Outcome(failed=True)


# ---------------------------------------------------------------------------
# OperationLog
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OperationLog:
    """
    Ordered, immutable Steps of one algorithm run.

    Attributes:
        algorithm : Registry key of the generator that produced the log.
        steps     : The Steps, in emission order.
        initial   : Domain snapshot the generator started from.
        final     : Domain snapshot after the run (== initial on failure).
        result    : Operation-specific answer.
        failed    : True when the operation was invalid for the structure.
        params    : Parameters the generator was called with.
    """

    algorithm: str                  = ""
    steps:     Tuple[Step, ...]     = ()
    initial:   Any                  = None
    final:     Any                  = None
    result:    Any                  = field(default=None, hash=False)
    failed:    bool                 = False
    params:    Mapping[str, Any]    = field(default_factory=dict, hash=False)

    def __post_init__(self):
        steps = tuple(self.steps)
        for s in steps:
            if not isinstance(s, Step):
                raise TypeError(f"OperationLog accepts Step objects only, got {s!r}")
        object.__setattr__(self, "steps", steps)
        object.__setattr__(self, "params", _frozen(self.params))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, idx):
        return self.steps[idx]

    @property
    def last(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None

    def count(self, kind: StepKind) -> int:
        return sum(1 for s in self.steps if s.kind is kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "failed":    self.failed,
            "result":    self.result,
            "params":    dict(self.params),
            "steps":     [s.to_dict() for s in self.steps],
        }


def record(
    gen: StepGenerator,
    algorithm: str = "",
    initial: Any = None,
    params: Optional[Dict[str, Any]] = None,
) -> OperationLog:
    """Exhaust a step generator and freeze everything it yielded."""
    steps = []
    outcome = Outcome()
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            if stop.value is not None:
                outcome = stop.value
            break

    final = initial if outcome.failed or outcome.final is None else outcome.final
    return OperationLog(
        algorithm=algorithm,
        steps=tuple(steps),
        initial=initial,
        final=final,
        result=outcome.result,
        failed=outcome.failed,
        params=params or {},
    )
