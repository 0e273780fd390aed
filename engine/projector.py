"""
projector.py — State Projector
===============================
Turns (OperationLog, cursor) into the VisualState the renderer draws.

    state = project(log, cursor)

The projection is a fold over `log[0:cursor]` and nothing else: no
cache, no memory of the previous cursor.  Stepping backward and then
forward again therefore lands on an identical VisualState.

Fold rule:
  1. Persistent tags (sorted, visited, found, path, frontier) accumulate
     across the prefix; the last step to tag an identifier wins.
  2. The step at cursor-1 overlays its own tag on its targets.
  3. Every identifier not covered by 1 or 2 is `default`.

`structure` is the most recent snapshot carried by a step in the
prefix, falling back to the log's initial structure.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from algorithms.step import OperationLog, Step, StepKind, VisualTag, Identifier


PERSISTENT_TAGS = frozenset({
    VisualTag.SORTED,
    VisualTag.VISITED,
    VisualTag.FOUND,
    VisualTag.PATH,
    VisualTag.FRONTIER,
})


@dataclass(frozen=True)
class VisualState:
    """
    Attributes:
        cursor      : Number of steps applied.
        tags        : {identifier: VisualTag} for every non-default identifier.
        structure   : Domain snapshot as of the cursor.
        description : Text of the step at cursor-1 ("" at cursor 0).
        step        : The step at cursor-1, or None.
        is_final    : cursor == len(log).
    """

    cursor:      int                           = 0
    tags:        Dict[Identifier, VisualTag]   = field(default_factory=dict)
    structure:   Any                           = None
    description: str                           = ""
    step:        Optional[Step]                = None
    is_final:    bool                          = False

    def tag_of(self, identifier: Identifier) -> VisualTag:
        return self.tags.get(identifier, VisualTag.DEFAULT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cursor":          self.cursor,
            "tags":            {str(k): v.value for k, v in self.tags.items()},
            "structure":       _structure_to_dict(self.structure),
            "description":     self.description,
            "pseudocode_line": self.step.pseudocode_line if self.step else None,
            "is_final":        self.is_final,
        }


def _clamp(log: OperationLog, cursor: int) -> int:
    return max(0, min(int(cursor), len(log)))


def project(log: OperationLog, cursor: int) -> VisualState:
    cursor = _clamp(log, cursor)
    prefix = log.steps[:cursor]

    tags: Dict[Identifier, VisualTag] = {}
    structure = log.initial
    for s in prefix:
        if s.snapshot is not None:
            structure = s.snapshot
        tag = s.visual_tag
        if tag in PERSISTENT_TAGS:
            for t in s.targets:
                tags[t] = tag

    current = prefix[-1] if prefix else None
    if current is not None:
        for t in current.targets:
            tags[t] = current.visual_tag

    return VisualState(
        cursor=cursor,
        tags=tags,
        structure=structure,
        description=current.description if current else "",
        step=current,
        is_final=cursor == len(log),
    )


def replay_array(log: OperationLog, cursor: Optional[int] = None) -> List[Any]:
    """
    Re-apply the swap / set steps of an array-family log to its initial
    values.  Highlights and compares never move data.
    """
    arr = list(log.initial or ())
    end = len(log) if cursor is None else _clamp(log, cursor)
    for s in log.steps[:end]:
        if s.kind is StepKind.SWAP:
            i, j = s.targets[0], s.targets[1]
            arr[i], arr[j] = arr[j], arr[i]
        elif s.kind is StepKind.SET:
            idx = s.targets[0]
            if s.meta.get("remove"):
                del arr[idx]
            elif idx == len(arr):
                arr.append(s.value)
            else:
                arr[idx] = s.value
    return arr


def _structure_to_dict(structure: Any) -> Any:
    if structure is None:
        return None
    if hasattr(structure, "to_dict"):
        return structure.to_dict()
    if isinstance(structure, (tuple, list)):
        return list(structure)
    return structure
