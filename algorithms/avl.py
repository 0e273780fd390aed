"""
avl.py — AVL Tree
==================
BST insert / delete followed by a bottom-up rebalancing walk.

Walking from the parent of the changed leaf towards the root, each node
has its height recomputed and its balance factor (left height − right
height) checked.  When |balance| > 1:

  1. a `highlight` names the unbalanced node and the case (LL/RR/LR/RL)
  2. each single rotation is one `set` step with the new TreeSnapshot;
     LR and RL rotate the child first, then the node itself

`rotate_left` / `rotate_right` recompute the heights of the two nodes
they move before returning, so the walk continues upwards with correct
heights.  Deletion can need rotations at several levels, so the walk
never stops early.
"""

import logging
from typing import List, Optional, Sequence

from structures.tree import TreeArena, TreeSnapshot, NIL
from algorithms.step import StepGenerator, Outcome, VisualTag, set_value, highlight
from algorithms.bst import (
    _insert, _delete,
    INSERT_PSEUDOCODE as _BST_INSERT_PC,
    DELETE_PSEUDOCODE as _BST_DELETE_PC,
)

logger = logging.getLogger(__name__)


REBALANCE_PSEUDOCODE: List[str] = [
    "    for node on the path, bottom-up:",                     # +0
    "        node.height ← 1 + max(h(left), h(right))",         # +1
    "        bf ← h(left) - h(right)",                          # +2
    "        if bf > 1 and bf(left) >= 0: rotate_right (LL)",   # +3
    "        if bf > 1 and bf(left) < 0: LR",                   # +4
    "        if bf < -1 and bf(right) <= 0: rotate_left (RR)",  # +5
    "        if bf < -1 and bf(right) > 0: RL",                 # +6
]

INSERT_PSEUDOCODE: List[str] = _BST_INSERT_PC + REBALANCE_PSEUDOCODE
DELETE_PSEUDOCODE: List[str] = _BST_DELETE_PC + REBALANCE_PSEUDOCODE

_CASE_LINE = {"LL": 3, "LR": 4, "RR": 5, "RL": 6}


# ---------------------------------------------------------------------------
# Public generators
# ---------------------------------------------------------------------------
def avl_insert(tree: Optional[TreeSnapshot], value: int) -> StepGenerator:
    arena = TreeArena.from_snapshot(tree)
    nid = yield from _insert(arena, value)
    if nid is None:
        return Outcome(failed=True)
    yield from _rebalance(arena, arena.parent[nid], len(_BST_INSERT_PC))
    return Outcome(final=arena.snapshot(), result=nid)


def avl_build(values: Sequence[int], tree: Optional[TreeSnapshot] = None) -> StepGenerator:
    arena = TreeArena.from_snapshot(tree)
    inserted: List[int] = []
    yield highlight((), f"Build an AVL tree from {list(values)}.", line=0)
    for v in values:
        nid = yield from _insert(arena, v)
        if nid is None:
            logger.debug("avl_build: skipped duplicate %s", v)
            continue
        inserted.append(nid)
        yield from _rebalance(arena, arena.parent[nid], len(_BST_INSERT_PC))
    return Outcome(final=arena.snapshot(), result=inserted)


def avl_delete(tree: Optional[TreeSnapshot], value: int) -> StepGenerator:
    arena = TreeArena.from_snapshot(tree)
    parent = yield from _delete(arena, value)
    if parent is None:
        return Outcome(failed=True)
    yield from _rebalance(arena, parent, len(_BST_DELETE_PC))
    return Outcome(final=arena.snapshot(), result=value)


# ---------------------------------------------------------------------------
# Rebalancing
# ---------------------------------------------------------------------------
def _rebalance(arena: TreeArena, start: int, base_line: int) -> StepGenerator:
    node = start
    while node != NIL:
        arena.update_height(node)
        bf = arena.balance(node)
        if bf > 1 or bf < -1:
            node = yield from _rotate(arena, node, bf, base_line)
        node = arena.parent[node]
    return None


def _rotate(arena: TreeArena, z: int, bf: int, base_line: int) -> StepGenerator:
    """Fix the imbalance at z.  Returns the id of the new subtree root."""
    if bf > 1:
        child = arena.left[z]
        case  = "LL" if arena.balance(child) >= 0 else "LR"
    else:
        child = arena.right[z]
        case  = "RR" if arena.balance(child) <= 0 else "RL"

    line = base_line + _CASE_LINE[case]
    z_value = arena.value[z]
    yield highlight(
        (z,), f"{z_value} is unbalanced (balance factor {bf}): {case} case.",
        line=line, tag=VisualTag.CURRENT, meta={"balance": bf, "case": case},
    )
    logger.debug("avl: %s rotation at node %s (value %s)", case, z, z_value)

    if case == "LR":
        c_value = arena.value[child]
        pivot = arena.rotate_left(child)
        yield _rotation_step(arena, (child, pivot), f"Rotate left at {c_value}.", line, case, "left")
    elif case == "RL":
        c_value = arena.value[child]
        pivot = arena.rotate_right(child)
        yield _rotation_step(arena, (child, pivot), f"Rotate right at {c_value}.", line, case, "right")

    if case in ("LL", "LR"):
        new_root = arena.rotate_right(z)
        yield _rotation_step(arena, (z, new_root), f"Rotate right at {z_value}.", line, case, "right")
    else:
        new_root = arena.rotate_left(z)
        yield _rotation_step(arena, (z, new_root), f"Rotate left at {z_value}.", line, case, "left")
    return new_root


def _rotation_step(arena: TreeArena, targets, description: str, line: int, case: str, direction: str):
    return set_value(
        targets, description, line=line,
        snapshot=arena.snapshot(), meta={"rotation": case, "direction": direction},
    )
