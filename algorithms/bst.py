"""
bst.py — Binary Search Tree
============================
Insert / search / delete / traverse over an index-addressed TreeArena.

Every node visited while descending is one `compare` step.  The
mutation point is a `set` step carrying the new TreeSnapshot.  Deleting
a node with two children first walks to its in-order successor (one
`highlight` per hop), copies the successor's value up, then removes the
successor node.

Invalid operations (duplicate insert, delete of a missing key, any
operation on an empty tree) end in a single "failed" highlight and
leave the tree untouched.

The `_insert` / `_delete` generators are shared with avl.py, which adds
rebalancing on top of them.
"""

import logging
from typing import List, Optional, Sequence

from structures.tree import TreeArena, TreeSnapshot, NIL, EMPTY_TREE
from algorithms.step import (
    StepGenerator, Outcome, VisualTag,
    compare, set_value, highlight, fail,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
INSERT_PSEUDOCODE: List[str] = [
    "def insert(tree, key):",                       # 0
    "    if tree is empty: root ← Node(key)",       # 1
    "    node ← root",                              # 2
    "    loop:",                                    # 3
    "        if key == node.key: reject duplicate", # 4
    "        side ← left if key < node.key else right",  # 5
    "        if node.side is empty:",               # 6
    "            node.side ← Node(key); return",    # 7
    "        node ← node.side",                     # 8
]

SEARCH_PSEUDOCODE: List[str] = [
    "def search(tree, key):",                       # 0
    "    node ← root",                              # 1
    "    while node is not empty:",                 # 2
    "        if key == node.key: return node",      # 3
    "        node ← node.left if key < node.key else node.right",  # 4
    "    return NOT FOUND",                         # 5
]

DELETE_PSEUDOCODE: List[str] = [
    "def delete(tree, key):",                       # 0
    "    node ← search(tree, key)",                 # 1
    "    if node is empty: return NOT FOUND",       # 2
    "    if node has two children:",                # 3
    "        succ ← leftmost(node.right)",          # 4
    "        node.key ← succ.key",                  # 5
    "        node ← succ",                          # 6
    "    splice node out (replace by its child)",   # 7
]

TRAVERSE_PSEUDOCODE: List[str] = [
    "def traverse(node, order):",                   # 0
    "    preorder:  visit, left, right",            # 1
    "    inorder:   left, visit, right",            # 2
    "    postorder: left, right, visit",            # 3
]

TRAVERSAL_ORDERS = ("inorder", "preorder", "postorder")


# ---------------------------------------------------------------------------
# Public generators
# ---------------------------------------------------------------------------
def bst_insert(tree: Optional[TreeSnapshot], value: int) -> StepGenerator:
    arena = TreeArena.from_snapshot(tree)
    nid = yield from _insert(arena, value)
    if nid is None:
        return Outcome(failed=True)
    return Outcome(final=arena.snapshot(), result=nid)


def bst_build(values: Sequence[int], tree: Optional[TreeSnapshot] = None) -> StepGenerator:
    """Insert `values` in order; duplicates are reported and skipped."""
    arena = TreeArena.from_snapshot(tree)
    inserted: List[int] = []
    yield highlight((), f"Build a BST from {list(values)}.", line=0)
    for v in values:
        nid = yield from _insert(arena, v)
        if nid is not None:
            inserted.append(nid)
        else:
            logger.debug("bst_build: skipped duplicate %s", v)
    return Outcome(final=arena.snapshot(), result=inserted)


def bst_search(tree: Optional[TreeSnapshot], value: int) -> StepGenerator:
    snap = tree or EMPTY_TREE
    if snap.is_empty:
        return (yield from fail(f"Tree is empty: cannot search for {value}."))

    cur = snap.get(snap.root)
    while cur is not None:
        yield compare((cur.id,), f"Compare {value} with {cur.value}.", line=3, value=value)
        if value == cur.value:
            yield highlight((cur.id,), f"Found {value}.", line=3, tag=VisualTag.FOUND, value=value)
            return Outcome(final=snap, result=cur.id)
        cur = snap.get(cur.left if value < cur.value else cur.right)

    yield highlight((), f"{value} is not in the tree.", line=5, value=value)
    return Outcome(final=snap, result=None)


def bst_delete(tree: Optional[TreeSnapshot], value: int) -> StepGenerator:
    arena = TreeArena.from_snapshot(tree)
    parent = yield from _delete(arena, value)
    if parent is None:
        return Outcome(failed=True)
    return Outcome(final=arena.snapshot(), result=value)


def bst_traverse(tree: Optional[TreeSnapshot], order: str = "inorder") -> StepGenerator:
    if order not in TRAVERSAL_ORDERS:
        raise ValueError(f"Unknown traversal order: {order}")
    snap = tree or EMPTY_TREE
    if snap.is_empty:
        return (yield from fail("Tree is empty: nothing to traverse."))

    line = TRAVERSAL_ORDERS.index(order) + 1
    visited: List[int] = []
    for node in _walk(snap, order):
        visited.append(node.value)
        yield highlight((node.id,), f"Visit {node.value} ({order}).", line=line, tag=VisualTag.VISITED)
    return Outcome(final=snap, result=visited)


# ---------------------------------------------------------------------------
# Shared building blocks (also used by avl.py)
# ---------------------------------------------------------------------------
def _insert(arena: TreeArena, value: int) -> StepGenerator:
    """Attach `value` as a leaf.  Returns the new node id, or None on duplicate."""
    if arena.root == NIL:
        nid = arena.new_node(value)
        arena.root = nid
        yield set_value((nid,), f"Tree is empty: {value} becomes the root.", line=1,
                        value=value, snapshot=arena.snapshot())
        return nid

    cur = arena.root
    while True:
        cur_value = arena.value[cur]
        yield compare((cur,), f"Compare {value} with {cur_value}.", line=4, value=value)
        if value == cur_value:
            yield highlight((cur,), f"{value} is already in the tree.", line=4, tag=VisualTag.FAILED)
            return None

        go_left = value < cur_value
        nxt = arena.left[cur] if go_left else arena.right[cur]
        if nxt == NIL:
            nid = arena.new_node(value, parent=cur)
            if go_left:
                arena.left[cur] = nid
            else:
                arena.right[cur] = nid
            _refresh_heights(arena, cur)
            side = "left" if go_left else "right"
            yield set_value(
                (nid,), f"Insert {value} as the {side} child of {cur_value}.",
                line=7, value=value, snapshot=arena.snapshot(), meta={"parent": cur},
            )
            return nid
        cur = nxt


def _delete(arena: TreeArena, value: int) -> StepGenerator:
    """
    Remove `value`.  Returns the parent id of the node that was physically
    spliced out (NIL when it was the root), or None when nothing was removed.
    """
    if arena.root == NIL:
        yield from fail(f"Tree is empty: cannot delete {value}.")
        return None

    cur = arena.root
    while cur != NIL:
        cur_value = arena.value[cur]
        yield compare((cur,), f"Compare {value} with {cur_value}.", line=1, value=value)
        if value == cur_value:
            break
        cur = arena.left[cur] if value < cur_value else arena.right[cur]

    if cur == NIL:
        yield highlight((), f"{value} is not in the tree: nothing to delete.", line=2, tag=VisualTag.FAILED)
        return None

    yield highlight((cur,), f"Found {value}: remove it.", line=1, tag=VisualTag.DELETING)

    target = cur
    if arena.left[cur] != NIL and arena.right[cur] != NIL:
        succ = arena.right[cur]
        yield highlight((succ,), f"Two children: look for the in-order successor, start at {arena.value[succ]}.",
                        line=4)
        while arena.left[succ] != NIL:
            succ = arena.left[succ]
            yield highlight((succ,), f"Go left to {arena.value[succ]}.", line=4)
        succ_value = arena.value[succ]
        yield highlight((succ,), f"In-order successor is {succ_value}.", line=4, meta={"successor": succ})

        arena.value[cur] = succ_value
        yield set_value((cur,), f"Copy {succ_value} into the node holding {value}.", line=5,
                        value=succ_value, snapshot=arena.snapshot())
        target = succ

    removed_value = arena.value[target]
    child  = arena.left[target] if arena.left[target] != NIL else arena.right[target]
    parent = arena.parent[target]
    arena.replace_child(parent, target, child)
    arena.free(target)
    if parent != NIL:
        _refresh_heights(arena, parent)

    yield set_value((target,), f"Remove node {removed_value} from the tree.", line=7,
                    tag=VisualTag.DELETING, snapshot=arena.snapshot(), meta={"removed": target})
    return parent


def _refresh_heights(arena: TreeArena, start: int) -> None:
    node = start
    while node != NIL:
        arena.update_height(node)
        node = arena.parent[node]


def _walk(snap: TreeSnapshot, order: str):
    if order == "inorder":
        yield from snap.inorder()
        return
    # preorder / postorder with an explicit stack
    out = []
    stack = [snap.get(snap.root)]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        out.append(node)
        if order == "preorder":
            stack.append(snap.get(node.right))
            stack.append(snap.get(node.left))
        else:
            stack.append(snap.get(node.left))
            stack.append(snap.get(node.right))
    if order == "postorder":
        out.reverse()
    yield from out
