"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every generator the engine knows about.

    from algorithms import REGISTRY, get_algorithm, generate

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, family, fn, pseudocode, …),
        …
    }

Every registered `fn` is a step generator.  Its domain snapshot (array,
tree or graph) is passed under the keyword named by `data_arg`; any
other keyword arguments are operation parameters (`value`, `target`,
`kind`, …) listed in `params`.

`generate(key, data, **params)` is the one entry point the rest of the
engine uses: look the generator up, normalise the snapshot, drain the
generator into an OperationLog.  Adding an algorithm is: write the
generator, add one entry here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from structures.graph import Graph
from structures.tree import TreeSnapshot, EMPTY_TREE
from algorithms.step import OperationLog, record

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.heap_sort      import heap_sort      as _heapsort,  PSEUDOCODE as _heapsort_pc
from algorithms.linear_search  import linear_search  as _linear,    PSEUDOCODE as _linear_pc
from algorithms.binary_search  import binary_search  as _binary,    PSEUDOCODE as _binary_pc
from algorithms.bfs            import bfs            as _bfs,       PSEUDOCODE as _bfs_pc
from algorithms.dfs            import dfs            as _dfs,       PSEUDOCODE as _dfs_pc
from algorithms.dijkstra       import dijkstra       as _dijkstra,  PSEUDOCODE as _dij_pc
from algorithms import bst, avl, heap, stack_queue

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Families: which kind of domain snapshot a generator reads
# ---------------------------------------------------------------------------
ARRAY = "array"
BST   = "bst"
AVL   = "avl"
HEAP  = "heap"
STACK = "stack"
QUEUE = "queue"
GRAPH = "graph"

FAMILIES: Tuple[str, ...] = (ARRAY, BST, AVL, HEAP, STACK, QUEUE, GRAPH)

_SEQUENCE_FAMILIES = (ARRAY, HEAP, STACK, QUEUE)
_TREE_FAMILIES     = (BST, AVL)


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each generator
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                      # registry key, e.g. "bfs"
    label:            str                      # human label, e.g. "Breadth-First Search"
    family:           str                      # one of FAMILIES
    fn:               Callable                 # the step generator
    pseudocode:       List[str]                # lines for the side-panel
    params:           Tuple[str, ...] = ()     # keyword parameters besides the snapshot
    data_arg:         str             = "values"
    mutates:          bool            = False  # does log.final replace the family's structure?
    complexity_time:  str             = ""
    complexity_space: str             = ""
    stable:           Optional[bool]  = None   # sorts only
    in_place:         Optional[bool]  = None   # sorts only
    description:      str             = ""
    tags:             Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "params":           list(self.params),
            "mutates":          self.mutates,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "stable":           self.stable,
            "in_place":         self.in_place,
            "description":      self.description,
            "tags":             list(self.tags),
            "pseudocode":       list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
_ENTRIES: List[AlgoInfo] = [

    # -- comparison sorts ---------------------------------------------------
    AlgoInfo(
        key="bubble_sort", label="Bubble Sort", family=ARRAY, fn=_bubble, pseudocode=_bubble_pc,
        complexity_time="O(n²)", complexity_space="O(1)", stable=True, in_place=True,
        description="Repeatedly swaps adjacent out-of-order pairs; stops early on a clean pass.",
        tags=("sort",),
    ),
    AlgoInfo(
        key="selection_sort", label="Selection Sort", family=ARRAY, fn=_selection, pseudocode=_selection_pc,
        complexity_time="O(n²)", complexity_space="O(1)", stable=False, in_place=True,
        description="Selects the minimum of the unsorted part and swaps it into place.",
        tags=("sort",),
    ),
    AlgoInfo(
        key="insertion_sort", label="Insertion Sort", family=ARRAY, fn=_insertion, pseudocode=_insertion_pc,
        complexity_time="O(n²)", complexity_space="O(1)", stable=True, in_place=True,
        description="Shifts larger elements right to open a slot for each key.",
        tags=("sort",),
    ),
    AlgoInfo(
        key="merge_sort", label="Merge Sort", family=ARRAY, fn=_merge, pseudocode=_merge_pc,
        complexity_time="O(n log n)", complexity_space="O(n)", stable=True, in_place=False,
        description="Splits in halves, sorts each, merges them back.",
        tags=("sort", "divide-and-conquer"),
    ),
    AlgoInfo(
        key="quick_sort", label="Quick Sort", family=ARRAY, fn=_quick, pseudocode=_quick_pc,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)", stable=False, in_place=True,
        description="Lomuto partition around the last element, then recurse on both sides.",
        tags=("sort", "divide-and-conquer"),
    ),
    AlgoInfo(
        key="heap_sort", label="Heap Sort", family=ARRAY, fn=_heapsort, pseudocode=_heapsort_pc,
        complexity_time="O(n log n)", complexity_space="O(1)", stable=False, in_place=True,
        description="Builds a max-heap, then repeatedly moves the root behind the heap.",
        tags=("sort",),
    ),

    # -- searches -----------------------------------------------------------
    AlgoInfo(
        key="linear_search", label="Linear Search", family=ARRAY, fn=_linear, pseudocode=_linear_pc,
        params=("target",), complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element left to right.",
        tags=("search",),
    ),
    AlgoInfo(
        key="binary_search", label="Binary Search", family=ARRAY, fn=_binary, pseudocode=_binary_pc,
        params=("target",), complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves a sorted range on every probe. Input must already be sorted.",
        tags=("search",),
    ),

    # -- binary search tree -------------------------------------------------
    AlgoInfo(
        key="bst_insert", label="BST Insert", family=BST, fn=bst.bst_insert, pseudocode=bst.INSERT_PSEUDOCODE,
        params=("value",), data_arg="tree", mutates=True,
        complexity_time="O(h)", complexity_space="O(1)",
        description="Descends from the root and attaches the key as a new leaf.",
        tags=("tree",),
    ),
    AlgoInfo(
        key="bst_delete", label="BST Delete", family=BST, fn=bst.bst_delete, pseudocode=bst.DELETE_PSEUDOCODE,
        params=("value",), data_arg="tree", mutates=True,
        complexity_time="O(h)", complexity_space="O(1)",
        description="Removes a key; two-child nodes take their in-order successor's value.",
        tags=("tree",),
    ),
    AlgoInfo(
        key="bst_search", label="BST Search", family=BST, fn=bst.bst_search, pseudocode=bst.SEARCH_PSEUDOCODE,
        params=("value",), data_arg="tree",
        complexity_time="O(h)", complexity_space="O(1)",
        description="Follows one root-to-leaf path comparing the key at each node.",
        tags=("tree", "search"),
    ),
    AlgoInfo(
        key="bst_build", label="BST Build", family=BST, fn=bst.bst_build, pseudocode=bst.INSERT_PSEUDOCODE,
        params=("values",), data_arg="tree", mutates=True,
        complexity_time="O(n·h)", complexity_space="O(n)",
        description="Inserts a list of keys one after another.",
        tags=("tree",),
    ),
    AlgoInfo(
        key="bst_traverse", label="BST Traversal", family=BST, fn=bst.bst_traverse, pseudocode=bst.TRAVERSE_PSEUDOCODE,
        params=("order",), data_arg="tree",
        complexity_time="O(n)", complexity_space="O(h)",
        description="Visits every node in in-, pre- or post-order.",
        tags=("tree", "traversal"),
    ),

    # -- AVL tree -----------------------------------------------------------
    AlgoInfo(
        key="avl_insert", label="AVL Insert", family=AVL, fn=avl.avl_insert, pseudocode=avl.INSERT_PSEUDOCODE,
        params=("value",), data_arg="tree", mutates=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="BST insert, then rotations on the way back up keep every balance factor in {-1, 0, 1}.",
        tags=("tree", "self-balancing"),
    ),
    AlgoInfo(
        key="avl_delete", label="AVL Delete", family=AVL, fn=avl.avl_delete, pseudocode=avl.DELETE_PSEUDOCODE,
        params=("value",), data_arg="tree", mutates=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="BST delete, then rebalancing that may rotate at several levels.",
        tags=("tree", "self-balancing"),
    ),
    AlgoInfo(
        key="avl_search", label="AVL Search", family=AVL, fn=bst.bst_search, pseudocode=bst.SEARCH_PSEUDOCODE,
        params=("value",), data_arg="tree",
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Plain BST search; the balanced shape bounds the path length.",
        tags=("tree", "search"),
    ),
    AlgoInfo(
        key="avl_build", label="AVL Build", family=AVL, fn=avl.avl_build, pseudocode=avl.INSERT_PSEUDOCODE,
        params=("values",), data_arg="tree", mutates=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Inserts a list of keys with rebalancing after each one.",
        tags=("tree", "self-balancing"),
    ),

    # -- binary heap --------------------------------------------------------
    AlgoInfo(
        key="heap_insert", label="Heap Insert", family=HEAP, fn=heap.heap_insert, pseudocode=heap.PSEUDOCODE,
        params=("value", "kind"), mutates=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Appends the value and sifts it up.",
        tags=("heap",),
    ),
    AlgoInfo(
        key="heap_extract", label="Heap Extract", family=HEAP, fn=heap.heap_extract, pseudocode=heap.PSEUDOCODE,
        params=("kind",), mutates=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Removes the root, moves the last element up and sifts it down.",
        tags=("heap",),
    ),
    AlgoInfo(
        key="heap_peek", label="Heap Peek", family=HEAP, fn=heap.heap_peek, pseudocode=heap.PSEUDOCODE,
        params=("kind",),
        complexity_time="O(1)", complexity_space="O(1)",
        description="Reads the root without removing it.",
        tags=("heap",),
    ),
    AlgoInfo(
        key="heap_build", label="Heap Build", family=HEAP, fn=heap.heap_build, pseudocode=heap.PSEUDOCODE,
        params=("kind",), mutates=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Bottom-up heapify from the last internal node.",
        tags=("heap",),
    ),

    # -- stack / queue ------------------------------------------------------
    AlgoInfo(
        key="stack_push", label="Stack Push", family=STACK, fn=stack_queue.stack_push, pseudocode=stack_queue.PSEUDOCODE,
        params=("value", "capacity"), data_arg="items", mutates=True,
        complexity_time="O(1)", complexity_space="O(1)",
        description="Adds to the top; fails when the stack is full.",
        tags=("linear",),
    ),
    AlgoInfo(
        key="stack_pop", label="Stack Pop", family=STACK, fn=stack_queue.stack_pop, pseudocode=stack_queue.PSEUDOCODE,
        data_arg="items", mutates=True,
        complexity_time="O(1)", complexity_space="O(1)",
        description="Removes the top; fails when the stack is empty.",
        tags=("linear",),
    ),
    AlgoInfo(
        key="stack_peek", label="Stack Peek", family=STACK, fn=stack_queue.stack_peek, pseudocode=stack_queue.PSEUDOCODE,
        data_arg="items",
        complexity_time="O(1)", complexity_space="O(1)",
        description="Reads the top without removing it.",
        tags=("linear",),
    ),
    AlgoInfo(
        key="queue_enqueue", label="Queue Enqueue", family=QUEUE, fn=stack_queue.queue_enqueue, pseudocode=stack_queue.PSEUDOCODE,
        params=("value", "capacity"), data_arg="items", mutates=True,
        complexity_time="O(1)", complexity_space="O(1)",
        description="Adds at the rear; fails when the queue is full.",
        tags=("linear",),
    ),
    AlgoInfo(
        key="queue_dequeue", label="Queue Dequeue", family=QUEUE, fn=stack_queue.queue_dequeue, pseudocode=stack_queue.PSEUDOCODE,
        data_arg="items", mutates=True,
        complexity_time="O(1)", complexity_space="O(1)",
        description="Removes the front; fails when the queue is empty.",
        tags=("linear",),
    ),
    AlgoInfo(
        key="queue_front", label="Queue Front", family=QUEUE, fn=stack_queue.queue_front, pseudocode=stack_queue.PSEUDOCODE,
        data_arg="items",
        complexity_time="O(1)", complexity_space="O(1)",
        description="Reads the front without removing it.",
        tags=("linear",),
    ),

    # -- graph traversal ----------------------------------------------------
    AlgoInfo(
        key="bfs", label="Breadth-First Search", family=GRAPH, fn=_bfs, pseudocode=_bfs_pc,
        params=("source", "target"), data_arg="graph",
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Finds the shortest path by hop count.",
        tags=("graph", "unweighted", "traversal"),
    ),
    AlgoInfo(
        key="dfs", label="Depth-First Search", family=GRAPH, fn=_dfs, pseudocode=_dfs_pc,
        params=("source", "target"), data_arg="graph",
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
        tags=("graph", "unweighted", "traversal"),
    ),
    AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family=GRAPH, fn=_dijkstra, pseudocode=_dij_pc,
        params=("source", "target"), data_arg="graph",
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalises the closest node (linear scan). Needs non-negative weights.",
        tags=("graph", "weighted", "shortest-path"),
    ),
]

REGISTRY: Dict[str, AlgoInfo] = {info.key: info for info in _ENTRIES}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------
def normalise_snapshot(family: str, data: Any) -> Any:
    """
    Coerce caller input into the immutable snapshot a family expects.
    Sequences become tuples, a missing tree becomes EMPTY_TREE.  Anything
    else of the wrong shape is a programmer error.
    """
    if family in _SEQUENCE_FAMILIES:
        if data is None:
            return ()
        if isinstance(data, (str, bytes, dict)):
            raise TypeError(f"{family} data must be a sequence of values, got {type(data).__name__}")
        return tuple(data)
    if family in _TREE_FAMILIES:
        if data is None:
            return EMPTY_TREE
        if not isinstance(data, TreeSnapshot):
            raise TypeError(f"{family} data must be a TreeSnapshot, got {type(data).__name__}")
        return data
    if family == GRAPH:
        if not isinstance(data, Graph):
            raise TypeError(f"graph data must be a Graph, got {type(data).__name__}")
        return data
    raise ValueError(f"Unknown family: {family}")


def generate(key: str, data: Any = None, **params) -> OperationLog:
    """
    Run generator `key` against `data` and return its frozen OperationLog.
    Same key, data and params always give an identical log.
    """
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    unknown = sorted(set(params) - set(info.params))
    if unknown:
        raise TypeError(f"{key} does not take parameter(s): {', '.join(unknown)}")

    snapshot = normalise_snapshot(info.family, data)
    gen = info.fn(**{info.data_arg: snapshot}, **params)
    log = record(gen, algorithm=key, initial=snapshot, params=params)
    logger.debug("generated %s: %d steps, failed=%s", key, len(log), log.failed)
    return log


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "FAMILIES",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
    "normalise_snapshot",
    "generate",
]
