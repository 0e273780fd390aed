"""
heap.py — Binary Heap (array-backed)
=====================================
Max- or min-heap over a plain list, children of i at 2i+1 / 2i+2.

insert   : `set` appends the value, then one `compare` per sift-up hop
           (child vs parent), plus a `swap` whenever the child moves up.
extract  : `swap` root with the last slot, `set` removes the last slot
           (meta["remove"]), then one `compare` per sift-down hop
           (parent vs its children), plus a `swap` when it moves down.
peek     : single `highlight` on the root.
build    : bottom-up heapify from the last internal node.

The heap property holds once an operation's log is fully replayed,
not necessarily after each intermediate step.  Extract / peek on an
empty heap produce a failed log.
"""

from typing import Callable, List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, swap, highlight, fail


PSEUDOCODE: List[str] = [
    "def insert(h, x):",                                  # 0
    "    h.append(x); i ← last",                          # 1
    "    while i > 0 and h[i] beats h[parent(i)]:",       # 2
    "        swap(h[i], h[parent(i)]); i ← parent(i)",    # 3
    "def extract(h):",                                    # 4
    "    swap(h[0], h[last]); top ← h.pop()",             # 5
    "    i ← 0",                                          # 6
    "    while a child of i beats h[i]:",                 # 7
    "        swap with the better child; i ← child",      # 8
    "    return top",                                     # 9
    "def build(a):",                                      # 10
    "    for i in n/2-1 .. 0: sift_down(a, i)",           # 11
]

HEAP_KINDS = ("max", "min")


def _beats(kind: str) -> Callable[[int, int], bool]:
    """`a` should sit above `b` in a `kind` heap."""
    if kind == "max":
        return lambda a, b: a > b
    if kind == "min":
        return lambda a, b: a < b
    raise ValueError(f"Unknown heap kind: {kind}")


def is_heap(values: Sequence[int], kind: str = "max") -> bool:
    beats = _beats(kind)
    return all(not beats(values[i], values[(i - 1) // 2]) for i in range(1, len(values)))


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
def heap_insert(values: Sequence[int], value: int, kind: str = "max") -> StepGenerator:
    beats = _beats(kind)
    heap  = list(values)

    heap.append(value)
    i = len(heap) - 1
    yield set_value((i,), f"Append {value} at index {i}.", line=1, value=value, snapshot=tuple(heap))

    while i > 0:
        p = (i - 1) // 2
        yield compare((i, p), f"Compare {heap[i]} with parent {heap[p]}.", line=2)
        if not beats(heap[i], heap[p]):
            break
        heap[i], heap[p] = heap[p], heap[i]
        yield swap(i, p, f"{heap[p]} moves up to index {p}.", line=3, snapshot=tuple(heap))
        i = p

    yield highlight((i,), f"{value} settled at index {i}: heap property restored.", line=2)
    return Outcome(final=tuple(heap), result=value)


def heap_extract(values: Sequence[int], kind: str = "max") -> StepGenerator:
    beats = _beats(kind)
    heap  = list(values)
    label = "maximum" if kind == "max" else "minimum"
    if not heap:
        return (yield from fail(f"Heap is empty: cannot extract the {label}."))

    top  = heap[0]
    last = len(heap) - 1
    if last > 0:
        heap[0], heap[last] = heap[last], heap[0]
        yield swap(0, last, f"Swap root {top} with the last element {heap[0]}.", line=5, snapshot=tuple(heap))
    heap.pop()
    yield set_value(
        (last,), f"Remove {top}, the {label}.", line=5,
        tag=VisualTag.DELETING, snapshot=tuple(heap), meta={"remove": True, "removed": top},
    )

    yield from _sift_down(heap, 0, len(heap), beats)
    return Outcome(final=tuple(heap), result=top)


def heap_peek(values: Sequence[int], kind: str = "max") -> StepGenerator:
    if kind not in HEAP_KINDS:
        raise ValueError(f"Unknown heap kind: {kind}")
    heap  = tuple(values)
    label = "maximum" if kind == "max" else "minimum"
    if not heap:
        return (yield from fail("Heap is empty: nothing to peek at."))
    yield highlight((0,), f"The {label} is {heap[0]}, at the root.", line=0, tag=VisualTag.FOUND)
    return Outcome(final=heap, result=heap[0])


def heap_build(values: Sequence[int], kind: str = "max") -> StepGenerator:
    beats = _beats(kind)
    heap  = list(values)
    n     = len(heap)

    yield highlight((), f"Build a {kind}-heap from {heap}.", line=10)
    for start in range(n // 2 - 1, -1, -1):
        yield highlight((start,), f"Heapify the subtree rooted at index {start}.", line=11)
        yield from _sift_down(heap, start, n, beats)
    return Outcome(final=tuple(heap), result=tuple(heap))


def _sift_down(heap: List[int], i: int, size: int, beats) -> StepGenerator:
    """One `compare` per hop: the node against all of its children at once."""
    while True:
        left, right = 2 * i + 1, 2 * i + 2
        children = tuple(c for c in (left, right) if c < size)
        if not children:
            break
        best = children[0]
        if len(children) == 2 and beats(heap[right], heap[left]):
            best = right
        shown = " and ".join(str(heap[c]) for c in children)
        yield compare((i,) + children, f"Compare {heap[i]} with its children {shown}.", line=7)
        if not beats(heap[best], heap[i]):
            break
        heap[i], heap[best] = heap[best], heap[i]
        yield swap(i, best, f"{heap[i]} moves up; {heap[best]} sinks to index {best}.", line=8, snapshot=tuple(heap))
        i = best

    if size:
        yield highlight((i,), "Heap property restored.", line=9)
    return None
