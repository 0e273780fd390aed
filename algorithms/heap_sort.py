"""
heap_sort.py — Heap Sort
=========================
Builds a max-heap in place (bottom-up), then repeatedly swaps the root
to the end of the shrinking heap and sifts the new root down.

Each child comparison in a sift is its own `compare` step.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, swap, highlight


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                            # 0
    "    for i in n/2-1 .. 0: sift_down(a, i, n)",  # 1
    "    for end in n-1 .. 1:",                     # 2
    "        swap(a[0], a[end])",                   # 3
    "        sift_down(a, 0, end)",                 # 4
    "def sift_down(a, root, size):",                # 5
    "    largest ← max(root, left, right)",         # 6
    "    if largest != root: swap, continue",       # 7
]


def heap_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Heap Sort: build a max-heap, then pull the maximum out repeatedly.", line=0)

    for start in range(n // 2 - 1, -1, -1):
        yield from _sift_down(arr, start, n)
    if n:
        yield highlight(tuple(range(n)), "Max-heap built.", line=1)

    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        yield swap(0, end, f"Move maximum {arr[end]} to position {end}.", line=3, snapshot=tuple(arr))
        yield highlight((end,), f"{arr[end]} is now in its final position.", line=3, tag=VisualTag.SORTED)
        yield from _sift_down(arr, 0, end)

    yield highlight(tuple(range(n)), "Heap Sort complete.", line=0, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))


def _sift_down(arr: List[int], root: int, size: int) -> StepGenerator:
    while True:
        largest = root
        left, right = 2 * root + 1, 2 * root + 2
        if left < size:
            yield compare((left, largest), f"Compare {arr[left]} with {arr[largest]}.", line=6)
            if arr[left] > arr[largest]:
                largest = left
        if right < size:
            yield compare((right, largest), f"Compare {arr[right]} with {arr[largest]}.", line=6)
            if arr[right] > arr[largest]:
                largest = right
        if largest == root:
            return None
        arr[root], arr[largest] = arr[largest], arr[root]
        yield swap(root, largest, f"Sift {arr[largest]} down to position {largest}.", line=7, snapshot=tuple(arr))
        root = largest
