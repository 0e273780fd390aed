"""
bubble_sort.py — Bubble Sort
=============================
Repeatedly compares adjacent elements and swaps them when they are out
of order.  Stops early after a pass with no swaps.

Stable: only a strict `>` triggers a swap, so equal keys never cross.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, swap, highlight


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                      # 0
    "    for i in 0 .. n-2:",                   # 1
    "        swapped ← false",                  # 2
    "        for j in 0 .. n-i-2:",             # 3
    "            if a[j] > a[j+1]:",            # 4
    "                swap(a[j], a[j+1])",       # 5
    "                swapped ← true",           # 6
    "        a[n-1-i] is in place",             # 7
    "        if not swapped: break",            # 8
    "    return a",                             # 9
]


def bubble_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Bubble Sort: compare neighbours and swap them when out of order.", line=0)

    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            yield compare((j, j + 1), f"Compare {arr[j]} and {arr[j + 1]}.", line=4)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield swap(
                    j, j + 1,
                    f"{arr[j + 1]} > {arr[j]}: swap them.",
                    line=5, snapshot=tuple(arr),
                )

        last = n - 1 - i
        yield highlight((last,), f"{arr[last]} is now in its final position.", line=7, tag=VisualTag.SORTED)

        if not swapped:
            yield highlight(
                tuple(range(last)),
                "No swaps in this pass: the remaining elements are already sorted.",
                line=8, tag=VisualTag.SORTED,
            )
            break

    yield highlight(tuple(range(n)), "Bubble Sort complete.", line=9, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))
