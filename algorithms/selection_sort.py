"""
selection_sort.py — Selection Sort
===================================
Finds the minimum of the unsorted suffix and swaps it to the front.
Not stable: the long-distance swap can reorder equal keys.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, swap, highlight


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                   # 0
    "    for i in 0 .. n-2:",                   # 1
    "        m ← i",                            # 2
    "        for j in i+1 .. n-1:",             # 3
    "            if a[j] < a[m]: m ← j",        # 4
    "        swap(a[i], a[m])",                 # 5
    "    return a",                             # 6
]


def selection_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Selection Sort: repeatedly select the smallest remaining element.", line=0)

    for i in range(n - 1):
        m = i
        yield highlight((i,), f"Fill position {i}: scan for the minimum of the unsorted part.", line=2)

        for j in range(i + 1, n):
            yield compare((m, j), f"Compare current minimum {arr[m]} with {arr[j]}.", line=4)
            if arr[j] < arr[m]:
                m = j
                yield highlight((m,), f"New minimum: {arr[m]}.", line=4, tag=VisualTag.MINIMUM)

        if m != i:
            arr[i], arr[m] = arr[m], arr[i]
            yield swap(i, m, f"Swap {arr[i]} into position {i}.", line=5, snapshot=tuple(arr))

        yield highlight((i,), f"{arr[i]} is now in its final position.", line=5, tag=VisualTag.SORTED)

    yield highlight(tuple(range(n)), "Selection Sort complete.", line=6, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))
