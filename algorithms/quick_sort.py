"""
quick_sort.py — Quick Sort
===========================
Lomuto partition around the last element.  Sub-ranges are kept on an
explicit stack (left range processed first) so sorted input, the
worst case, cannot hit Python's recursion limit.

Self-swaps (i == j) are not emitted: they move no data.
"""

from typing import List, Sequence, Tuple

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, swap, highlight


PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                 # 0
    "    if lo >= hi: return",                    # 1
    "    pivot ← a[hi]",                          # 2
    "    i ← lo - 1",                             # 3
    "    for j in lo .. hi-1:",                   # 4
    "        if a[j] < pivot:",                   # 5
    "            i ← i + 1; swap(a[i], a[j])",    # 6
    "    swap(a[i+1], a[hi])",                    # 7
    "    quick_sort(a, lo, i)",                   # 8
    "    quick_sort(a, i+2, hi)",                 # 9
]


def quick_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Quick Sort: partition around a pivot, then sort each side.", line=0)

    stack: List[Tuple[int, int]] = [(0, n - 1)]
    while stack:
        lo, hi = stack.pop()
        if lo > hi:
            continue
        if lo == hi:
            yield highlight((lo,), f"{arr[lo]} is alone in its range: in place.", line=1, tag=VisualTag.SORTED)
            continue

        pivot = arr[hi]
        yield highlight((hi,), f"Pivot {pivot} selected at position {hi}.", line=2, tag=VisualTag.PIVOT)

        i = lo - 1
        for j in range(lo, hi):
            yield compare((j, hi), f"Compare {arr[j]} with pivot {pivot}.", line=5)
            if arr[j] < pivot:
                i += 1
                if i != j:
                    arr[i], arr[j] = arr[j], arr[i]
                    yield swap(i, j, f"{arr[i]} < {pivot}: swap it left to position {i}.", line=6, snapshot=tuple(arr))

        p = i + 1
        if p != hi:
            arr[p], arr[hi] = arr[hi], arr[p]
            yield swap(p, hi, f"Move pivot {pivot} to position {p}.", line=7, snapshot=tuple(arr))
        yield highlight((p,), f"Pivot {pivot} is in its final position.", line=7, tag=VisualTag.SORTED)

        stack.append((p + 1, hi))
        stack.append((lo, p - 1))

    yield highlight(tuple(range(n)), "Quick Sort complete.", line=0, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))
