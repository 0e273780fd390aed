"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort.  Recursion depth is log2(n), so the recursive
generator (`yield from`) is safe for any realistic input size.

Each element comparison during a merge is one `compare`; each write
back into the array is one `set`.  Stable: ties take the left run.
When the left run runs out, the rest of the right run is already in
place and is not rewritten.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, highlight


PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                    # 0
    "    if hi - lo <= 1: return",                   # 1
    "    mid ← (lo + hi) / 2",                       # 2
    "    merge_sort(a, lo, mid)",                    # 3
    "    merge_sort(a, mid, hi)",                    # 4
    "    merge(a, lo, mid, hi):",                    # 5
    "        take the smaller head (left on ties)",  # 6
    "        write it to a[k]",                      # 7
    "        copy what is left of the left run",     # 8
]


def merge_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Merge Sort: split, sort each half, merge.", line=0)
    yield from _sort(arr, 0, n)
    yield highlight(tuple(range(n)), "Merge Sort complete.", line=5, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))


def _sort(arr: List[int], lo: int, hi: int) -> StepGenerator:
    if hi - lo <= 1:
        return None
    mid = (lo + hi) // 2
    yield highlight(tuple(range(lo, hi)), f"Split [{lo}..{hi - 1}] at {mid}.", line=2)
    yield from _sort(arr, lo, mid)
    yield from _sort(arr, mid, hi)
    yield from _merge(arr, lo, mid, hi)
    return None


def _merge(arr: List[int], lo: int, mid: int, hi: int) -> StepGenerator:
    left  = arr[lo:mid]
    right = arr[mid:hi]
    i = j = 0
    k = lo

    while i < len(left) and j < len(right):
        yield compare((lo + i, mid + j), f"Compare {left[i]} and {right[j]}.", line=6)
        if left[i] <= right[j]:
            arr[k] = left[i]
            i += 1
        else:
            arr[k] = right[j]
            j += 1
        yield set_value((k,), f"Write {arr[k]} to position {k}.", line=7, value=arr[k], snapshot=tuple(arr))
        k += 1

    while i < len(left):
        arr[k] = left[i]
        yield set_value((k,), f"Copy remaining {arr[k]} to position {k}.", line=8, value=arr[k], snapshot=tuple(arr))
        i += 1
        k += 1

    yield highlight(tuple(range(lo, hi)), f"Merged [{lo}..{hi - 1}].", line=5)
    return None
