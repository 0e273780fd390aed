"""
binary_search.py — Binary Search
=================================
Halves a sorted range on every probe.

Contract: the input must already be sorted ascending.  That is NOT
checked here (doing so costs O(n), more than the search itself); on
unsorted input the log is well-formed but the answer is meaningless.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, highlight


PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",            # 0
    "    lo, hi ← 0, n-1",                      # 1
    "    while lo <= hi:",                      # 2
    "        mid ← (lo + hi) / 2",              # 3
    "        if a[mid] == target: return mid",  # 4
    "        if a[mid] < target: lo ← mid + 1", # 5
    "        else: hi ← mid - 1",               # 6
    "    return NOT FOUND",                     # 7
]


def binary_search(values: Sequence[int], target: int) -> StepGenerator:
    arr = tuple(values)
    lo, hi = 0, len(arr) - 1

    yield highlight(tuple(range(len(arr))), f"Search for {target} in the sorted array.", line=1, value=target)

    while lo <= hi:
        mid = (lo + hi) // 2
        yield compare(
            (mid,), f"Probe a[{mid}] = {arr[mid]} in range [{lo}..{hi}].",
            line=4, value=target, meta={"lo": lo, "hi": hi},
        )
        if arr[mid] == target:
            yield highlight((mid,), f"Found {target} at index {mid}.", line=4, tag=VisualTag.FOUND, value=target)
            return Outcome(final=arr, result=mid)
        if arr[mid] < target:
            lo = mid + 1
            yield highlight(tuple(range(lo, hi + 1)), f"{arr[mid]} < {target}: keep the right half.", line=5)
        else:
            hi = mid - 1
            yield highlight(tuple(range(lo, hi + 1)), f"{arr[mid]} > {target}: keep the left half.", line=6)

    yield highlight((), f"{target} is not in the array.", line=7, value=target)
    return Outcome(final=arr, result=None)
