"""
linear_search.py — Linear Search
=================================
Probes each slot from left to right.  Works on unsorted input.
Result: index of the first match, or None.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, highlight


PSEUDOCODE: List[str] = [
    "def linear_search(a, target):",        # 0
    "    for i in 0 .. n-1:",               # 1
    "        if a[i] == target: return i",  # 2
    "    return NOT FOUND",                 # 3
]


def linear_search(values: Sequence[int], target: int) -> StepGenerator:
    arr = tuple(values)

    yield highlight((), f"Search for {target} by checking every element in turn.", line=0, value=target)

    for i, v in enumerate(arr):
        yield compare((i,), f"Is a[{i}] = {v} equal to {target}?", line=2, value=target)
        if v == target:
            yield highlight((i,), f"Found {target} at index {i}.", line=2, tag=VisualTag.FOUND, value=target)
            return Outcome(final=arr, result=i)

    yield highlight((), f"{target} is not in the array.", line=3, value=target)
    return Outcome(final=arr, result=None)
