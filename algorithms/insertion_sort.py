"""
insertion_sort.py — Insertion Sort
===================================
Grows a sorted prefix by taking the next element as a key and shifting
larger prefix elements one slot right until the key's place is found.

Every shift is a `set` on the slot written; the final placement of the
key is one more `set`.  Stable: shifting stops at the first element
`<= key`.
"""

from typing import List, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, highlight


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                   # 0
    "    for i in 1 .. n-1:",                   # 1
    "        key ← a[i]",                       # 2
    "        j ← i - 1",                        # 3
    "        while j >= 0 and a[j] > key:",     # 4
    "            a[j+1] ← a[j]",                # 5
    "            j ← j - 1",                    # 6
    "        a[j+1] ← key",                     # 7
    "    return a",                             # 8
]


def insertion_sort(values: Sequence[int]) -> StepGenerator:
    arr = list(values)
    n   = len(arr)

    yield highlight((), "Start Insertion Sort: grow a sorted prefix one element at a time.", line=0)

    for i in range(1, n):
        key = arr[i]
        yield highlight((i,), f"Take {key} as the key.", line=2, value=key)

        j = i - 1
        while j >= 0:
            yield compare((j, j + 1), f"Compare {arr[j]} with key {key}.", line=4, value=key)
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            yield set_value(
                (j + 1,), f"{arr[j]} > {key}: shift it right to position {j + 1}.",
                line=5, value=arr[j + 1], snapshot=tuple(arr),
            )
            j -= 1

        if j + 1 != i:
            arr[j + 1] = key
            yield set_value(
                (j + 1,), f"Insert {key} at position {j + 1}.",
                line=7, value=key, snapshot=tuple(arr),
            )

    yield highlight(tuple(range(n)), "Insertion Sort complete.", line=8, tag=VisualTag.SORTED)
    return Outcome(final=tuple(arr), result=tuple(arr))
