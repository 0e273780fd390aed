"""
stack_queue.py — Stack & Queue
===============================
LIFO / FIFO containers over a tuple, with an optional capacity.

    push / enqueue  →  one `set` appending the value
    pop             →  `highlight` the top, `set` removing it
    dequeue         →  `highlight` the front, `set` removing it
    peek / front    →  one `highlight`

Overflow (full) and underflow (empty) are failed logs, not exceptions.
"""

from typing import List, Optional, Sequence

from algorithms.step import StepGenerator, Outcome, VisualTag, set_value, highlight, fail

DEFAULT_CAPACITY = 8

PSEUDOCODE: List[str] = [
    "push(x) / enqueue(x):",                    # 0
    "    if size == capacity: OVERFLOW",        # 1
    "    items.append(x)",                      # 2
    "pop():     remove items[last]",            # 3
    "dequeue(): remove items[0]",               # 4
    "    if size == 0: UNDERFLOW",              # 5
    "peek() / front(): read without removing",  # 6
]


def _append(items: Sequence[int], value: int, capacity: Optional[int], verb: str, done: str, name: str) -> StepGenerator:
    data = list(items)
    if capacity is not None and len(data) >= capacity:
        return (yield from fail(f"Overflow! Cannot {verb} {value}: the {name} is full ({capacity}/{capacity})."))
    data.append(value)
    idx = len(data) - 1
    yield set_value((idx,), f"{value} {done} onto the {name}.", line=2, value=value, snapshot=tuple(data))
    return Outcome(final=tuple(data), result=value)


def _remove(items: Sequence[int], idx_of, verb: str, name: str, line: int) -> StepGenerator:
    data = list(items)
    if not data:
        return (yield from fail(f"Underflow! Cannot {verb}: the {name} is empty."))
    idx = idx_of(data)
    value = data[idx]
    yield highlight((idx,), f"{verb.capitalize()} {value} from the {name}.", line=line)
    del data[idx]
    yield set_value(
        (idx,), f"{value} removed.", line=line,
        tag=VisualTag.DELETING, snapshot=tuple(data), meta={"remove": True, "removed": value},
    )
    return Outcome(final=tuple(data), result=value)


def _look(items: Sequence[int], idx_of, name: str) -> StepGenerator:
    data = tuple(items)
    if not data:
        return (yield from fail(f"Cannot peek: the {name} is empty."))
    idx = idx_of(data)
    yield highlight((idx,), f"Peek: {data[idx]}.", line=6, tag=VisualTag.FOUND)
    return Outcome(final=data, result=data[idx])


def _top(data):
    return len(data) - 1


def _front(data):
    return 0


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------
def stack_push(items: Sequence[int], value: int, capacity: Optional[int] = DEFAULT_CAPACITY) -> StepGenerator:
    return (yield from _append(items, value, capacity, "push", "pushed", "stack"))


def stack_pop(items: Sequence[int]) -> StepGenerator:
    return (yield from _remove(items, _top, "pop", "stack", line=3))


def stack_peek(items: Sequence[int]) -> StepGenerator:
    return (yield from _look(items, _top, "stack"))


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------
def queue_enqueue(items: Sequence[int], value: int, capacity: Optional[int] = DEFAULT_CAPACITY) -> StepGenerator:
    return (yield from _append(items, value, capacity, "enqueue", "enqueued", "queue"))


def queue_dequeue(items: Sequence[int]) -> StepGenerator:
    return (yield from _remove(items, _front, "dequeue", "queue", line=4))


def queue_front(items: Sequence[int]) -> StepGenerator:
    return (yield from _look(items, _front, "queue"))
