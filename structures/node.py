"""
node.py — Graph Node
====================
A node is just an id plus a layout position for the render layer.
Traversal state (visited, frontier, distance) lives in TraversalSnapshots
on the Steps, never here, which is why Node is frozen.
"""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class Node:
    id:    str
    label: str   = ""
    x:     float = 0.0
    y:     float = 0.0

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.id)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(str(data["id"]), data.get("label") or "", data.get("x", 0.0), data.get("y", 0.0))
