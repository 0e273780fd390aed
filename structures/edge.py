"""
edge.py — Graph Edge
====================
Links two node ids with a weight.  Weight defaults to 1 so BFS / DFS can
ignore it; Dijkstra rejects a graph holding any negative weight.

An edge's id doubles as its identifier in Step targets, so it has to be
stable across runs: it defaults to "source|target" ("A|B"), not a uuid.
Graph refuses node ids containing EDGE_SEP, so a default edge id can
never equal a node id or the default id of a different edge.
"""

from dataclasses import dataclass

EDGE_SEP = "|"


@dataclass(frozen=True)
class Edge:
    source:   str
    target:   str
    weight:   float = 1.0
    directed: bool  = False
    id:       str   = ""

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", f"{self.source}{EDGE_SEP}{self.target}")

    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            weight=data.get("weight", 1.0),
            directed=data.get("directed", False),
            id=str(data.get("id") or ""),
        )

    def __str__(self) -> str:
        arrow = "→" if self.directed else "↔"
        return f"{self.source}{arrow}{self.target} ({self.weight})"
