"""
graph.py — Graph Container
===========================
Read-only input for the traversal generators (BFS / DFS / Dijkstra).

Responsibilities:
  1. Add / get nodes & edges
  2. Adjacency queries in insertion order  (neighbours, get_edge_between)
  3. Serialisation round-trip               (to_dict / from_dict)
  4. The sample graph shipped with the visualiser

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - `_adj[node_id] → [(neighbour_id, edge_id)]` is maintained
    incrementally so neighbour queries are O(degree) and always come
    back in the order edges were added.  Traversal order (and so the
    emitted log) depends on that order, which keeps generation
    deterministic.
  - Generators never mutate a Graph.  Per-run state lives in
    TraversalSnapshot values attached to Steps.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Any

from structures.node import Node
from structures.edge import Edge, EDGE_SEP


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : {edge_id: Edge}
        directed : bool – graph-level directedness
        _adj     : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool            = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if EDGE_SEP in node.id:
            raise ValueError(f"Node id {node.id!r} may not contain {EDGE_SEP!r}")
        if node.id in self.edges:
            raise ValueError(f"Node id {node.id!r} is already an edge id")
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, label: Optional[str] = None, x: float = 0.0, y: float = 0.0) -> Node:
        return self.add_node(Node(str(node_id), label or "", x, y))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.id in self.edges:
            raise ValueError(f"Duplicate edge id: {edge.id}")
        if edge.id in self.nodes or edge.id in (edge.source, edge.target):
            raise ValueError(f"Edge id {edge.id!r} is already a node id")
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.nodes:
                self.create_node(endpoint)
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1.0, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed, id=edge_id or ""))

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in edge-insertion order."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        directed = data.get("directed", False)
        g = cls(directed=directed)
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            ed = dict(ed)
            ed.setdefault("directed", directed)
            g.add_edge(Edge.from_dict(ed))
        return g

    @classmethod
    def from_edges(cls, edges: List[Tuple[str, str, float]], directed: bool = False) -> "Graph":
        """Build from (source, target, weight) triples; nodes appear in first-mention order."""
        g = cls(directed=directed)
        for src, tgt, w in edges:
            g.create_edge(str(src), str(tgt), weight=w)
        return g

    @classmethod
    def sample(cls) -> "Graph":
        """The six-node weighted graph the visualiser opens with."""
        g = cls(directed=False)
        for nid, x, y in [("A", 150, 100), ("B", 300, 80), ("C", 450, 120),
                          ("D", 200, 250), ("E", 350, 280), ("F", 500, 250)]:
            g.create_node(nid, x=x, y=y)
        for src, tgt, w in [("A", "B", 4), ("A", "C", 2), ("A", "D", 3), ("B", "C", 1),
                            ("B", "D", 5), ("C", "E", 3), ("D", "E", 2), ("E", "F", 1)]:
            g.create_edge(src, tgt, weight=w)
        return g

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={len(self.nodes)}, edges={len(self.edges)})"


# ---------------------------------------------------------------------------
# Per-run traversal state, frozen onto Steps
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraversalSnapshot:
    """
    Attributes:
        visited   : Node ids in the order they were visited.
        frontier  : Queue / stack / priority-set contents, front first.
        distances : ((node_id, distance), …) — Dijkstra only.
        parents   : ((node_id, parent_id), …) discovery tree.
    """

    visited:   Tuple[str, ...]                 = ()
    frontier:  Tuple[str, ...]                 = ()
    distances: Tuple[Tuple[str, float], ...]   = ()
    parents:   Tuple[Tuple[str, str], ...]     = ()

    @classmethod
    def of(
        cls,
        visited,
        frontier,
        parents: Dict[str, Optional[str]],
        distances: Optional[Dict[str, float]] = None,
    ) -> "TraversalSnapshot":
        return cls(
            visited=tuple(visited),
            frontier=tuple(frontier),
            distances=tuple((distances or {}).items()),
            parents=tuple((k, v) for k, v in parents.items() if v is not None),
        )

    @property
    def distance_map(self) -> Dict[str, float]:
        return dict(self.distances)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visited":   list(self.visited),
            "frontier":  list(self.frontier),
            "distances": {k: v for k, v in self.distances},
            "parents":   {k: v for k, v in self.parents},
        }


def reconstruct_path(parents: Dict[str, Optional[str]], target: str) -> List[str]:
    path: List[str] = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parents.get(cur)
    path.reverse()
    return path
