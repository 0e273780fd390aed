"""
bfs.py — Breadth-First Search
==============================
Queue-driven traversal.  Emits:
  1. Enqueue the source                    →  `set`       (frontier)
  2. Dequeue a node and mark it visited    →  `highlight` (visited)
  3. Examine each neighbour                →  `compare`   (node + edge)
  4. Enqueue an undiscovered neighbour     →  `set`       (frontier)
  5. Target dequeued                       →  path `highlight`, then the
                                              `found` step, then stop

A node is discovered (and enqueued) at most once; it is visited when it
leaves the queue.  Neighbours are examined in edge-insertion order.
"""

from collections import deque
from typing import Dict, List, Optional

from structures.graph import Graph, TraversalSnapshot, reconstruct_path
from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, highlight, fail


PSEUDOCODE: List[str] = [
    "def BFS(graph, source, target):",          # 0
    "    queue ← [source]",                     # 1
    "    discovered ← {source}",                # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        mark node visited",                # 5
    "        if node == target: return path",   # 6
    "        for neighbour in adj(node):",      # 7
    "            if neighbour not discovered:", # 8
    "                discovered.add(neighbour)",# 9
    "                queue.enqueue(neighbour)", # 10
    "    return visit order",                   # 11
]


def bfs(graph: Graph, source: str, target: Optional[str] = None) -> StepGenerator:
    if not graph.has_node(source):
        return (yield from fail(f"Source node '{source}' is not in the graph."))

    queue      = deque([source])
    discovered = {source}
    parent: Dict[str, Optional[str]] = {source: None}
    visited: List[str] = []

    def snap() -> TraversalSnapshot:
        return TraversalSnapshot.of(visited, queue, parent)

    yield set_value((source,), f"Enqueue source '{source}'. BFS explores layer by layer from here.",
                    line=1, tag=VisualTag.FRONTIER, snapshot=snap())

    while queue:
        node = queue.popleft()
        visited.append(node)
        yield highlight((node,), f"Dequeue '{node}' and mark it visited (first in, first out).",
                        line=5, tag=VisualTag.VISITED, snapshot=snap())

        if node == target:
            return (yield from found_steps(graph, parent, target, visited, snap()))

        for nbr, edge in graph.neighbours(node):
            seen = nbr in discovered
            note = "already discovered, skip" if seen else "new, enqueue it"
            yield compare((nbr, edge.id), f"Examine edge {node}→{nbr}: '{nbr}' is {note}.",
                          line=8, meta={"from": node})
            if seen:
                continue
            discovered.add(nbr)
            parent[nbr] = node
            queue.append(nbr)
            yield set_value((nbr,), f"Enqueue '{nbr}' (parent '{node}').",
                            line=10, tag=VisualTag.FRONTIER, snapshot=snap())

    if target is not None:
        yield highlight((), f"Queue is empty: '{target}' is not reachable from '{source}'.", line=11)
    else:
        yield highlight((), f"Queue is empty. Visit order: {' → '.join(visited)}.", line=11)
    return Outcome(final=snap(), result={"order": visited, "path": None})


def found_steps(
    graph: Graph,
    parent: Dict[str, Optional[str]],
    target: str,
    visited: List[str],
    final: TraversalSnapshot,
    line: int = 6,
    **extra,
) -> StepGenerator:
    """Shared by BFS / DFS / Dijkstra: light the path, then the found step."""
    path  = tuple(reconstruct_path(parent, target))
    edges = []
    for a, b in zip(path, path[1:]):
        e = graph.get_edge_between(a, b)
        if e:
            edges.append(e.id)
    yield highlight(path + tuple(edges), f"Path: {' → '.join(path)}.",
                    line=line, tag=VisualTag.PATH, meta={"path": path})
    yield highlight((target,), f"🎯 Target '{target}' found after visiting {len(visited)} node(s).",
                    line=line, tag=VisualTag.FOUND, meta={"path": path})
    result = {"order": list(visited), "path": path}
    result.update(extra)
    return Outcome(final=final, result=result)
