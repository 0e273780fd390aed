"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Emits:
  1. dist[source] = 0                      →  `set`
  2. Select the closest unvisited node     →  `highlight` (visited)
  3. Examine each neighbour                →  `compare`   (node + edge)
  4. Tentative distance improved           →  `set` carrying the new distance
  5. Target selected                       →  path `highlight`, `found`

Selection is a linear scan of the priority set for the minimum
tentative distance, ties going to the node that entered the set first.
That makes the run O(V²), and it is labelled as such in the registry.

Dijkstra needs non-negative weights; a graph with a negative edge gets
a failed log instead of a misleading trace.
"""

from typing import Dict, List, Optional

from structures.graph import Graph, TraversalSnapshot
from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, highlight, fail
from algorithms.bfs import found_steps

INF = float("inf")


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",         # 0
    "    dist ← {v: ∞}; dist[source] ← 0",          # 1
    "    pending ← [source]",                       # 2
    "    while pending is not empty:",              # 3
    "        node ← argmin(dist) over pending",     # 4
    "        pending.remove(node); visited.add(node)",  # 5
    "        if node == target: return path",       # 6
    "        for (neighbour, w) in adj(node):",     # 7
    "            if dist[node] + w < dist[neighbour]:",  # 8
    "                dist[neighbour] ← dist[node] + w",  # 9
    "                parent[neighbour] ← node",     # 10
    "                pending.add(neighbour)",       # 11
    "    return dist",                              # 12
]


def dijkstra(graph: Graph, source: str, target: Optional[str] = None) -> StepGenerator:
    if not graph.has_node(source):
        return (yield from fail(f"Source node '{source}' is not in the graph."))
    negative = [e.id for e in graph.edges.values() if e.weight < 0]
    if negative:
        return (yield from fail(f"Dijkstra needs non-negative weights; negative edge(s): {', '.join(negative)}.",
                                targets=negative))

    dist:    Dict[str, float]         = {source: 0}
    parent:  Dict[str, Optional[str]] = {source: None}
    entered: Dict[str, int]           = {source: 0}     # tie-break: order of entry
    pending: List[str]                = [source]
    visited: List[str]                = []
    done = set()

    def snap() -> TraversalSnapshot:
        return TraversalSnapshot.of(visited, pending, parent, dist)

    yield set_value((source,), f"dist['{source}'] = 0; every other distance is ∞.",
                    line=1, value=0, tag=VisualTag.FRONTIER, snapshot=snap())

    while pending:
        node = min(pending, key=lambda n: (dist[n], entered[n]))
        pending.remove(node)
        done.add(node)
        visited.append(node)
        yield highlight((node,), f"Select '{node}' (distance {dist[node]}): the closest unvisited node. "
                                 f"Its distance is now final.",
                        line=5, tag=VisualTag.VISITED, snapshot=snap())

        if node == target:
            return (yield from found_steps(graph, parent, target, visited, snap(), line=6,
                                           distance=dist[target], distances=dict(dist)))

        for nbr, edge in graph.neighbours(node):
            if nbr in done:
                yield compare((nbr, edge.id), f"Edge {node}→{nbr}: '{nbr}' is already final, skip.",
                              line=7, meta={"from": node})
                continue

            candidate = dist[node] + edge.weight
            current   = dist.get(nbr, INF)
            shown     = "∞" if current == INF else current
            better    = candidate < current
            verdict   = "improvement" if better else "no improvement"
            yield compare((nbr, edge.id),
                          f"Edge {node}→{nbr}: {dist[node]} + {edge.weight} = {candidate} "
                          f"vs current {shown}: {verdict}.",
                          line=8, value=candidate, meta={"from": node})
            if not better:
                continue

            dist[nbr]   = candidate
            parent[nbr] = node
            if nbr not in entered:
                entered[nbr] = len(entered)
                pending.append(nbr)
            yield set_value((nbr, edge.id), f"dist['{nbr}'] ← {candidate} via '{node}'.",
                            line=9, value=candidate, tag=VisualTag.FRONTIER, snapshot=snap(),
                            meta={"previous": None if current == INF else current})

    if target is not None:
        yield highlight((), f"No pending nodes left: '{target}' is not reachable from '{source}'.", line=12)
    else:
        yield highlight((), "All reachable nodes have final distances.", line=12)
    return Outcome(final=snap(), result={"order": visited, "path": None, "distances": dict(dist)})
