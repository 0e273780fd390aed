"""
dfs.py — Depth-First Search
=============================
Iterative DFS with an explicit stack (no recursion-limit issues).

Emits:
  1. Push the source                      →  `set`       (frontier)
  2. Pop a node and mark it visited       →  `highlight` (visited)
  3. Examine each neighbour               →  `compare`
  4. Push an unvisited neighbour          →  `set`       (frontier)
  5. Target popped                        →  path `highlight`, `found`

Nodes are marked on pop, so a node can sit on the stack more than once;
stale pops are reported and skipped.  Neighbours are examined and pushed
in reverse edge order, so they are popped (visited) in edge order.
"""

from typing import Dict, List, Optional

from structures.graph import Graph, TraversalSnapshot
from algorithms.step import StepGenerator, Outcome, VisualTag, compare, set_value, highlight, fail
from algorithms.bfs import found_steps


PSEUDOCODE: List[str] = [
    "def DFS(graph, source, target):",          # 0
    "    stack ← [source]",                     # 1
    "    visited ← {}",                         # 2
    "    while stack is not empty:",            # 3
    "        node ← stack.pop()",               # 4
    "        if node in visited: continue",     # 5
    "        visited.add(node)",                # 6
    "        if node == target: return path",   # 7
    "        for neighbour in reversed(adj(node)):",  # 8
    "            if neighbour not visited:",    # 9
    "                parent[neighbour] ← node", # 10
    "                stack.push(neighbour)",    # 11
    "    return visit order",                   # 12
]


def dfs(graph: Graph, source: str, target: Optional[str] = None) -> StepGenerator:
    if not graph.has_node(source):
        return (yield from fail(f"Source node '{source}' is not in the graph."))

    stack: List[str] = [source]
    seen = set()
    parent: Dict[str, Optional[str]] = {source: None}
    visited: List[str] = []

    def snap() -> TraversalSnapshot:
        return TraversalSnapshot.of(visited, reversed(stack), parent)

    yield set_value((source,), f"Push source '{source}'. DFS dives as deep as possible before backtracking.",
                    line=1, tag=VisualTag.FRONTIER, snapshot=snap())

    while stack:
        node = stack.pop()
        if node in seen:
            yield highlight((node,), f"Pop '{node}': already visited, skip.", line=5, snapshot=snap())
            continue

        seen.add(node)
        visited.append(node)
        yield highlight((node,), f"Pop '{node}' and mark it visited.",
                        line=6, tag=VisualTag.VISITED, snapshot=snap())

        if node == target:
            return (yield from found_steps(graph, parent, target, visited, snap(), line=7))

        for nbr, edge in reversed(graph.neighbours(node)):
            done = nbr in seen
            note = "already visited, ignore" if done else "unvisited, push it"
            yield compare((nbr, edge.id), f"Examine edge {node}→{nbr}: '{nbr}' is {note}.",
                          line=9, meta={"from": node})
            if done:
                continue
            parent[nbr] = node
            stack.append(nbr)
            yield set_value((nbr,), f"Push '{nbr}' (parent '{node}').",
                            line=11, tag=VisualTag.FRONTIER, snapshot=snap())

    if target is not None:
        yield highlight((), f"Stack is empty: '{target}' is not reachable from '{source}'.", line=12)
    else:
        yield highlight((), f"Stack is empty. Visit order: {' → '.join(visited)}.", line=12)
    return Outcome(final=snap(), result={"order": visited, "path": None})
