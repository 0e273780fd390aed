"""
structures/
-----------
Domain snapshots the step generators read.

    from structures import Graph, Node, Edge, TraversalSnapshot
    from structures import TreeArena, TreeSnapshot, TreeNode, NIL
"""

from structures.node  import Node
from structures.edge  import Edge, EDGE_SEP
from structures.graph import Graph, TraversalSnapshot, reconstruct_path
from structures.tree  import TreeArena, TreeSnapshot, TreeNode, NIL, EMPTY_TREE

__all__ = [
    "Node",
    "Edge",
    "EDGE_SEP",
    "Graph",
    "TraversalSnapshot",
    "reconstruct_path",
    "TreeArena",
    "TreeSnapshot",
    "TreeNode",
    "NIL",
    "EMPTY_TREE",
]
