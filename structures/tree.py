"""
tree.py — Index-Addressed Binary Tree Arena
============================================
BST and AVL generators work on an arena: node fields live in parallel
lists indexed by an integer node id, and links (`left`, `right`,
`parent`) are ids or NIL.  There are no object references to alias, so
freezing the tree into a TreeSnapshot is a matter of copying lists.

    arena = TreeArena.from_snapshot(snapshot)   # private working copy
    nid   = arena.new_node(42)
    …
    snap  = arena.snapshot()                    # immutable, shareable

Ids are never reused: a deleted node leaves a None slot behind so that
identifiers in an older OperationLog always mean the same node.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Any

NIL = -1


# ---------------------------------------------------------------------------
# Immutable view
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TreeNode:
    id:     int
    value:  int
    left:   int = NIL
    right:  int = NIL
    parent: int = NIL
    height: int = 1


@dataclass(frozen=True)
class TreeSnapshot:
    """
    Attributes:
        root  : Id of the root node (NIL when empty).
        nodes : Dense table indexed by id; None marks a deleted slot.
    """

    root:  int                             = NIL
    nodes: Tuple[Optional[TreeNode], ...]  = ()

    # -- lookup --
    def get(self, node_id: int) -> Optional[TreeNode]:
        if 0 <= node_id < len(self.nodes):
            return self.nodes[node_id]
        return None

    def find(self, value: int) -> Optional[TreeNode]:
        """Descend from the root looking for `value`."""
        cur = self.get(self.root)
        while cur is not None:
            if value == cur.value:
                return cur
            cur = self.get(cur.left if value < cur.value else cur.right)
        return None

    @property
    def is_empty(self) -> bool:
        return self.root == NIL

    def __len__(self) -> int:
        return sum(1 for n in self.nodes if n is not None)

    # -- traversal --
    def inorder(self) -> List[TreeNode]:
        out: List[TreeNode] = []
        stack: List[TreeNode] = []
        cur = self.get(self.root)
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = self.get(cur.left)
            cur = stack.pop()
            out.append(cur)
            cur = self.get(cur.right)
        return out

    def values(self) -> List[int]:
        return [n.value for n in self.inorder()]

    def live_nodes(self) -> Iterator[TreeNode]:
        return (n for n in self.nodes if n is not None)

    # -- shape --
    def height_of(self, node_id: int) -> int:
        node = self.get(node_id)
        return node.height if node else 0

    def balance_of(self, node_id: int) -> int:
        node = self.get(node_id)
        if node is None:
            return 0
        return self.height_of(node.left) - self.height_of(node.right)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "nodes": [
                {
                    "id": n.id, "value": n.value, "left": n.left,
                    "right": n.right, "parent": n.parent, "height": n.height,
                }
                for n in self.live_nodes()
            ],
        }


EMPTY_TREE = TreeSnapshot()


# ---------------------------------------------------------------------------
# Mutable working copy (owned by exactly one generator run)
# ---------------------------------------------------------------------------
class TreeArena:

    def __init__(self):
        self.root:   int                 = NIL
        self.value:  List[Optional[int]] = []
        self.left:   List[int]           = []
        self.right:  List[int]           = []
        self.parent: List[int]           = []
        self.height: List[int]           = []
        self.alive:  List[bool]          = []

    @classmethod
    def from_snapshot(cls, snap: Optional[TreeSnapshot]) -> "TreeArena":
        arena = cls()
        if snap is None:
            return arena
        arena.root = snap.root
        for node in snap.nodes:
            if node is None:
                arena.value.append(None)
                arena.left.append(NIL)
                arena.right.append(NIL)
                arena.parent.append(NIL)
                arena.height.append(0)
                arena.alive.append(False)
            else:
                arena.value.append(node.value)
                arena.left.append(node.left)
                arena.right.append(node.right)
                arena.parent.append(node.parent)
                arena.height.append(node.height)
                arena.alive.append(True)
        return arena

    def snapshot(self) -> TreeSnapshot:
        nodes = tuple(
            TreeNode(i, self.value[i], self.left[i], self.right[i], self.parent[i], self.height[i])
            if self.alive[i] else None
            for i in range(len(self.value))
        )
        return TreeSnapshot(root=self.root, nodes=nodes)

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------
    def new_node(self, value: int, parent: int = NIL) -> int:
        nid = len(self.value)
        self.value.append(value)
        self.left.append(NIL)
        self.right.append(NIL)
        self.parent.append(parent)
        self.height.append(1)
        self.alive.append(True)
        return nid

    def free(self, nid: int) -> None:
        self.alive[nid]  = False
        self.value[nid]  = None
        self.left[nid]   = NIL
        self.right[nid]  = NIL
        self.parent[nid] = NIL
        self.height[nid] = 0

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------
    def replace_child(self, parent: int, old: int, new: int) -> None:
        """Point whatever referenced `old` (parent slot or root) at `new`."""
        if parent == NIL:
            self.root = new
        elif self.left[parent] == old:
            self.left[parent] = new
        else:
            self.right[parent] = new
        if new != NIL:
            self.parent[new] = parent

    # ------------------------------------------------------------------
    # Heights & rotations (AVL)
    # ------------------------------------------------------------------
    def h(self, nid: int) -> int:
        return self.height[nid] if nid != NIL else 0

    def update_height(self, nid: int) -> None:
        self.height[nid] = 1 + max(self.h(self.left[nid]), self.h(self.right[nid]))

    def balance(self, nid: int) -> int:
        if nid == NIL:
            return 0
        return self.h(self.left[nid]) - self.h(self.right[nid])

    def rotate_left(self, x: int) -> int:
        """
        x                y
         \\              /
          y     →      x
         /              \\
        T                T
        Returns the new subtree root (y).  Heights of x then y are
        recomputed before returning.
        """
        y = self.right[x]
        t = self.left[y]
        self.right[x] = t
        if t != NIL:
            self.parent[t] = x
        self.replace_child(self.parent[x], x, y)
        self.left[y]   = x
        self.parent[x] = y
        self.update_height(x)
        self.update_height(y)
        return y

    def rotate_right(self, y: int) -> int:
        x = self.left[y]
        t = self.right[x]
        self.left[y] = t
        if t != NIL:
            self.parent[t] = y
        self.replace_child(self.parent[y], y, x)
        self.right[x]  = y
        self.parent[y] = x
        self.update_height(y)
        self.update_height(x)
        return x
