"""In-memory graph store - the only mutation surface for session state."""

from dataclasses import replace
from typing import Callable

from ..models import Edge, GraphNode
from ..utils import new_id


class NodeNotFoundError(KeyError):
    """No node with the given id exists in the store."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Node not found: {self.node_id}"


class GraphStore:
    """Ordered nodes and edges for one session.

    Nodes are immutable records; every write swaps in a new record so a
    reader never observes a half-applied update. Nodes are never deleted and
    edges are append-only.
    """

    def __init__(self, nodes: list[GraphNode] | None = None):
        self._nodes: dict[str, GraphNode] = {}
        self._edges: list[Edge] = []
        for node in nodes or []:
            self.add_node(node, node.parent_id)

    @property
    def nodes(self) -> list[GraphNode]:
        """All nodes in insertion order."""
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get(self, node_id: str) -> GraphNode | None:
        """Return the node, or None if it does not exist."""
        return self._nodes.get(node_id)

    def require(self, node_id: str) -> GraphNode:
        """Return the node or raise NodeNotFoundError."""
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def find(self, predicate: Callable[[GraphNode], bool]) -> list[GraphNode]:
        return [node for node in self._nodes.values() if predicate(node)]

    def children_of(self, node_id: str) -> list[GraphNode]:
        child_ids = [edge.target for edge in self._edges if edge.source == node_id]
        return [self._nodes[child_id] for child_id in child_ids]

    def add_node(self, node: GraphNode, parent_id: str | None = None) -> GraphNode:
        """Append a node and, when parent_id is given, one edge parent -> node."""
        if node.id in self._nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        if node.parent_id != parent_id:
            raise ValueError(
                f"Node {node.id} declares parent {node.parent_id!r} but was added under {parent_id!r}"
            )
        if parent_id is not None and parent_id not in self._nodes:
            raise NodeNotFoundError(parent_id)

        self._nodes[node.id] = node
        if parent_id is not None:
            self._edges.append(Edge(id=new_id(), source=parent_id, target=node.id))
        return node

    def update_node(self, node_id: str, **fields) -> GraphNode:
        """Shallow-merge fields into the node. Unspecified fields are preserved."""
        if "id" in fields:
            raise ValueError("Node id is immutable")
        node = self.require(node_id)
        updated = replace(node, **fields)
        self._nodes[node_id] = updated
        return updated

    def move_node(self, node_id: str, x: float, y: float) -> GraphNode:
        """Reposition a node. Only x and y change."""
        return self.update_node(node_id, x=x, y=y)
