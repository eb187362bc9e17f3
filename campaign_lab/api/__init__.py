"""Presentation-side serialization."""

from .serializers import serialize_edge, serialize_graph, serialize_node, serialize_payload

__all__ = ["serialize_edge", "serialize_graph", "serialize_node", "serialize_payload"]
