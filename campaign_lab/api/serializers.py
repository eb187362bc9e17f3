"""Serializers for graph state sent to the canvas."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from ..engine import CampaignOrchestrator, available_actions
from ..models import Edge, GraphNode, Lineage, ProjectContext


def to_camel(name: str) -> str:
    """snake_case -> camelCase"""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def serialize_payload(payload: Any) -> Any:
    """Recursively serialize a payload dataclass with camelCase keys."""
    if payload is None:
        return None
    if isinstance(payload, Enum):
        return payload.value
    if is_dataclass(payload):
        return {
            to_camel(f.name): serialize_payload(getattr(payload, f.name))
            for f in fields(payload)
        }
    if isinstance(payload, (list, tuple)):
        return [serialize_payload(item) for item in payload]
    return payload


def serialize_lineage(lineage: Lineage) -> dict:
    """Only the slots that are filled."""
    return {
        to_camel(f.name): serialize_payload(getattr(lineage, f.name))
        for f in fields(lineage)
        if getattr(lineage, f.name) is not None
    }


def serialize_node(node: GraphNode) -> dict:
    return {
        "id": node.id,
        "type": node.kind.value,
        "title": node.title,
        "description": node.description,
        "x": node.x,
        "y": node.y,
        "parentId": node.parent_id,
        "isLoading": node.loading,
        "inputTokens": node.input_tokens,
        "outputTokens": node.output_tokens,
        "data": serialize_payload(node.payload),
        "lineage": serialize_lineage(node.lineage),
        "actions": available_actions(node),
    }


def serialize_edge(edge: Edge) -> dict:
    return {"id": edge.id, "source": edge.source, "target": edge.target}


def serialize_project(project: ProjectContext) -> dict:
    return serialize_payload(project)


def serialize_graph(session: CampaignOrchestrator) -> dict:
    """Full session state for rendering."""
    return {
        "nodes": [serialize_node(n) for n in session.store.nodes],
        "edges": [serialize_edge(e) for e in session.store.edges],
        "project": serialize_project(session.project),
        "vault": [n.id for n in session.vault_nodes()],
        "simulating": session.simulating,
    }
