"""Context resolution for generation calls."""

from ..models import GraphNode, Lineage, NodeKind


def resolve_angle(node: GraphNode) -> str:
    """Pick the single text that drives the next creative for this node.

    Always returns a string; falls back to the node title.
    """
    payload = node.payload
    if node.kind == NodeKind.ANGLE and payload.hook:
        return payload.hook
    if node.kind == NodeKind.HOOK:
        return payload.text
    if node.kind == NodeKind.BIG_IDEA:
        return f"Show concept: {payload.concept}"
    if node.kind == NodeKind.MECHANISM:
        return f"Show the action of: {payload.ums}"
    if node.kind == NodeKind.HVCO:
        return payload.title
    if node.kind == NodeKind.STORY:
        return payload.title
    return node.title


def build_bundle(node: GraphNode) -> Lineage:
    """Ancestor context bundle for a generation call sourced at `node`."""
    return node.context_bundle()
