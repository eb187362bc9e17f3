"""Graph engine: store, layout, context resolution and action dispatch."""

from .actions import FanAction, available_actions, get_action, list_actions, register
from .context import build_bundle, resolve_angle
from .layout import FanLayout
from .orchestrator import CampaignOrchestrator, CreativeBatchError, parse_formats
from .store import GraphStore, NodeNotFoundError

__all__ = [
    "FanAction",
    "available_actions",
    "get_action",
    "list_actions",
    "register",
    "build_bundle",
    "resolve_angle",
    "FanLayout",
    "CampaignOrchestrator",
    "CreativeBatchError",
    "parse_formats",
    "GraphStore",
    "NodeNotFoundError",
]
