"""Data models."""

from .enums import (
    FORMAT_GROUPS,
    CampaignStage,
    CreativeFormat,
    FunnelStage,
    LanguageRegister,
    MarketAwareness,
    NodeKind,
    StrategyMode,
    TestingTier,
)
from .node import Edge, GraphNode, Lineage
from .payloads import (
    AdCopy,
    AngleData,
    BigIdeaOption,
    CreativeConcept,
    CreativeData,
    CreativeStrategy,
    HookData,
    HVCOOption,
    MassDesireOption,
    MechanismOption,
    Payload,
    PerformancePrediction,
    PersonaMeta,
    StoryOption,
)
from .project import DEFAULT_PROJECT, ProjectContext
from .result import CarouselResult, GenResult, ImageResult

__all__ = [
    "FORMAT_GROUPS",
    "CampaignStage",
    "CreativeFormat",
    "FunnelStage",
    "LanguageRegister",
    "MarketAwareness",
    "NodeKind",
    "StrategyMode",
    "TestingTier",
    "Edge",
    "GraphNode",
    "Lineage",
    "AdCopy",
    "AngleData",
    "BigIdeaOption",
    "CreativeConcept",
    "CreativeData",
    "CreativeStrategy",
    "HookData",
    "HVCOOption",
    "MassDesireOption",
    "MechanismOption",
    "Payload",
    "PerformancePrediction",
    "PersonaMeta",
    "StoryOption",
    "DEFAULT_PROJECT",
    "ProjectContext",
    "CarouselResult",
    "GenResult",
    "ImageResult",
]
