"""Graph node, edge and forwarded lineage context."""

from dataclasses import dataclass, field, replace

from .enums import CampaignStage, NodeKind
from .payloads import (
    AngleData,
    BigIdeaOption,
    CreativeData,
    HookData,
    HVCOOption,
    MassDesireOption,
    MechanismOption,
    Payload,
    PersonaMeta,
    StoryOption,
)

# Payload kind -> Lineage slot. Creative payloads are terminal and not forwarded.
_LINEAGE_SLOTS: dict[NodeKind, str] = {
    NodeKind.MASS_DESIRE: "mass_desire",
    NodeKind.PERSONA: "persona",
    NodeKind.STORY: "story",
    NodeKind.BIG_IDEA: "big_idea",
    NodeKind.MECHANISM: "mechanism",
    NodeKind.HOOK: "hook",
    NodeKind.HVCO: "hvco",
    NodeKind.ANGLE: "angle",
}


@dataclass(frozen=True)
class Lineage:
    """Copies of ancestor payloads carried by a node.

    Nodes forward their context to children at creation time instead of the
    orchestrator walking parent links at read time. The same structure is the
    ancestor context bundle handed to generation calls.
    """
    mass_desire: MassDesireOption | None = None
    persona: PersonaMeta | None = None
    story: StoryOption | None = None
    big_idea: BigIdeaOption | None = None
    mechanism: MechanismOption | None = None
    hook: HookData | None = None
    hvco: HVCOOption | None = None
    angle: AngleData | None = None

    def extended(self, payload: Payload | None) -> "Lineage":
        """Return a copy with `payload` stored in its slot."""
        if payload is None:
            return self
        slot = _LINEAGE_SLOTS.get(payload.kind)
        if slot is None:
            return self
        return replace(self, **{slot: payload})


@dataclass(frozen=True)
class GraphNode:
    """One creative-strategy artifact on the canvas."""

    id: str
    kind: NodeKind
    title: str
    description: str
    x: float
    y: float
    parent_id: str | None = None
    payload: Payload | None = None
    lineage: Lineage = field(default_factory=Lineage)
    loading: bool = False
    input_tokens: int = 0
    output_tokens: int = 0

    def __post_init__(self):
        if self.kind == NodeKind.ROOT:
            if self.payload is not None:
                raise ValueError("Root nodes carry no payload")
        elif self.payload is None or self.payload.kind != self.kind:
            raise ValueError(
                f"Node kind {self.kind.value} requires a matching payload, "
                f"got {type(self.payload).__name__}"
            )

    def context_bundle(self) -> Lineage:
        """Ancestor context plus this node's own payload."""
        return self.lineage.extended(self.payload)

    @property
    def creative(self) -> CreativeData | None:
        return self.payload if isinstance(self.payload, CreativeData) else None

    @property
    def stage(self) -> CampaignStage | None:
        creative = self.creative
        return creative.stage if creative else None


@dataclass(frozen=True)
class Edge:
    """Derivation link from the node a child was generated from."""
    id: str
    source: str
    target: str
