"""Kind-specific node payloads.

Each payload class is one variant of the node payload union and declares
the node kind it belongs to. Fields are mandatory within a variant.
`from_dict` parses the camelCase JSON the generation prompts ask for.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .enums import CampaignStage, CreativeFormat, NodeKind, TestingTier


def _text(data: dict[str, Any], key: str, default: str = "") -> str:
    return str(data.get(key) or default).strip()


def _text_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key) or []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    return [str(v).strip() for v in value if str(v).strip()]


def _tier(value: Any) -> TestingTier:
    try:
        return TestingTier(str(value).strip())
    except ValueError:
        return TestingTier.TIER_1


@dataclass(frozen=True)
class MassDesireOption:
    kind: ClassVar[NodeKind] = NodeKind.MASS_DESIRE

    headline: str
    description: str
    core_desire: str = ""
    emotional_driver: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MassDesireOption":
        return cls(
            headline=_text(data, "headline"),
            description=_text(data, "description"),
            core_desire=_text(data, "coreDesire"),
            emotional_driver=_text(data, "emotionalDriver"),
        )


@dataclass(frozen=True)
class PersonaMeta:
    kind: ClassVar[NodeKind] = NodeKind.PERSONA

    name: str
    profile: str
    motivation: str = "General Public"
    visceral_symptoms: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonaMeta":
        return cls(
            name=_text(data, "name"),
            profile=_text(data, "profile"),
            motivation=_text(data, "motivation", "General Public"),
            visceral_symptoms=_text_list(data, "visceralSymptoms"),
        )

    @property
    def primary_pain(self) -> str:
        return self.visceral_symptoms[0] if self.visceral_symptoms else "General Pain"


@dataclass(frozen=True)
class StoryOption:
    kind: ClassVar[NodeKind] = NodeKind.STORY

    title: str
    narrative: str
    emotional_theme: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoryOption":
        return cls(
            title=_text(data, "title"),
            narrative=_text(data, "narrative"),
            emotional_theme=_text(data, "emotionalTheme"),
        )


@dataclass(frozen=True)
class BigIdeaOption:
    kind: ClassVar[NodeKind] = NodeKind.BIG_IDEA

    headline: str
    concept: str
    target_belief: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BigIdeaOption":
        return cls(
            headline=_text(data, "headline"),
            concept=_text(data, "concept"),
            target_belief=_text(data, "targetBelief"),
        )


@dataclass(frozen=True)
class MechanismOption:
    kind: ClassVar[NodeKind] = NodeKind.MECHANISM

    scientific_pseudo: str
    ump: str   # unique mechanism of the problem
    ums: str   # unique mechanism of the solution

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MechanismOption":
        return cls(
            scientific_pseudo=_text(data, "scientificPseudo"),
            ump=_text(data, "ump"),
            ums=_text(data, "ums"),
        )


@dataclass(frozen=True)
class HookData:
    kind: ClassVar[NodeKind] = NodeKind.HOOK

    text: str
    sales_letter: str = ""


@dataclass(frozen=True)
class HVCOOption:
    kind: ClassVar[NodeKind] = NodeKind.HVCO

    title: str
    hook: str
    format: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HVCOOption":
        return cls(
            title=_text(data, "title"),
            hook=_text(data, "hook"),
            format=_text(data, "format"),
        )


@dataclass(frozen=True)
class AngleData:
    kind: ClassVar[NodeKind] = NodeKind.ANGLE

    headline: str
    hook: str
    testing_tier: TestingTier = TestingTier.TIER_1
    rationale: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AngleData":
        return cls(
            headline=_text(data, "headline"),
            hook=_text(data, "hook"),
            testing_tier=_tier(data.get("testingTier")),
            rationale=_text(data, "rationale"),
        )


@dataclass(frozen=True)
class AdCopy:
    headline: str
    primary_text: str
    cta: str


@dataclass(frozen=True)
class CreativeConcept:
    visual_scene: str
    visual_style: str
    embedded_text: str
    rationale: str = ""
    congruence_rationale: str = ""


@dataclass(frozen=True)
class CreativeStrategy:
    """Output of the strategy phase: concept plus ad copy in one shot."""
    concept: CreativeConcept
    ad_copy: AdCopy

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreativeStrategy":
        return cls(
            concept=CreativeConcept(
                visual_scene=_text(data, "visualScene"),
                visual_style=_text(data, "visualStyle"),
                embedded_text=_text(data, "embeddedText"),
                rationale=_text(data, "rationale"),
                congruence_rationale=_text(data, "congruenceRationale"),
            ),
            ad_copy=AdCopy(
                headline=_text(data, "headline"),
                primary_text=_text(data, "primaryText"),
                cta=_text(data, "cta", "Shop Now"),
            ),
        )


@dataclass(frozen=True)
class PerformancePrediction:
    score: int
    verdict: str
    reasoning: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PerformancePrediction":
        try:
            score = int(data.get("score") or 0)
        except (TypeError, ValueError):
            score = 0
        return cls(
            score=max(0, min(100, score)),
            verdict=_text(data, "verdict"),
            reasoning=_text(data, "reasoning"),
        )


@dataclass(frozen=True)
class CreativeData:
    kind: ClassVar[NodeKind] = NodeKind.CREATIVE

    format: CreativeFormat
    ad_copy: AdCopy
    concept: CreativeConcept
    angle: str
    image_url: str | None = None
    carousel_images: list[str] | None = None
    final_generation_prompt: str = ""
    aspect_ratio: str = "1:1"
    stage: CampaignStage = CampaignStage.TESTING
    is_winning: bool = False
    prediction: PerformancePrediction | None = None


Payload = (
    MassDesireOption
    | PersonaMeta
    | StoryOption
    | BigIdeaOption
    | MechanismOption
    | HookData
    | HVCOOption
    | AngleData
    | CreativeData
)
