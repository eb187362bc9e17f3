"""Shared fixtures: an in-memory generation service and node builders."""

import pytest

from campaign_lab.engine import CampaignOrchestrator, GraphStore
from campaign_lab.models import (
    AdCopy,
    AngleData,
    BigIdeaOption,
    CarouselResult,
    CreativeConcept,
    CreativeData,
    CreativeFormat,
    CreativeStrategy,
    DEFAULT_PROJECT,
    GenResult,
    GraphNode,
    HookData,
    HVCOOption,
    ImageResult,
    MassDesireOption,
    MechanismOption,
    NodeKind,
    PerformancePrediction,
    PersonaMeta,
    StoryOption,
)
from campaign_lab.services import GenerationError

IN_TOKENS = 120
OUT_TOKENS = 45


def personas(n: int = 3) -> list[PersonaMeta]:
    return [
        PersonaMeta(
            name=f"Persona {i}",
            profile=f"Profile {i}",
            motivation=f"Motivation {i}",
            visceral_symptoms=[f"Pain {i}", "Tossing and turning"],
        )
        for i in range(n)
    ]


class StubGenerationService:
    """Deterministic stand-in for GenerationService.

    Every call is recorded in `calls` as (method name, args). Formats in
    `fail_formats` raise GenerationError from the strategy phase.
    """

    def __init__(self, count: int = 3, input_tokens: int = IN_TOKENS, output_tokens: int = OUT_TOKENS):
        self.count = count
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens
        self.calls: list[tuple[str, tuple]] = []
        self.fail_formats: set[CreativeFormat] = set()
        self.fail_all = False
        self.image_url: str | None = "data:image/png;base64,AAAA"
        self.score = 72

    def _result(self, name, args, data):
        self.calls.append((name, args))
        if self.fail_all:
            raise GenerationError(f"{name} failed")
        return GenResult(data, self.input_tokens, self.output_tokens)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def generate_mass_desires(self, project):
        items = [MassDesireOption(headline=f"Desire {i}", description=f"Want {i}") for i in range(self.count)]
        return self._result("generate_mass_desires", (project,), items)

    async def generate_personas(self, project):
        return self._result("generate_personas", (project,), personas(self.count))

    async def generate_story_research(self, project):
        items = [StoryOption(title=f"Story {i}", narrative=f"Narrative {i}") for i in range(self.count)]
        return self._result("generate_story_research", (project,), items)

    async def generate_express_angles(self, project):
        items = [AngleData(headline=f"Promo {i}", hook=f"50% off {i}") for i in range(self.count)]
        return self._result("generate_express_angles", (project,), items)

    async def generate_big_ideas(self, project, story):
        items = [BigIdeaOption(headline=f"Idea {i}", concept=f"Concept {i}") for i in range(self.count)]
        return self._result("generate_big_ideas", (project, story), items)

    async def generate_mechanisms(self, project, big_idea):
        items = [
            MechanismOption(scientific_pseudo=f"Mech {i}", ump=f"UMP {i}", ums=f"UMS {i}")
            for i in range(self.count)
        ]
        return self._result("generate_mechanisms", (project, big_idea), items)

    async def generate_hooks(self, project, big_idea, mechanism, story):
        items = [HookData(text=f"Hook {i}") for i in range(self.count)]
        return self._result("generate_hooks", (project, big_idea, mechanism, story), items)

    async def generate_angles(self, project, persona_name, persona_motivation, mass_desire=None):
        items = [AngleData(headline=f"Angle {i}", hook=f"Hook line {i}") for i in range(self.count)]
        return self._result("generate_angles", (project, persona_name, persona_motivation, mass_desire), items)

    async def generate_hvco_ideas(self, project, pain):
        items = [HVCOOption(title=f"Guide {i}", hook=f"Free {i}") for i in range(self.count)]
        return self._result("generate_hvco_ideas", (project, pain), items)

    async def generate_sales_letter(self, project, story, big_idea, mechanism, hook):
        return self._result("generate_sales_letter", (project, story, big_idea, mechanism, hook), f"Letter for {hook}")

    async def generate_creative_strategy(self, project, bundle, angle, fmt, is_hvco=False):
        self.calls.append(("generate_creative_strategy", (project, bundle, angle, fmt, is_hvco)))
        if self.fail_all or fmt in self.fail_formats:
            raise GenerationError(f"Strategy failed for {fmt.value}")
        strategy = CreativeStrategy(
            concept=CreativeConcept(
                visual_scene=f"Scene for {fmt.value}",
                visual_style="Raw",
                embedded_text="Sleep again",
            ),
            ad_copy=AdCopy(headline=f"Headline {fmt.value}", primary_text="Body", cta="Shop Now"),
        )
        return GenResult(strategy, self.input_tokens, self.output_tokens)

    async def generate_creative_image(self, project, bundle, angle, fmt, concept, aspect_ratio="1:1", embedded_text=None):
        data = ImageResult(image_url=self.image_url, final_prompt=f"Prompt {fmt.value} {aspect_ratio} {embedded_text}")
        return self._result("generate_creative_image", (project, bundle, angle, fmt, concept, aspect_ratio, embedded_text), data)

    async def generate_carousel_slides(self, project, bundle, angle, fmt, concept, aspect_ratio="1:1"):
        urls = [f"data:image/png;base64,SLIDE{i}" for i in range(3)]
        data = CarouselResult(image_urls=urls, prompts=[f"Slide {i}" for i in range(3)])
        return self._result("generate_carousel_slides", (project, bundle, angle, fmt, concept, aspect_ratio), data)

    async def predict_creative_performance(self, project, node):
        return self._result("predict_creative_performance", (project, node), PerformancePrediction(self.score, "Winner"))


def make_root(node_id: str = "root-1") -> GraphNode:
    return GraphNode(id=node_id, kind=NodeKind.ROOT, title="Lumina", description="Sleep mask", x=100, y=300)


def make_creative(node_id: str = "creative-1", parent_id: str = "root-1", fmt=CreativeFormat.BIG_FONT) -> GraphNode:
    return GraphNode(
        id=node_id,
        kind=NodeKind.CREATIVE,
        title="Sleep tonight",
        description="Dark bedroom",
        x=550,
        y=300,
        parent_id=parent_id,
        payload=CreativeData(
            format=fmt,
            ad_copy=AdCopy(headline="Sleep tonight", primary_text="Body copy", cta="Shop Now"),
            concept=CreativeConcept(visual_scene="Dark bedroom", visual_style="Raw", embedded_text="Sleep"),
            angle="Stop counting sheep",
            image_url="data:image/png;base64,OLD",
            final_generation_prompt="old prompt",
        ),
    )


@pytest.fixture
def stub_service():
    return StubGenerationService()


@pytest.fixture
def store():
    return GraphStore([make_root()])


@pytest.fixture
def orchestrator(store, stub_service):
    return CampaignOrchestrator(store, stub_service, DEFAULT_PROJECT)
