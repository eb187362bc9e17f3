"""Fan-out action registry.

A fan action makes one generation call from a source node and turns each
returned item into a child node. Actions that act on an existing creative
(regenerate, promote, analyze) and the multi-format creative action live on
the orchestrator instead.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..models import (
    GenResult,
    GraphNode,
    NodeKind,
    ProjectContext,
    StrategyMode,
)
from ..services import GenerationService
from .context import build_bundle
from .layout import FanLayout

_ACTIONS: dict[str, "FanAction"] = {}


def register(name: str):
    """Register a fan action under the event name the canvas sends.

    One shared instance is kept per action; actions hold no state.
    """
    def decorator(cls):
        if name in _ACTIONS:
            raise ValueError(f"Action already registered: {name}")
        cls.name = name
        _ACTIONS[name] = cls()
        return cls
    return decorator


def get_action(name: str) -> "FanAction":
    """Look up a fan action by event name.

    Raises:
        ValueError: If no action has that name.
    """
    try:
        return _ACTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown action: {name}") from None


def list_actions() -> list[str]:
    return list(_ACTIONS)


def available_actions(node: GraphNode) -> list[str]:
    """Fan actions whose preconditions the node meets, in registration order."""
    return [name for name, action in _ACTIONS.items() if action.is_available(node)]


class FanAction(ABC):
    """Base class for actions that fan out child nodes."""

    name: ClassVar[str] = ""
    child_kind: ClassVar[NodeKind]
    LAYOUT: ClassVar[FanLayout] = FanLayout()

    def is_available(self, node: GraphNode) -> bool:
        """Whether the source node carries the context this action needs."""
        return node.kind != NodeKind.CREATIVE

    def prepare_project(self, project: ProjectContext) -> ProjectContext:
        """Project snapshot this action's call runs with."""
        return project

    @abstractmethod
    async def generate(
        self, service: GenerationService, project: ProjectContext, node: GraphNode
    ) -> GenResult[list[Any]]:
        """Make the generation call."""
        pass

    @abstractmethod
    def describe(self, item: Any) -> tuple[str, str]:
        """(title, description) for the child built from `item`."""
        pass


@register("generate_desires")
class GenerateDesires(FanAction):
    child_kind = NodeKind.MASS_DESIRE

    async def generate(self, service, project, node):
        return await service.generate_mass_desires(project)

    def describe(self, item):
        return item.headline, item.description


@register("expand_personas")
class ExpandPersonas(FanAction):
    child_kind = NodeKind.PERSONA

    async def generate(self, service, project, node):
        return await service.generate_personas(project)

    def describe(self, item):
        return item.name, item.profile


@register("start_story_flow")
class StartStoryFlow(FanAction):
    child_kind = NodeKind.STORY
    LAYOUT = FanLayout(spacing=300)

    async def generate(self, service, project, node):
        return await service.generate_story_research(project)

    def describe(self, item):
        return item.title, item.narrative


@register("start_express_flow")
class StartExpressFlow(FanAction):
    """Promo angles straight from the root, always in hard-sell mode."""

    child_kind = NodeKind.ANGLE
    LAYOUT = FanLayout(spacing=200)

    def prepare_project(self, project):
        return project.updated(strategy_mode=StrategyMode.HARD_SELL)

    async def generate(self, service, project, node):
        return await service.generate_express_angles(project)

    def describe(self, item):
        return item.headline, f"{item.testing_tier.value}: {item.hook}"


@register("generate_big_ideas")
class GenerateBigIdeas(FanAction):
    child_kind = NodeKind.BIG_IDEA
    LAYOUT = FanLayout(spacing=300)

    def is_available(self, node):
        return super().is_available(node) and build_bundle(node).story is not None

    async def generate(self, service, project, node):
        return await service.generate_big_ideas(project, build_bundle(node).story)

    def describe(self, item):
        return item.headline, item.concept


@register("generate_mechanisms")
class GenerateMechanisms(FanAction):
    child_kind = NodeKind.MECHANISM
    LAYOUT = FanLayout(spacing=300)

    def is_available(self, node):
        return super().is_available(node) and build_bundle(node).big_idea is not None

    async def generate(self, service, project, node):
        return await service.generate_mechanisms(project, build_bundle(node).big_idea)

    def describe(self, item):
        return item.scientific_pseudo, f"UMP: {item.ump} | UMS: {item.ums}"


@register("generate_hooks")
class GenerateHooks(FanAction):
    child_kind = NodeKind.HOOK
    # Five hooks come back, packed tighter and centered on the third
    LAYOUT = FanLayout(spacing=150, centering=2)

    def is_available(self, node):
        bundle = build_bundle(node)
        return super().is_available(node) and all((bundle.mechanism, bundle.big_idea, bundle.story))

    async def generate(self, service, project, node):
        bundle = build_bundle(node)
        return await service.generate_hooks(project, bundle.big_idea, bundle.mechanism, bundle.story)

    def describe(self, item):
        return "Viral Hook", item.text


@register("expand_angles")
class ExpandAngles(FanAction):
    """Angles from a persona, a mass desire, or any other strategy node."""

    child_kind = NodeKind.ANGLE

    async def generate(self, service, project, node):
        bundle = build_bundle(node)
        motivation = bundle.persona.motivation if bundle.persona else "General Public"
        return await service.generate_angles(project, node.title, motivation, bundle.mass_desire)

    def describe(self, item):
        return item.headline, f"{item.testing_tier.value}: {item.hook}"


@register("generate_hvco")
class GenerateHVCO(FanAction):
    child_kind = NodeKind.HVCO
    LAYOUT = FanLayout(spacing=200)

    def is_available(self, node):
        return super().is_available(node) and build_bundle(node).persona is not None

    async def generate(self, service, project, node):
        return await service.generate_hvco_ideas(project, build_bundle(node).persona.primary_pain)

    def describe(self, item):
        return item.title, item.hook
