"""Project context - campaign-wide configuration read by every generation call."""

from dataclasses import dataclass, replace

from .enums import FunnelStage, LanguageRegister, MarketAwareness, StrategyMode


@dataclass(frozen=True)
class ProjectContext:
    """Campaign configuration. Frozen so in-flight calls keep the value they started with."""

    product_name: str
    product_description: str
    target_audience: str
    target_country: str = "USA"
    market_awareness: MarketAwareness = MarketAwareness.PROBLEM_AWARE
    funnel_stage: FunnelStage = FunnelStage.TOF
    language_register: LanguageRegister = LanguageRegister.CASUAL
    strategy_mode: StrategyMode = StrategyMode.DIRECT_RESPONSE
    image_model: str = "standard"   # "standard" or "pro"
    offer: str = ""
    brand_voice: str = ""

    def updated(self, **changes) -> "ProjectContext":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_PROJECT = ProjectContext(
    product_name="Lumina",
    product_description="A smart sleep mask that uses light therapy to improve sleep quality.",
    target_audience="Insomniacs and biohackers",
    target_country="USA",
    market_awareness=MarketAwareness.PROBLEM_AWARE,
    funnel_stage=FunnelStage.TOF,
    language_register=LanguageRegister.CASUAL,
    strategy_mode=StrategyMode.VISUAL_IMPULSE,
    image_model="standard",
)
