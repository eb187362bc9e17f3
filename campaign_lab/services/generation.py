"""Generation service - every call the campaign graph makes to the AI backends.

Text steps (strategy research, angles, ad copy, predictions) go through the
LLM client as JSON calls; visuals go through Gemini. Every method returns a
GenResult carrying the call's token usage. Any backend or parse failure is
raised as GenerationError.
"""

import json
import logging
from typing import Any, Callable, TypeVar

from ..clients.gemini import GeminiClient
from ..clients.llm import LLMClient, LLMResponse
from ..models import (
    AngleData,
    BigIdeaOption,
    CarouselResult,
    CreativeConcept,
    CreativeFormat,
    CreativeStrategy,
    GenResult,
    GraphNode,
    HookData,
    HVCOOption,
    ImageResult,
    Lineage,
    MassDesireOption,
    MechanismOption,
    PerformancePrediction,
    PersonaMeta,
    ProjectContext,
    StoryOption,
)
from ..utils import extract_json, to_data_url
from .prompts import (
    awareness_visual_logic,
    context_lines,
    format_instruction,
    format_visual_guide,
    load_prompt,
    project_brief,
    strategy_instruction,
    style_instruction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CAROUSEL_SLIDES = ("Hook slide", "Proof slide", "Offer slide")


class GenerationError(Exception):
    """A generation call failed (backend error, quota, or unusable output)."""
    pass


class GenerationService:
    """Typed generation calls used by the campaign orchestrator."""

    def __init__(self, llm: LLMClient, gemini: GeminiClient):
        self.llm = llm
        self.gemini = gemini

    # ===== Strategy research =====

    async def generate_mass_desires(self, project: ProjectContext) -> GenResult[list[MassDesireOption]]:
        return await self._generate_items(
            "mass_desires", project_brief(project), MassDesireOption.from_dict, "MASS_DESIRES"
        )

    async def generate_personas(self, project: ProjectContext) -> GenResult[list[PersonaMeta]]:
        return await self._generate_items(
            "personas", project_brief(project), PersonaMeta.from_dict, "PERSONAS"
        )

    async def generate_story_research(self, project: ProjectContext) -> GenResult[list[StoryOption]]:
        return await self._generate_items(
            "story_research", project_brief(project), StoryOption.from_dict, "STORIES"
        )

    async def generate_express_angles(self, project: ProjectContext) -> GenResult[list[AngleData]]:
        return await self._generate_items(
            "express_angles", project_brief(project), AngleData.from_dict, "EXPRESS_ANGLES"
        )

    async def generate_big_ideas(
        self, project: ProjectContext, story: StoryOption
    ) -> GenResult[list[BigIdeaOption]]:
        lines = project_brief(project) + [
            "",
            f"Story: {story.title}",
            f"Narrative: {story.narrative}",
        ]
        return await self._generate_items("big_ideas", lines, BigIdeaOption.from_dict, "BIG_IDEAS")

    async def generate_mechanisms(
        self, project: ProjectContext, big_idea: BigIdeaOption
    ) -> GenResult[list[MechanismOption]]:
        lines = project_brief(project) + [
            "",
            f"Big Idea: {big_idea.headline}",
            f"Concept: {big_idea.concept}",
        ]
        return await self._generate_items("mechanisms", lines, MechanismOption.from_dict, "MECHANISMS")

    async def generate_hooks(
        self,
        project: ProjectContext,
        big_idea: BigIdeaOption,
        mechanism: MechanismOption,
        story: StoryOption,
    ) -> GenResult[list[HookData]]:
        lines = project_brief(project) + [
            "",
            f"Story: {story.narrative}",
            f"Big Idea: {big_idea.headline} - {big_idea.concept}",
            f"Mechanism: {mechanism.scientific_pseudo} - {mechanism.ums}",
        ]
        return await self._generate_items(
            "hooks", lines, lambda item: HookData(text=str(item).strip()), "HOOKS"
        )

    async def generate_angles(
        self,
        project: ProjectContext,
        persona_name: str,
        persona_motivation: str,
        mass_desire: MassDesireOption | None = None,
    ) -> GenResult[list[AngleData]]:
        lines = project_brief(project) + [
            "",
            f"Persona: {persona_name}",
            f"Motivation: {persona_motivation}",
        ]
        if mass_desire:
            lines.append(f"Mass Desire: {mass_desire.headline} - {mass_desire.description}")
        return await self._generate_items("angles", lines, AngleData.from_dict, "ANGLES")

    async def generate_hvco_ideas(self, project: ProjectContext, pain: str) -> GenResult[list[HVCOOption]]:
        lines = project_brief(project) + ["", f"Main Pain: {pain}"]
        return await self._generate_items("hvco", lines, HVCOOption.from_dict, "HVCO")

    async def generate_sales_letter(
        self,
        project: ProjectContext,
        story: StoryOption,
        big_idea: BigIdeaOption,
        mechanism: MechanismOption,
        hook: str,
    ) -> GenResult[str]:
        """Long-form sales letter from the full story -> idea -> mechanism -> hook chain."""
        lines = [
            f"Target Country: {project.target_country}",
            "",
            f'HOOK: "{hook}"',
            f'STORY: "{story.narrative}"',
            f'THE SHIFT (Big Idea): "{big_idea.headline}" - "{big_idea.concept}"',
            f'THE SOLUTION (Mechanism): "{mechanism.scientific_pseudo}" - "{mechanism.ums}"',
            f"OFFER: {project.offer or 'Special offer'} for {project.product_name}",
            "",
            "PRODUCT DETAILS:",
            project.product_description,
        ]
        try:
            response = await self.llm.call(load_prompt("sales_letter"), "\n".join(lines), label="SALES_LETTER")
        except Exception as e:
            raise GenerationError(f"SALES_LETTER call failed: {e}") from e

        if not response.text:
            raise GenerationError("Sales letter came back empty")
        return GenResult(response.text, response.input_tokens, response.output_tokens)

    # ===== Creatives =====

    async def generate_creative_strategy(
        self,
        project: ProjectContext,
        bundle: Lineage,
        angle: str,
        fmt: CreativeFormat,
        is_hvco: bool = False,
    ) -> GenResult[CreativeStrategy]:
        """One-shot concept + embedded text + ad copy for a single format."""
        lines = project_brief(project) + [
            "",
            strategy_instruction(project.strategy_mode),
            f"Format: {fmt.value}",
        ]
        if rule := format_instruction(fmt):
            lines.append(rule)
        if is_hvco:
            lines.append("This creative promotes a free lead magnet download, not a direct purchase.")
        lines += ["", f'Winning Hook/Angle: "{angle}"'] + context_lines(bundle)

        data, response = await self._call_json("creative_strategy", lines, "STRATEGY")
        if not isinstance(data, dict):
            raise GenerationError(f"Expected a JSON object for creative strategy, got {type(data).__name__}")

        strategy = CreativeStrategy.from_dict(data)
        if not strategy.ad_copy.headline or not strategy.concept.visual_scene:
            raise GenerationError("Creative strategy is missing headline or visual scene")

        return GenResult(strategy, response.input_tokens, response.output_tokens)

    async def generate_creative_image(
        self,
        project: ProjectContext,
        bundle: Lineage,
        angle: str,
        fmt: CreativeFormat,
        concept: CreativeConcept,
        aspect_ratio: str = "1:1",
        embedded_text: str | None = None,
    ) -> GenResult[ImageResult]:
        """Write the image prompt, then render it."""
        text = embedded_text if embedded_text is not None else concept.embedded_text
        prompt, prompt_in, prompt_out = await self._write_image_prompt(
            project, bundle, angle, fmt, concept, aspect_ratio, text
        )

        try:
            image = await self.gemini.generate_image(prompt, aspect_ratio, tier=project.image_model)
        except Exception as e:
            raise GenerationError(f"Image generation failed for {fmt.value}: {e}") from e

        return GenResult(
            ImageResult(image_url=to_data_url(image.image_bytes, image.mime_type), final_prompt=prompt),
            input_tokens=prompt_in + image.input_tokens,
            output_tokens=prompt_out + image.output_tokens,
        )

    async def generate_carousel_slides(
        self,
        project: ProjectContext,
        bundle: Lineage,
        angle: str,
        fmt: CreativeFormat,
        concept: CreativeConcept,
        aspect_ratio: str = "1:1",
    ) -> GenResult[CarouselResult]:
        """Render one image per carousel slide, sharing the concept's visual DNA."""
        image_urls = []
        prompts = []
        input_tokens = 0
        output_tokens = 0

        for i, role in enumerate(CAROUSEL_SLIDES, start=1):
            prompt = (
                f"{fmt.value}. Slide {i} of {len(CAROUSEL_SLIDES)} ({role}). "
                f"{concept.visual_scene}. {concept.visual_style}. "
                f"{format_visual_guide(fmt)} "
                f'Angle: "{angle}". '
                f"{concept.congruence_rationale or 'Visual evidence of the claim'}."
            )
            if i == 1 and concept.embedded_text:
                prompt += f' RENDER TEXT: "{concept.embedded_text}"'
            try:
                image = await self.gemini.generate_image(prompt, aspect_ratio, tier=project.image_model)
            except Exception as e:
                raise GenerationError(f"Carousel slide {i} failed for {fmt.value}: {e}") from e

            image_urls.append(to_data_url(image.image_bytes, image.mime_type))
            prompts.append(prompt)
            input_tokens += image.input_tokens
            output_tokens += image.output_tokens

        return GenResult(CarouselResult(image_urls=image_urls, prompts=prompts), input_tokens, output_tokens)

    async def predict_creative_performance(
        self, project: ProjectContext, node: GraphNode
    ) -> GenResult[PerformancePrediction]:
        creative = node.creative
        if creative is None:
            raise GenerationError(f"Node {node.id} is not a creative")

        lines = project_brief(project) + [
            "",
            f"Format: {creative.format.value}",
            f"Angle: {creative.angle}",
            f"Headline: {creative.ad_copy.headline}",
            f"Primary Text: {creative.ad_copy.primary_text}",
            f"CTA: {creative.ad_copy.cta}",
            f"Visual Scene: {creative.concept.visual_scene}",
            f"Embedded Text: {creative.concept.embedded_text}",
        ]
        data, response = await self._call_json("prediction", lines, "PREDICTION")
        if not isinstance(data, dict):
            raise GenerationError("Expected a JSON object for performance prediction")

        return GenResult(PerformancePrediction.from_dict(data), response.input_tokens, response.output_tokens)

    # ===== Internals =====

    async def _call_json(self, prompt_name: str, lines: list[str], label: str) -> tuple[Any, LLMResponse]:
        """Call the LLM for a JSON response and parse it."""
        system_prompt = load_prompt(prompt_name)
        user_message = "\n".join(lines)

        try:
            response = await self.llm.call(system_prompt, user_message, label=label, json_output=True)
        except Exception as e:
            raise GenerationError(f"{label} call failed: {e}") from e

        try:
            return extract_json(response.text), response
        except ValueError as e:
            raise GenerationError(f"{label} returned unparseable output: {e}") from e

    async def _generate_items(
        self,
        prompt_name: str,
        lines: list[str],
        parse: Callable[[Any], T],
        label: str,
    ) -> GenResult[list[T]]:
        """Call the LLM for an {"items": [...]} response and parse each item."""
        data, response = await self._call_json(prompt_name, lines, label)

        items = data.get("items") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise GenerationError(f"{label} response has no item list")

        try:
            parsed = [parse(item) for item in items]
        except (AttributeError, TypeError) as e:
            raise GenerationError(f"{label} returned malformed items: {e}") from e

        return GenResult(parsed, response.input_tokens, response.output_tokens)

    async def _write_image_prompt(
        self,
        project: ProjectContext,
        bundle: Lineage,
        angle: str,
        fmt: CreativeFormat,
        concept: CreativeConcept,
        aspect_ratio: str,
        embedded_text: str,
    ) -> tuple[str, int, int]:
        """Have the LLM write the image prompt. Falls back to a template on failure."""
        awareness = awareness_visual_logic(project.market_awareness)
        strategic_context = {
            "campaign": {
                "product": project.product_name,
                "brandVoice": project.brand_voice or "Adaptable",
                "mechanismUMS": bundle.mechanism.ums if bundle.mechanism else None,
            },
            "persona": {
                "identity": bundle.persona.profile if bundle.persona else "General Audience",
                "visceralContext": ", ".join(bundle.persona.visceral_symptoms) if bundle.persona else None,
            },
            "narrative": {
                "angle": angle,
                "textToRender": embedded_text,
                "specificAction": concept.visual_scene,
                "visualMood": concept.visual_style,
                "congruenceGoal": concept.congruence_rationale,
            },
            "execution": {
                "format": fmt.value,
                "formatRule": format_visual_guide(fmt),
                "awarenessLogic": awareness,
                "culture": f"Set in {project.target_country}",
                "aspectRatio": aspect_ratio,
            },
        }
        lines = [
            "STRATEGIC CONTEXT:",
            json.dumps(strategic_context, indent=2),
            "",
            f"MARKET AWARENESS RULE: {awareness}",
            style_instruction(project, fmt),
            f'TEXT RENDERING: The image MUST include the text "{embedded_text}".',
        ]

        try:
            response = await self.llm.call(load_prompt("image_prompt"), "\n".join(lines), label="IMAGE_PROMPT")
            if response.text:
                return response.text, response.input_tokens, response.output_tokens
        except Exception as e:
            logger.warning(f"Failed to write image prompt, using template: {e}")

        fallback = (
            f"{fmt.value} style. {concept.visual_scene}. {concept.visual_style}. "
            f"Set in {project.target_country}. RENDER TEXT: \"{embedded_text}\""
        )
        return fallback, 0, 0
