"""Campaign orchestrator - turns node actions into generation calls and new nodes."""

import logging
from dataclasses import replace

from ..models import (
    DEFAULT_PROJECT,
    CampaignStage,
    CreativeData,
    CreativeFormat,
    GraphNode,
    NodeKind,
    ProjectContext,
)
from ..services import GenerationError, GenerationService
from ..utils import new_id
from .actions import FanAction, get_action
from .context import build_bundle, resolve_angle
from .layout import FanLayout
from .store import GraphStore

logger = logging.getLogger(__name__)


class CreativeBatchError(GenerationError):
    """A format failed during multi-format creative generation.

    Formats before the failing one stay committed; the rest are skipped.
    """

    def __init__(self, failed_format: CreativeFormat, created_ids: list[str], cause: Exception):
        self.failed_format = failed_format
        self.created_ids = created_ids
        super().__init__(
            f"Creative generation failed on {failed_format.value} "
            f"after {len(created_ids)} created: {cause}"
        )


class CampaignOrchestrator:
    """Dispatches actions for one session.

    Owns the session's ProjectContext and writes only through the GraphStore
    it was given.
    """

    CREATIVE_LAYOUT = FanLayout(dx=450, spacing=400, centering=0)

    def __init__(
        self,
        store: GraphStore,
        service: GenerationService,
        project: ProjectContext = DEFAULT_PROJECT,
    ):
        self.store = store
        self.service = service
        self._project = project
        self.simulating = False

    @property
    def project(self) -> ProjectContext:
        return self._project

    def update_project(self, **changes) -> ProjectContext:
        """Replace project fields. Calls already in flight keep their snapshot."""
        self._project = self._project.updated(**changes)
        logger.info(f"Project updated: {', '.join(sorted(changes))}")
        return self._project

    # ===== Dispatch =====

    async def dispatch(self, action: str, node_id: str, option_id: str | None = None) -> list[GraphNode]:
        """Run an action against a node.

        Returns the nodes created (fan and creative actions) or the node
        updated in place (creative actions). Unknown nodes, unknown actions,
        unmet preconditions and nodes already loading are no-ops returning [].
        Generation failures propagate.
        """
        node = self.store.get(node_id)
        if node is None:
            logger.debug(f"Ignoring {action}: node {node_id} not found")
            return []
        if node.loading:
            logger.debug(f"Ignoring {action}: node {node_id} is busy")
            return []

        if action in ("generate_creatives", "open_format_selector"):
            formats = parse_formats(option_id)
            return await self.generate_creatives(node_id, formats)
        if action == "regenerate_creative":
            updated = await self.regenerate_creative(node_id, option_id or "1:1")
            return [updated] if updated else []
        if action == "promote_creative":
            updated = self.promote_creative(node_id)
            return [updated] if updated else []
        if action == "analyze_creative":
            updated = await self.analyze_creative(node_id)
            return [updated] if updated else []
        if action == "write_sales_letter":
            updated = await self.write_sales_letter(node_id)
            return [updated] if updated else []

        try:
            fan_action = get_action(action)
        except ValueError:
            logger.debug(f"Ignoring unknown action {action!r}")
            return []

        if not fan_action.is_available(node):
            logger.debug(f"Ignoring {action}: not available on {node.kind.value} node {node_id}")
            return []

        return await self._run_fan_action(fan_action, node)

    async def _run_fan_action(self, action: FanAction, node: GraphNode) -> list[GraphNode]:
        project = action.prepare_project(self._project)

        logger.info(f"{action.name}: starting from {node.kind.value} node {node.id}")
        self.store.update_node(node.id, loading=True)
        try:
            result = await action.generate(self.service, project, node)
        except Exception as e:
            logger.error(f"{action.name} failed on node {node.id}: {e}")
            raise
        finally:
            self.store.update_node(node.id, loading=False)

        # Children are placed relative to wherever the source sits now
        source = self.store.require(node.id)
        lineage = source.context_bundle()
        children = []
        for i, item in enumerate(result.data):
            title, description = action.describe(item)
            x, y = action.LAYOUT.position(source, i)
            children.append(GraphNode(
                id=new_id(),
                kind=action.child_kind,
                title=title,
                description=description,
                x=x,
                y=y,
                parent_id=source.id,
                payload=item,
                lineage=lineage,
                input_tokens=result.input_tokens,
            ))

        self.store.update_node(source.id, output_tokens=source.output_tokens + result.output_tokens)
        for child in children:
            self.store.add_node(child, source.id)

        logger.info(f"{action.name}: created {len(children)} {action.child_kind.value} nodes")
        return children

    # ===== Creatives =====

    async def generate_creatives(
        self,
        node_id: str,
        formats: list[CreativeFormat],
        aspect_ratio: str = "1:1",
    ) -> list[GraphNode]:
        """Strategy then visuals for each format, one format at a time.

        Each creative is committed as soon as its format finishes. The first
        failure skips the remaining formats and raises CreativeBatchError.
        """
        node = self.store.get(node_id)
        if node is None or node.loading or node.kind == NodeKind.CREATIVE or not formats:
            return []

        project = self._project
        angle = resolve_angle(node)
        bundle = build_bundle(node)
        created: list[GraphNode] = []

        logger.info(f"Generating {len(formats)} creatives from node {node_id}")
        self.store.update_node(node_id, loading=True)
        try:
            for i, fmt in enumerate(formats):
                try:
                    child = await self._generate_creative(project, node, bundle, angle, fmt, i, aspect_ratio)
                except GenerationError as e:
                    logger.error(f"Creative {fmt.value} failed, skipping {len(formats) - i - 1} remaining: {e}")
                    raise CreativeBatchError(fmt, [c.id for c in created], e) from e
                created.append(child)
        finally:
            self.store.update_node(node_id, loading=False)

        return created

    async def _generate_creative(self, project, node, bundle, angle, fmt, index, aspect_ratio) -> GraphNode:
        strategy = await self.service.generate_creative_strategy(
            project, bundle, angle, fmt, is_hvco=node.kind == NodeKind.HVCO
        )
        concept = strategy.data.concept

        carousel_images = None
        if fmt.is_carousel:
            visual = await self.service.generate_carousel_slides(
                project, bundle, angle, fmt, concept, aspect_ratio
            )
            urls = visual.data.image_urls
            image_url = urls[0] if urls else None
            carousel_images = list(urls) if len(urls) > 1 else None
            final_prompt = visual.data.prompts[0] if visual.data.prompts else ""
        else:
            visual = await self.service.generate_creative_image(
                project, bundle, angle, fmt, concept, aspect_ratio
            )
            image_url = visual.data.image_url
            final_prompt = visual.data.final_prompt

        source = self.store.require(node.id)
        x, y = self.CREATIVE_LAYOUT.position(source, index)
        child = GraphNode(
            id=new_id(),
            kind=NodeKind.CREATIVE,
            title=strategy.data.ad_copy.headline,
            description=concept.visual_scene,
            x=x,
            y=y,
            parent_id=source.id,
            payload=CreativeData(
                format=fmt,
                ad_copy=strategy.data.ad_copy,
                concept=concept,
                angle=angle,
                image_url=image_url,
                carousel_images=carousel_images,
                final_generation_prompt=final_prompt,
                aspect_ratio=aspect_ratio,
            ),
            lineage=source.context_bundle(),
            input_tokens=strategy.input_tokens + visual.input_tokens,
        )

        self.store.update_node(
            source.id,
            output_tokens=source.output_tokens + strategy.output_tokens + visual.output_tokens,
        )
        self.store.add_node(child, source.id)
        logger.info(f"Created {fmt.value} creative {child.id}")
        return child

    async def regenerate_creative(self, node_id: str, aspect_ratio: str = "1:1") -> GraphNode | None:
        """Re-render a creative's visuals in place from its stored strategy."""
        node = self.store.get(node_id)
        if node is None or node.loading or node.creative is None:
            return None

        creative = node.creative
        project = self._project
        bundle = node.lineage

        self.store.update_node(node_id, loading=True)
        try:
            if creative.format.is_carousel:
                result = await self.service.generate_carousel_slides(
                    project, bundle, creative.angle, creative.format, creative.concept, aspect_ratio
                )
                urls = result.data.image_urls
                visuals = {
                    "image_url": urls[0] if urls else creative.image_url,
                    "carousel_images": list(urls) if len(urls) > 1 else creative.carousel_images,
                    "final_generation_prompt": result.data.prompts[0] if result.data.prompts else creative.final_generation_prompt,
                }
            else:
                # Headline stands in for the embedded text on regeneration
                result = await self.service.generate_creative_image(
                    project, bundle, creative.angle, creative.format, creative.concept,
                    aspect_ratio, embedded_text=creative.ad_copy.headline,
                )
                visuals = {
                    "image_url": result.data.image_url or creative.image_url,
                    "final_generation_prompt": result.data.final_prompt,
                }
        finally:
            self.store.update_node(node_id, loading=False)

        current = self.store.require(node_id)
        payload = replace(current.creative, aspect_ratio=aspect_ratio, **visuals)
        logger.info(f"Regenerated creative {node_id} at {aspect_ratio}")
        return self.store.update_node(
            node_id,
            payload=payload,
            output_tokens=current.output_tokens + result.output_tokens,
        )

    def promote_creative(self, node_id: str) -> GraphNode | None:
        """Move a creative to scaling and flag it as a winner. No generation call."""
        node = self.store.get(node_id)
        if node is None or node.creative is None:
            return None
        payload = replace(node.creative, stage=CampaignStage.SCALING, is_winning=True)
        logger.info(f"Promoted creative {node_id}")
        return self.store.update_node(node_id, payload=payload)

    async def analyze_creative(self, node_id: str) -> GraphNode | None:
        """Request a performance prediction and store it on the creative."""
        node = self.store.get(node_id)
        if node is None or node.loading or node.creative is None:
            return None

        project = self._project
        self.store.update_node(node_id, loading=True)
        try:
            result = await self.service.predict_creative_performance(project, node)
        finally:
            self.store.update_node(node_id, loading=False)

        current = self.store.require(node_id)
        return self.store.update_node(
            node_id,
            payload=replace(current.creative, prediction=result.data),
            output_tokens=current.output_tokens + result.output_tokens,
        )

    # ===== Long-form copy =====

    def can_write_sales_letter(self, node: GraphNode) -> bool:
        bundle = build_bundle(node)
        return node.kind == NodeKind.HOOK and all((bundle.story, bundle.big_idea, bundle.mechanism))

    async def write_sales_letter(self, node_id: str) -> GraphNode | None:
        """Write a sales letter for a hook and store it on the hook's payload."""
        node = self.store.get(node_id)
        if node is None or node.loading or not self.can_write_sales_letter(node):
            return None

        project = self._project
        bundle = build_bundle(node)
        self.store.update_node(node_id, loading=True)
        try:
            result = await self.service.generate_sales_letter(
                project, bundle.story, bundle.big_idea, bundle.mechanism, bundle.hook.text
            )
        finally:
            self.store.update_node(node_id, loading=False)

        current = self.store.require(node_id)
        logger.info(f"Sales letter written for hook {node_id}")
        return self.store.update_node(
            node_id,
            payload=replace(current.payload, sales_letter=result.data),
            output_tokens=current.output_tokens + result.output_tokens,
        )

    async def run_simulation(self) -> list[GraphNode]:
        """Predict performance for every creative still in testing.

        Creatives are analyzed one at a time. A failure stops the run;
        predictions already stored are kept.
        """
        targets = [node.id for node in self.store.find(
            lambda n: n.creative is not None and n.stage != CampaignStage.SCALING
        )]
        logger.info(f"Running simulation on {len(targets)} creatives")

        analyzed = []
        self.simulating = True
        try:
            for node_id in targets:
                updated = await self.analyze_creative(node_id)
                if updated:
                    analyzed.append(updated)
        finally:
            self.simulating = False
        return analyzed

    def vault_nodes(self) -> list[GraphNode]:
        """Creatives promoted to scaling."""
        return self.store.find(lambda n: n.stage == CampaignStage.SCALING)

    def move_node(self, node_id: str, x: float, y: float) -> GraphNode:
        return self.store.move_node(node_id, x, y)


def parse_formats(option_id: str | None) -> list[CreativeFormat]:
    """Parse a comma-separated list of format values. Unknown values are skipped."""
    formats = []
    for value in (option_id or "").split(","):
        value = value.strip()
        if not value:
            continue
        try:
            formats.append(CreativeFormat(value))
        except ValueError:
            logger.warning(f"Unknown creative format: {value}")
    return formats
