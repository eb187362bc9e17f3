"""Session handler - turns canvas events into orchestrator calls."""

import asyncio
import json
import logging
from dataclasses import fields
from enum import Enum

from ..api.serializers import serialize_graph
from ..clients import GeminiClient, LLMClient
from ..config import (
    GEMINI_API_KEY,
    IMAGE_MODEL_PRO,
    IMAGE_MODEL_STANDARD,
    LOG_LEVEL,
    OPENAI_API_KEY,
    TEXT_MODEL,
)
from ..engine import CampaignOrchestrator, CreativeBatchError, GraphStore, NodeNotFoundError
from ..models import DEFAULT_PROJECT, GraphNode, NodeKind, ProjectContext
from ..services import GenerationError, GenerationService

logger = logging.getLogger(__name__)

ROOT_ID = "root-1"

_PROJECT_FIELDS = {f.name: f for f in fields(ProjectContext)}


def create_session(
    service: GenerationService | None = None,
    project: ProjectContext = DEFAULT_PROJECT,
) -> CampaignOrchestrator:
    """New session with a single root node for the project's product."""
    if service is None:
        llm = LLMClient(api_key=OPENAI_API_KEY, model=TEXT_MODEL)
        gemini = GeminiClient(api_key=GEMINI_API_KEY, model=IMAGE_MODEL_STANDARD, pro_model=IMAGE_MODEL_PRO)
        service = GenerationService(llm, gemini)

    root = GraphNode(
        id=ROOT_ID,
        kind=NodeKind.ROOT,
        title=project.product_name,
        description=project.product_description,
        x=100,
        y=300,
    )
    return CampaignOrchestrator(GraphStore([root]), service, project)


def _response(status_code: int, body: dict) -> dict:
    return {"statusCode": status_code, "body": json.dumps(body)}


def _error(status_code: int, message: str) -> dict:
    return _response(status_code, {"error": message})


def _snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


def parse_project_changes(data: dict) -> dict:
    """Map camelCase or snake_case project fields onto ProjectContext values.

    Raises:
        ValueError: On unknown fields or invalid enum values.
    """
    changes = {}
    for key, value in data.items():
        name = _snake(key)
        field = _PROJECT_FIELDS.get(name)
        if field is None:
            raise ValueError(f"Unknown project field: {key}")
        if isinstance(field.type, type) and issubclass(field.type, Enum):
            value = field.type(value)
        changes[name] = value
    return changes


async def handle(session: CampaignOrchestrator, event: dict) -> dict:
    """
    Handle one canvas event.

    Events:
    {"action": "expand_personas", "node_id": "root-1", "option_id": null}
    {"move": {"node_id": "...", "x": 120, "y": 40}}
    {"project": {"strategyMode": "Hard Sell"}}
    {"simulate": true}

    Output: {"statusCode": ..., "body": JSON graph state or {"error": ...}}
    """
    if not isinstance(event, dict):
        return _error(400, "Event must be an object")

    if "move" in event:
        try:
            move = event["move"]
            node_id, x, y = move["node_id"], float(move["x"]), float(move["y"])
        except (KeyError, TypeError, ValueError) as e:
            return _error(400, f"Malformed move event: {e}")
        try:
            session.move_node(node_id, x, y)
        except NodeNotFoundError as e:
            return _error(404, str(e))
        return _response(200, serialize_graph(session))

    if "project" in event:
        try:
            changes = parse_project_changes(event["project"])
        except (AttributeError, ValueError) as e:
            return _error(400, f"Malformed project event: {e}")
        session.update_project(**changes)
        return _response(200, serialize_graph(session))

    try:
        if event.get("simulate"):
            analyzed = await session.run_simulation()
            return _response(200, {**serialize_graph(session), "affected": [n.id for n in analyzed]})

        if event.get("action") and event.get("node_id"):
            nodes = await session.dispatch(event["action"], event["node_id"], event.get("option_id"))
            return _response(200, {**serialize_graph(session), "affected": [n.id for n in nodes]})

    except CreativeBatchError as e:
        logger.error(f"Creative batch failed: {e}")
        return _response(500, {
            **serialize_graph(session),
            "error": str(e),
            "failedFormat": e.failed_format.value,
            "affected": e.created_ids,
        })
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        return _error(500, str(e))

    return _error(400, "Unrecognized event")


if __name__ == "__main__":
    # Local run
    logging.basicConfig(level=LOG_LEVEL)

    async def _run():
        session = create_session()
        result = await handle(session, {"action": "expand_personas", "node_id": ROOT_ID})
        print(json.dumps(json.loads(result["body"]), indent=2)[:2000], flush=True)

    asyncio.run(_run())
