"""Tests for the session event handler and graph serialization."""

import json

import pytest

from campaign_lab.api.serializers import serialize_node, serialize_payload, to_camel
from campaign_lab.engine import available_actions
from campaign_lab.handlers.session import ROOT_ID, create_session, handle, parse_project_changes
from campaign_lab.models import CreativeFormat, MarketAwareness, NodeKind, StrategyMode

from conftest import StubGenerationService, make_creative


def body(result) -> dict:
    return json.loads(result["body"])


class TestHandle:

    async def test_action_returns_graph(self):
        session = create_session(StubGenerationService())

        result = await handle(session, {"action": "expand_personas", "node_id": ROOT_ID})

        assert result["statusCode"] == 200
        data = body(result)
        assert len(data["nodes"]) == 4
        assert len(data["edges"]) == 3
        assert len(data["affected"]) == 3
        assert all(n["isLoading"] is False for n in data["nodes"])
        persona = data["nodes"][1]
        assert persona["type"] == "persona"
        assert persona["parentId"] == ROOT_ID
        assert persona["data"]["visceralSymptoms"] == ["Pain 0", "Tossing and turning"]

    async def test_invalid_action_is_ok_noop(self):
        stub = StubGenerationService()
        session = create_session(stub)

        result = await handle(session, {"action": "generate_hooks", "node_id": ROOT_ID})

        assert result["statusCode"] == 200
        assert body(result)["affected"] == []
        assert stub.calls == []

    async def test_move(self):
        session = create_session(StubGenerationService())

        result = await handle(session, {"move": {"node_id": ROOT_ID, "x": 10, "y": 20}})

        assert result["statusCode"] == 200
        root = body(result)["nodes"][0]
        assert (root["x"], root["y"]) == (10, 20)

    async def test_move_unknown_node(self):
        session = create_session(StubGenerationService())
        result = await handle(session, {"move": {"node_id": "nope", "x": 1, "y": 1}})
        assert result["statusCode"] == 404

    async def test_malformed_move(self):
        session = create_session(StubGenerationService())
        result = await handle(session, {"move": {"node_id": ROOT_ID}})
        assert result["statusCode"] == 400

    async def test_unrecognized_event(self):
        session = create_session(StubGenerationService())
        assert (await handle(session, {"hello": 1}))["statusCode"] == 400
        assert (await handle(session, "not a dict"))["statusCode"] == 400

    async def test_project_update(self):
        session = create_session(StubGenerationService())

        result = await handle(session, {"project": {"strategyMode": "Hard Sell", "offer": "2 for 1"}})

        assert result["statusCode"] == 200
        assert session.project.strategy_mode == StrategyMode.HARD_SELL
        assert body(result)["project"]["offer"] == "2 for 1"

    async def test_project_update_bad_value(self):
        session = create_session(StubGenerationService())
        result = await handle(session, {"project": {"strategyMode": "Soft Sell"}})
        assert result["statusCode"] == 400
        assert session.project.strategy_mode == StrategyMode.VISUAL_IMPULSE

    async def test_generation_failure(self):
        stub = StubGenerationService()
        stub.fail_all = True
        session = create_session(stub)

        result = await handle(session, {"action": "expand_personas", "node_id": ROOT_ID})

        assert result["statusCode"] == 500
        assert "failed" in body(result)["error"]
        assert session.store.get(ROOT_ID).loading is False

    async def test_creative_batch_failure(self):
        stub = StubGenerationService()
        stub.fail_formats = {CreativeFormat.MEME}
        session = create_session(stub)

        result = await handle(session, {
            "action": "generate_creatives",
            "node_id": ROOT_ID,
            "option_id": "Big Font,Meme,Billboard",
        })

        assert result["statusCode"] == 500
        data = body(result)
        assert data["failedFormat"] == "Meme"
        assert len(data["affected"]) == 1
        assert len(data["nodes"]) == 2

    async def test_simulate(self):
        session = create_session(StubGenerationService())
        session.store.add_node(make_creative(parent_id=ROOT_ID), ROOT_ID)

        result = await handle(session, {"simulate": True})

        assert result["statusCode"] == 200
        creative = body(result)["nodes"][1]
        assert creative["data"]["prediction"]["score"] == 72
        assert body(result)["simulating"] is False

    async def test_malformed_project(self):
        session = create_session(StubGenerationService())
        result = await handle(session, {"project": "Hard Sell"})
        assert result["statusCode"] == 400
        assert "Malformed project event" in body(result)["error"]

    async def test_engine_bug_not_reported_as_bad_input(self):
        class Broken(StubGenerationService):
            async def generate_personas(self, project):
                raise KeyError("visceralSymptoms")

        session = create_session(Broken())

        with pytest.raises(KeyError):
            await handle(session, {"action": "expand_personas", "node_id": ROOT_ID})
        assert session.store.get(ROOT_ID).loading is False

    async def test_sales_letter(self):
        session = create_session(StubGenerationService())
        stories = await session.dispatch("start_story_flow", ROOT_ID)
        ideas = await session.dispatch("generate_big_ideas", stories[0].id)
        mechanisms = await session.dispatch("generate_mechanisms", ideas[0].id)
        hook = (await session.dispatch("generate_hooks", mechanisms[0].id))[0]

        result = await handle(session, {"action": "write_sales_letter", "node_id": hook.id})

        assert result["statusCode"] == 200
        data = body(result)
        assert data["affected"] == [hook.id]
        node = next(n for n in data["nodes"] if n["id"] == hook.id)
        assert node["data"]["salesLetter"] == "Letter for Hook 0"


def test_create_session_root():
    session = create_session(StubGenerationService())
    root = session.store.get(ROOT_ID)
    assert root.kind == NodeKind.ROOT
    assert (root.x, root.y) == (100, 300)
    assert root.title == "Lumina"


def test_parse_project_changes():
    changes = parse_project_changes({"marketAwareness": "Unaware", "target_country": "UK"})
    assert changes == {"market_awareness": MarketAwareness.UNAWARE, "target_country": "UK"}


def test_serialize_creative():
    data = serialize_node(make_creative())
    assert data["type"] == "creative"
    assert data["data"]["format"] == "Big Font"
    assert data["data"]["adCopy"]["primaryText"] == "Body copy"
    assert data["data"]["stage"] == "testing"
    assert data["lineage"] == {}


def test_serialize_payload_passthrough():
    assert serialize_payload(None) is None
    assert serialize_payload(["a", 1]) == ["a", 1]
    assert to_camel("final_generation_prompt") == "finalGenerationPrompt"


def test_serialized_node_lists_actions():
    session = create_session(StubGenerationService())
    root = serialize_node(session.store.get(ROOT_ID))
    assert root["actions"] == available_actions(session.store.get(ROOT_ID))
    assert "expand_personas" in root["actions"]
    assert serialize_node(make_creative())["actions"] == []
