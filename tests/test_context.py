"""Tests for fan layout, angle resolution and forwarded lineage."""

from campaign_lab.engine import FanLayout, build_bundle, resolve_angle
from campaign_lab.models import (
    AngleData,
    BigIdeaOption,
    CreativeFormat,
    GraphNode,
    HookData,
    HVCOOption,
    Lineage,
    MechanismOption,
    NodeKind,
    PersonaMeta,
    StoryOption,
)

from conftest import make_creative, make_root


def node(kind, payload, title="Title", lineage=None) -> GraphNode:
    return GraphNode(
        id=f"{kind.value}-1", kind=kind, title=title, description="", x=0, y=0,
        parent_id="root-1", payload=payload, lineage=lineage or Lineage(),
    )


class TestFanLayout:

    def test_default_centers_second_child(self):
        root = make_root()
        layout = FanLayout()
        assert [layout.position(root, i) for i in range(3)] == [(500, 50), (500, 300), (500, 550)]

    def test_hooks_center_on_third(self):
        root = make_root()
        layout = FanLayout(spacing=150, centering=2)
        assert layout.position(root, 2) == (500, 300)
        assert layout.position(root, 0) == (500, 0)

    def test_creatives_start_at_parent(self):
        root = make_root()
        layout = FanLayout(dx=450, spacing=400, centering=0)
        assert layout.position(root, 0) == (550, 300)
        assert layout.position(root, 2) == (550, 1100)


class TestResolveAngle:

    def test_angle_hook(self):
        assert resolve_angle(node(NodeKind.ANGLE, AngleData(headline="H", hook="The hook"))) == "The hook"

    def test_angle_without_hook_uses_title(self):
        assert resolve_angle(node(NodeKind.ANGLE, AngleData(headline="H", hook=""), title="Angle title")) == "Angle title"

    def test_hook_text(self):
        assert resolve_angle(node(NodeKind.HOOK, HookData(text="Stop scrolling"))) == "Stop scrolling"

    def test_big_idea(self):
        n = node(NodeKind.BIG_IDEA, BigIdeaOption(headline="H", concept="Sleep is a skill"))
        assert resolve_angle(n) == "Show concept: Sleep is a skill"

    def test_mechanism(self):
        n = node(NodeKind.MECHANISM, MechanismOption(scientific_pseudo="S", ump="P", ums="Red light resets"))
        assert resolve_angle(n) == "Show the action of: Red light resets"

    def test_hvco_and_story_titles(self):
        assert resolve_angle(node(NodeKind.HVCO, HVCOOption(title="Sleep Guide", hook="h"))) == "Sleep Guide"
        assert resolve_angle(node(NodeKind.STORY, StoryOption(title="3am", narrative="n"))) == "3am"

    def test_fallback_title(self):
        assert resolve_angle(make_root()) == "Lumina"
        persona = node(NodeKind.PERSONA, PersonaMeta(name="Tired Tom", profile="p"), title="Tired Tom")
        assert resolve_angle(persona) == "Tired Tom"


class TestLineage:

    def test_bundle_includes_own_payload(self):
        story = StoryOption(title="3am", narrative="n")
        bundle = build_bundle(node(NodeKind.STORY, story))
        assert bundle.story == story
        assert bundle.big_idea is None

    def test_extended_keeps_ancestors(self):
        story = StoryOption(title="3am", narrative="n")
        idea = BigIdeaOption(headline="H", concept="c")
        lineage = Lineage().extended(story).extended(idea)
        assert lineage.story == story
        assert lineage.big_idea == idea

    def test_creative_payload_not_forwarded(self):
        creative = make_creative()
        assert build_bundle(creative) == creative.lineage
        assert creative.creative.format == CreativeFormat.BIG_FONT

    def test_root_bundle_is_empty(self):
        assert build_bundle(make_root()) == Lineage()
