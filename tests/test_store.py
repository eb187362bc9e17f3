"""Tests for the in-memory graph store."""

import pytest

from campaign_lab.engine import GraphStore, NodeNotFoundError
from campaign_lab.models import GraphNode, HookData, NodeKind

from conftest import make_root


def hook_node(node_id: str, parent_id: str | None = "root-1", x: float = 500, y: float = 300) -> GraphNode:
    return GraphNode(
        id=node_id,
        kind=NodeKind.HOOK,
        title="Viral Hook",
        description="Why you wake at 3am",
        x=x,
        y=y,
        parent_id=parent_id,
        payload=HookData(text="Why you wake at 3am"),
    )


class TestAddNode:

    def test_root_has_no_edge(self, store):
        assert len(store) == 1
        assert store.edges == []

    def test_child_appends_one_edge(self, store):
        store.add_node(hook_node("h1"), "root-1")

        assert len(store.edges) == 1
        edge = store.edges[0]
        assert edge.source == "root-1"
        assert edge.target == "h1"
        assert edge.id

    def test_insertion_order_kept(self, store):
        for i in range(3):
            store.add_node(hook_node(f"h{i}"), "root-1")
        assert [n.id for n in store.nodes] == ["root-1", "h0", "h1", "h2"]

    def test_duplicate_id_rejected(self, store):
        store.add_node(hook_node("h1"), "root-1")
        with pytest.raises(ValueError):
            store.add_node(hook_node("h1"), "root-1")

    def test_parent_mismatch_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_node(hook_node("h1", parent_id="other"), "root-1")

    def test_unknown_parent(self, store):
        with pytest.raises(NodeNotFoundError):
            store.add_node(hook_node("h1", parent_id="missing"), "missing")

    def test_edge_ids_unique(self, store):
        store.add_node(hook_node("h1"), "root-1")
        store.add_node(hook_node("h2"), "root-1")
        assert len({e.id for e in store.edges}) == 2


class TestUpdateNode:

    def test_shallow_merge(self, store):
        store.add_node(hook_node("h1"), "root-1")
        updated = store.update_node("h1", loading=True, output_tokens=10)

        assert updated.loading is True
        assert updated.output_tokens == 10
        assert updated.title == "Viral Hook"
        assert updated.payload == HookData(text="Why you wake at 3am")
        assert store.get("h1") is updated

    def test_missing_node(self, store):
        with pytest.raises(NodeNotFoundError) as exc:
            store.update_node("nope", loading=True)
        assert str(exc.value) == "Node not found: nope"

    def test_id_is_immutable(self, store):
        with pytest.raises(ValueError):
            store.update_node("root-1", id="other")

    def test_previous_record_untouched(self, store):
        before = store.get("root-1")
        store.update_node("root-1", title="Renamed")
        assert before.title == "Lumina"
        assert store.get("root-1").title == "Renamed"


class TestMoveNode:

    def test_only_position_changes(self, store):
        store.add_node(hook_node("h1"), "root-1")
        before = store.get("h1")

        moved = store.move_node("h1", 42, -7)

        assert (moved.x, moved.y) == (42, -7)
        assert moved.payload == before.payload
        assert moved.lineage == before.lineage
        assert moved.title == before.title
        assert len(store.edges) == 1

    def test_missing_node(self, store):
        with pytest.raises(NodeNotFoundError):
            store.move_node("nope", 0, 0)


class TestReads:

    def test_get_missing_returns_none(self, store):
        assert store.get("nope") is None
        assert "nope" not in store

    def test_find_and_children(self, store):
        store.add_node(hook_node("h1"), "root-1")
        store.add_node(hook_node("h2", parent_id="h1"), "h1")

        assert [n.id for n in store.find(lambda n: n.kind == NodeKind.HOOK)] == ["h1", "h2"]
        assert [n.id for n in store.children_of("root-1")] == ["h1"]
        assert [n.id for n in store.children_of("h1")] == ["h2"]

    def test_nodes_list_is_a_copy(self, store):
        store.nodes.append(make_root("stray"))
        assert len(store) == 1

    def test_construct_from_nodes(self):
        store = GraphStore([make_root(), hook_node("h1")])
        assert len(store) == 2
        assert len(store.edges) == 1


class TestGraphNode:

    def test_payload_kind_must_match(self):
        with pytest.raises(ValueError):
            GraphNode(id="x", kind=NodeKind.PERSONA, title="", description="", x=0, y=0,
                      payload=HookData(text="hi"))

    def test_root_rejects_payload(self):
        with pytest.raises(ValueError):
            GraphNode(id="x", kind=NodeKind.ROOT, title="", description="", x=0, y=0,
                      payload=HookData(text="hi"))
