"""Unit tests for the REST API."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from workflow_builder.server.app import create_app
from workflow_builder.server.config import ServerSettings


@pytest.fixture
def tree_path(clean_env: Path) -> Path:
    return clean_env / "workflow" / "tree.json"


@pytest.fixture
def client(tree_path: Path) -> TestClient:
    return TestClient(create_app(ServerSettings(workflow_tree_path=tree_path)))


def test_health(client: TestClient) -> None:
    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert "version" in health


def test_initial_workflow(client: TestClient) -> None:
    view = client.get("/api/workflow").json()
    assert view["tree"]["rootId"] == "start-1"
    assert view["tree"]["nodes"]["start-1"]["children"] == [None]
    assert view["canUndo"] is False
    assert view["canRedo"] is False
    assert view["orphans"] == []


def test_edit_undo_redo_flow(client: TestClient) -> None:
    added = client.post(
        "/api/workflow/nodes", json={"parentId": "start-1", "slotIndex": 0, "kind": "action"}
    ).json()
    assert added["changed"] is True
    assert added["tree"]["nodes"]["start-1"]["children"] == ["node-1"]
    assert added["canUndo"] is True

    renamed = client.patch("/api/workflow/nodes/node-1", json={"label": "Fetch order"}).json()
    assert renamed["tree"]["nodes"]["node-1"]["label"] == "Fetch order"

    undone = client.post("/api/workflow/undo").json()
    assert undone["changed"] is True
    assert undone["tree"]["nodes"]["node-1"]["label"] == "Action"
    assert undone["canRedo"] is True

    redone = client.post("/api/workflow/redo").json()
    assert redone["tree"]["nodes"]["node-1"]["label"] == "Fetch order"
    assert redone["canRedo"] is False


def test_delete_reports_orphans(client: TestClient) -> None:
    client.post("/api/workflow/nodes", json={"parentId": "start-1", "slotIndex": 0, "kind": "branch"})
    client.post("/api/workflow/nodes", json={"parentId": "node-1", "slotIndex": 0, "kind": "action"})
    client.post("/api/workflow/nodes", json={"parentId": "node-1", "slotIndex": 1, "kind": "end"})

    deleted = client.delete("/api/workflow/nodes/node-1").json()
    assert deleted["changed"] is True
    assert deleted["tree"]["nodes"]["start-1"]["children"] == ["node-2"]
    assert deleted["orphans"] == ["node-3"]


def test_inapplicable_edits_are_silent_noops(client: TestClient) -> None:
    responses = [
        client.delete("/api/workflow/nodes/start-1"),
        client.delete("/api/workflow/nodes/missing"),
        client.patch("/api/workflow/nodes/missing", json={"label": "x"}),
        client.post(
            "/api/workflow/nodes", json={"parentId": "missing", "slotIndex": 0, "kind": "end"}
        ),
        client.post(
            "/api/workflow/nodes", json={"parentId": "start-1", "slotIndex": 4, "kind": "end"}
        ),
        client.post("/api/workflow/undo"),
        client.post("/api/workflow/redo"),
    ]
    for response in responses:
        assert response.status_code == 200
        assert response.json()["changed"] is False


def test_start_kind_is_rejected_at_the_boundary(client: TestClient) -> None:
    response = client.post(
        "/api/workflow/nodes", json={"parentId": "start-1", "slotIndex": 0, "kind": "start"}
    )
    assert response.status_code == 422


def test_load_tree_is_recorded_and_validated(client: TestClient) -> None:
    current = client.get("/api/workflow").json()["tree"]
    loaded = client.put("/api/workflow", json=current).json()
    assert loaded["changed"] is True
    assert loaded["canUndo"] is True

    broken = {"rootId": "start-1", "nodes": {}}
    assert client.put("/api/workflow", json=broken).status_code == 422


def test_save_writes_tree_document(client: TestClient, tree_path: Path) -> None:
    client.post("/api/workflow/nodes", json={"parentId": "start-1", "slotIndex": 0, "kind": "end"})
    saved = client.post("/api/workflow/save").json()
    assert Path(saved["path"]) == tree_path

    payload = json.loads(tree_path.read_text(encoding="utf-8"))
    assert payload["nodes"]["node-1"]["kind"] == "end"

    # A new app starts from the saved workflow with empty history.
    restarted = TestClient(create_app(ServerSettings(workflow_tree_path=tree_path)))
    view = restarted.get("/api/workflow").json()
    assert view["tree"]["nodes"]["start-1"]["children"] == ["node-1"]
    assert view["canUndo"] is False
