"""Unit tests for the editor facade."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from workflow_builder.engine.editor import WorkflowEditor
from workflow_builder.engine.ids import SequentialIdSource
from workflow_builder.engine.model import NodeKind, WorkflowTree


def test_editor_builds_a_workflow(editor: WorkflowEditor) -> None:
    assert editor.add_node("start-1", 0, "action")
    assert editor.add_node("n1", 0, NodeKind.BRANCH)
    assert editor.add_node("n2", 1, "end")
    assert editor.update_label("n2", "Paid?")

    tree = editor.tree
    assert tree.nodes["n2"].children == (None, "n3")
    assert tree.nodes["n2"].label == "Paid?"
    assert editor.can_undo
    assert not editor.can_redo


def test_editor_reports_noops(editor: WorkflowEditor) -> None:
    assert editor.delete_node("start-1") is False
    assert editor.undo() is False
    assert editor.redo() is False
    assert not editor.can_undo


def test_editor_undo_redo(editor: WorkflowEditor) -> None:
    editor.add_node("start-1", 0, "action")
    editor.delete_node("n1")
    assert editor.tree.nodes["start-1"].children == (None,)

    assert editor.undo()
    assert editor.tree.nodes["start-1"].children == ("n1",)
    assert editor.redo()
    assert "n1" not in editor.tree.nodes


def test_editor_load_reserves_ids(branching_tree: WorkflowTree) -> None:
    editor = WorkflowEditor(id_source=SequentialIdSource(prefix="a"))
    assert editor.load(branching_tree)
    assert editor.add_node("a2", 0, "action")
    assert "a3" in editor.tree.nodes


def test_editor_save_writes_present(editor: WorkflowEditor, tmp_path: Path) -> None:
    editor.add_node("start-1", 0, "end")
    path = editor.save()
    assert path == tmp_path / "workflow" / "tree.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["nodes"]["start-1"]["children"] == ["n1"]


def test_editor_save_without_store_fails_loudly() -> None:
    with pytest.raises(RuntimeError):
        WorkflowEditor().save()
