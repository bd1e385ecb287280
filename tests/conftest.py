"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from workflow_builder.engine.editor import WorkflowEditor
from workflow_builder.engine.history import WorkflowHistory
from workflow_builder.engine.ids import SequentialIdSource
from workflow_builder.engine.model import NodeKind, WorkflowNode, WorkflowTree
from workflow_builder.engine.store import WorkflowTreeStore

_ENV_VARS = (
    "LOG_LEVEL",
    "WORKFLOW_HISTORY_PATH",
    "WORKFLOW_TREE_PATH",
    "WORKFLOW_ID_PREFIX",
    "WORKFLOW_CORS_ORIGINS",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no workflow settings in the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def id_source() -> SequentialIdSource:
    """Ids n1, n2, ... as used in the worked examples."""
    return SequentialIdSource(prefix="n")


@pytest.fixture
def history(id_source: SequentialIdSource) -> WorkflowHistory:
    return WorkflowHistory(id_source=id_source)


@pytest.fixture
def editor(tmp_path: Path, id_source: SequentialIdSource) -> WorkflowEditor:
    return WorkflowEditor(
        store=WorkflowTreeStore(tmp_path / "workflow" / "tree.json"), id_source=id_source
    )


@pytest.fixture
def branching_tree() -> WorkflowTree:
    """start-1 -> a1 -> b1 (true: a2, false: e1); a2 -> e2."""
    nodes = [
        WorkflowNode(id="start-1", kind=NodeKind.START, label="Start", children=("a1",)),
        WorkflowNode(id="a1", kind=NodeKind.ACTION, label="Fetch", children=("b1",)),
        WorkflowNode(id="b1", kind=NodeKind.BRANCH, label="Paid?", children=("a2", "e1")),
        WorkflowNode(id="a2", kind=NodeKind.ACTION, label="Ship", children=("e2",)),
        WorkflowNode(id="e1", kind=NodeKind.END, label="Stop", children=()),
        WorkflowNode(id="e2", kind=NodeKind.END, label="Done", children=()),
    ]
    return WorkflowTree(nodes={n.id: n for n in nodes}, root_id="start-1")
