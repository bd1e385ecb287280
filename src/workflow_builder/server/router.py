"""Workflow editing REST API.

All routes are mounted under `/api`. Inapplicable edits (unknown ids, bad slot
indexes, deleting the start node, undo/redo with nothing to move) are not
errors: they return 200 with ``changed: false``.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from workflow_builder import __version__
from workflow_builder.engine.edits import AddNode, DeleteNode, LoadTree, Redo, Undo, UpdateLabel
from workflow_builder.engine.model import InvalidTreeError, NodeKind
from workflow_builder.engine.store import WorkflowTreeModel
from workflow_builder.server.models import (
    AddNodeRequest,
    EditResult,
    SaveResult,
    UpdateLabelRequest,
    WorkflowView,
)
from workflow_builder.server.session import WorkflowSession

router = APIRouter()


def _session(request: Request) -> WorkflowSession:
    session = getattr(request.app.state, "session", None)
    if not isinstance(session, WorkflowSession):
        # This should never happen for the real app, but keeps the API fail-fast.
        raise HTTPException(status_code=500, detail="Workflow session not configured")
    return session


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/workflow", response_model=WorkflowView)
def get_workflow(request: Request) -> WorkflowView:
    return _session(request).view()


@router.put("/workflow", response_model=EditResult)
def load_workflow(request: Request, body: WorkflowTreeModel) -> EditResult:
    try:
        tree = body.to_tree()
    except InvalidTreeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _session(request).apply(LoadTree(tree=tree))


@router.post("/workflow/nodes", response_model=EditResult)
def add_node(request: Request, body: AddNodeRequest) -> EditResult:
    edit = AddNode(parent_id=body.parentId, slot_index=body.slotIndex, kind=NodeKind(body.kind))
    return _session(request).apply(edit)


@router.patch("/workflow/nodes/{node_id}", response_model=EditResult)
def update_label(request: Request, node_id: str, body: UpdateLabelRequest) -> EditResult:
    return _session(request).apply(UpdateLabel(node_id=node_id, label=body.label))


@router.delete("/workflow/nodes/{node_id}", response_model=EditResult)
def delete_node(request: Request, node_id: str) -> EditResult:
    return _session(request).apply(DeleteNode(node_id=node_id))


@router.post("/workflow/undo", response_model=EditResult)
def undo(request: Request) -> EditResult:
    return _session(request).apply(Undo())


@router.post("/workflow/redo", response_model=EditResult)
def redo(request: Request) -> EditResult:
    return _session(request).apply(Redo())


@router.post("/workflow/save", response_model=SaveResult)
def save(request: Request) -> SaveResult:
    return SaveResult(path=str(_session(request).save()))
