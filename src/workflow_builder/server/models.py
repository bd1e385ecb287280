"""Pydantic models for the REST server."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from workflow_builder.engine.store import WorkflowTreeModel

InsertableKind = Literal["action", "branch", "end"]


class WorkflowView(BaseModel):
    tree: WorkflowTreeModel
    canUndo: bool
    canRedo: bool
    orphans: list[str] = Field(default_factory=list)


class EditResult(WorkflowView):
    changed: bool


class AddNodeRequest(BaseModel):
    parentId: str
    slotIndex: int
    kind: InsertableKind


class UpdateLabelRequest(BaseModel):
    label: str


class SaveResult(BaseModel):
    path: str
