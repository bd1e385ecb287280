from __future__ import annotations

from dataclasses import dataclass

from .model import NodeKind, WorkflowTree


@dataclass(frozen=True, slots=True)
class AddNode:
    """Insert a new node into ``parent_id``'s slot, relinking any occupant below it."""

    parent_id: str
    slot_index: int
    kind: NodeKind | str


@dataclass(frozen=True, slots=True)
class DeleteNode:
    node_id: str


@dataclass(frozen=True, slots=True)
class UpdateLabel:
    node_id: str
    label: str


@dataclass(frozen=True, slots=True)
class LoadTree:
    """Replace the whole tree. Always recorded in history."""

    tree: WorkflowTree


@dataclass(frozen=True, slots=True)
class Undo:
    pass


@dataclass(frozen=True, slots=True)
class Redo:
    pass


EditRequest = AddNode | DeleteNode | UpdateLabel | LoadTree | Undo | Redo
