"""Workflow tree engine.

This package holds the editable core of the workflow builder:
- the typed tree model and its arity rules
- pure mutations over immutable tree snapshots
- a linear undo/redo history wrapping those mutations
- JSON persistence for trees and histories

Adapters (CLI, REST) only read the present snapshot and issue edit requests.
"""

from .edits import AddNode, DeleteNode, EditRequest, LoadTree, Redo, Undo, UpdateLabel
from .editor import WorkflowEditor
from .history import HistoryState, WorkflowHistory
from .ids import IdSource, SequentialIdSource, UuidIdSource
from .model import (
    InvalidTreeError,
    NodeKind,
    UnknownNodeKindError,
    WorkflowNode,
    WorkflowTree,
    arity_of,
    template_for,
)

__all__ = [
    "AddNode",
    "DeleteNode",
    "EditRequest",
    "HistoryState",
    "IdSource",
    "InvalidTreeError",
    "LoadTree",
    "NodeKind",
    "Redo",
    "SequentialIdSource",
    "Undo",
    "UnknownNodeKindError",
    "UpdateLabel",
    "UuidIdSource",
    "WorkflowEditor",
    "WorkflowHistory",
    "WorkflowNode",
    "WorkflowTree",
    "arity_of",
    "template_for",
]
