"""JSON persistence for workflow trees and their edit history.

The wire format mirrors the tree's logical schema: ``rootId`` plus a ``nodes``
map of ``id``/``kind``/``label``/``children`` records. Anything read from disk
or from a client is validated before it becomes a :class:`WorkflowTree`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .history import HistoryState
from .model import InvalidTreeError, NodeKind, WorkflowNode, WorkflowTree

logger = logging.getLogger(__name__)

HISTORY_FORMAT_VERSION = 1


class WorkflowNodeModel(BaseModel):
    id: str
    kind: NodeKind
    label: str
    children: list[str | None] = Field(default_factory=list)


class WorkflowTreeModel(BaseModel):
    rootId: str
    nodes: dict[str, WorkflowNodeModel]

    @classmethod
    def from_tree(cls, tree: WorkflowTree) -> WorkflowTreeModel:
        return cls.model_validate(tree.to_json())

    def to_tree(self) -> WorkflowTree:
        nodes: dict[str, WorkflowNode] = {}
        for key, raw in self.nodes.items():
            if key != raw.id:
                raise InvalidTreeError(f"Node stored under {key!r} has id {raw.id!r}")
            try:
                nodes[key] = WorkflowNode(
                    id=raw.id, kind=raw.kind, label=raw.label, children=tuple(raw.children)
                )
            except ValueError as e:
                raise InvalidTreeError(str(e)) from e
        return WorkflowTree(nodes=nodes, root_id=self.rootId)


class HistoryDocumentModel(BaseModel):
    version: int = Field(default=HISTORY_FORMAT_VERSION)
    past: list[WorkflowTreeModel] = Field(default_factory=list)
    present: WorkflowTreeModel
    future: list[WorkflowTreeModel] = Field(default_factory=list)
    issuedIds: list[str] = Field(default_factory=list)


def _dumps(payload: object) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def serialize_tree(tree: WorkflowTree) -> str:
    return _dumps(WorkflowTreeModel.from_tree(tree).model_dump(mode="json"))


def parse_tree(raw: str | bytes | dict[str, object]) -> WorkflowTree:
    """Parse and validate a tree document.

    Raises:
        InvalidTreeError: for malformed JSON, schema violations or a tree that
            breaks the structural invariants.
    """

    try:
        if isinstance(raw, dict):
            model = WorkflowTreeModel.model_validate(raw)
        else:
            model = WorkflowTreeModel.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidTreeError(f"Invalid workflow document: {e}") from e
    return model.to_tree()


def serialize_history(state: HistoryState) -> str:
    document = HistoryDocumentModel(
        past=[WorkflowTreeModel.from_tree(t) for t in state.past],
        present=WorkflowTreeModel.from_tree(state.present),
        future=[WorkflowTreeModel.from_tree(t) for t in state.future],
        issuedIds=sorted(state.issued_ids),
    )
    return _dumps(document.model_dump(mode="json"))


def parse_history(raw: str | bytes) -> HistoryState:
    try:
        document = HistoryDocumentModel.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidTreeError(f"Invalid history document: {e}") from e
    if document.version != HISTORY_FORMAT_VERSION:
        raise InvalidTreeError(f"Unsupported history format version: {document.version}")
    return HistoryState(
        past=tuple(m.to_tree() for m in document.past),
        present=document.present.to_tree(),
        future=tuple(m.to_tree() for m in document.future),
        issued_ids=frozenset(document.issuedIds),
    )


class WorkflowTreeStore:
    """Persist a single tree snapshot (the "saved workflow")."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> WorkflowTree:
        if not self._path.exists():
            logger.info("No saved workflow found, starting fresh", extra={"path": str(self._path)})
            return WorkflowTree.initial()
        return parse_tree(self._path.read_text(encoding="utf-8"))

    def save(self, tree: WorkflowTree) -> Path:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(serialize_tree(tree), encoding="utf-8")
        logger.info(
            "Workflow saved", extra={"path": str(self._path), "nodes": len(tree.nodes)}
        )
        return self._path


class HistoryStore:
    """Persist the full past/present/future stacks so undo survives restarts."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> HistoryState:
        if not self._path.exists():
            return HistoryState(past=(), present=WorkflowTree.initial(), future=())
        return parse_history(self._path.read_text(encoding="utf-8"))

    def save(self, state: HistoryState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(serialize_history(state), encoding="utf-8")
        logger.debug(
            "History saved",
            extra={"path": str(self._path), "past": len(state.past), "future": len(state.future)},
        )
