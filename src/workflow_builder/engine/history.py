"""Linear undo/redo history over workflow tree snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from .edits import AddNode, DeleteNode, EditRequest, LoadTree, Redo, Undo, UpdateLabel
from .ids import IdSource, SequentialIdSource
from .model import WorkflowTree
from .mutations import add_node, delete_node, load_tree, update_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryState:
    """``past`` is oldest..newest, ``future`` is nearest..farthest.

    ``issued_ids`` holds every node id any snapshot of this workflow has used,
    including snapshots since discarded from ``future``. It is bookkeeping for
    the id source and does not take part in equality.
    """

    past: tuple[WorkflowTree, ...]
    present: WorkflowTree
    future: tuple[WorkflowTree, ...]
    issued_ids: frozenset[str] = field(default=frozenset(), compare=False)

    def trees(self) -> tuple[WorkflowTree, ...]:
        return (*self.past, self.present, *self.future)


class WorkflowHistory:
    """Owns the past/present/future stacks of one workflow.

    Edits run through the mutation functions against ``present``. A changed
    tree retires the old ``present`` into ``past`` and clears ``future``; a
    no-op leaves the history untouched. Loading a tree is always recorded.
    """

    def __init__(
        self, initial: WorkflowTree | None = None, id_source: IdSource | None = None
    ) -> None:
        self._ids: IdSource = id_source or SequentialIdSource()
        present = initial or WorkflowTree.initial()
        self._state = HistoryState(
            past=(), present=present, future=(), issued_ids=frozenset(present.nodes)
        )
        self._ids.reserve(self._state.issued_ids)

    @classmethod
    def from_state(cls, state: HistoryState, id_source: IdSource | None = None) -> WorkflowHistory:
        history = cls(state.present, id_source=id_source)
        issued = set(state.issued_ids)
        for tree in state.trees():
            issued.update(tree.nodes)
        history._state = replace(state, issued_ids=frozenset(issued))
        history._ids.reserve(issued)
        return history

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def present(self) -> WorkflowTree:
        return self._state.present

    @property
    def can_undo(self) -> bool:
        return bool(self._state.past)

    @property
    def can_redo(self) -> bool:
        return bool(self._state.future)

    def apply(self, edit: EditRequest) -> bool:
        """Apply one edit request. Returns whether the history changed."""

        if isinstance(edit, Undo):
            return self.undo()
        if isinstance(edit, Redo):
            return self.redo()

        if isinstance(edit, LoadTree):
            self._ids.reserve(edit.tree.nodes)
            self._record(load_tree(self.present, edit.tree))
            logger.debug("Tree loaded", extra={"edit": "LoadTree", "nodes": len(edit.tree.nodes)})
            return True

        current = self.present
        if isinstance(edit, AddNode):
            updated = add_node(current, edit.parent_id, edit.slot_index, edit.kind, self._ids)
        elif isinstance(edit, DeleteNode):
            updated = delete_node(current, edit.node_id)
        elif isinstance(edit, UpdateLabel):
            updated = update_label(current, edit.node_id, edit.label)
        else:
            raise TypeError(f"Unsupported edit request: {type(edit).__name__}")

        if updated is current:
            logger.debug("Edit ignored", extra={"edit": type(edit).__name__})
            return False

        self._record(updated)
        logger.debug("Edit applied", extra={"edit": type(edit).__name__})
        return True

    def undo(self) -> bool:
        past, present, future = self._state.past, self._state.present, self._state.future
        if not past:
            return False
        self._state = HistoryState(
            past=past[:-1],
            present=past[-1],
            future=(present, *future),
            issued_ids=self._state.issued_ids,
        )
        return True

    def redo(self) -> bool:
        past, present, future = self._state.past, self._state.present, self._state.future
        if not future:
            return False
        self._state = HistoryState(
            past=(*past, present),
            present=future[0],
            future=future[1:],
            issued_ids=self._state.issued_ids,
        )
        return True

    def _record(self, tree: WorkflowTree) -> None:
        self._state = HistoryState(
            past=(*self._state.past, self.present),
            present=tree,
            future=(),
            issued_ids=self._state.issued_ids.union(tree.nodes),
        )
