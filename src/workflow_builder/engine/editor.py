from __future__ import annotations

from pathlib import Path

from .edits import AddNode, DeleteNode, EditRequest, LoadTree, Redo, Undo, UpdateLabel
from .history import HistoryState, WorkflowHistory
from .ids import IdSource
from .model import NodeKind, WorkflowTree
from .store import WorkflowTreeStore


class WorkflowEditor:
    """The edit surface for one workflow.

    Construct one per workflow and pass it explicitly to whatever issues edit
    requests. Callers only read :attr:`tree`; they never build or modify trees.
    """

    def __init__(
        self,
        history: WorkflowHistory | None = None,
        store: WorkflowTreeStore | None = None,
        id_source: IdSource | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            history: Existing history to continue from. A fresh one is created
                from the initial tree when omitted.
            store: Where :meth:`save` writes the current tree.
            id_source: Identifier source for a freshly created history. Ignored
                when ``history`` is given.
        """
        self._history = history or WorkflowHistory(id_source=id_source)
        self._store = store

    @classmethod
    def from_state(
        cls,
        state: HistoryState,
        store: WorkflowTreeStore | None = None,
        id_source: IdSource | None = None,
    ) -> WorkflowEditor:
        return cls(WorkflowHistory.from_state(state, id_source=id_source), store=store)

    @property
    def tree(self) -> WorkflowTree:
        return self._history.present

    @property
    def state(self) -> HistoryState:
        return self._history.state

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def dispatch(self, edit: EditRequest) -> bool:
        return self._history.apply(edit)

    def add_node(self, parent_id: str, slot_index: int, kind: NodeKind | str) -> bool:
        return self.dispatch(AddNode(parent_id=parent_id, slot_index=slot_index, kind=kind))

    def delete_node(self, node_id: str) -> bool:
        return self.dispatch(DeleteNode(node_id=node_id))

    def update_label(self, node_id: str, label: str) -> bool:
        return self.dispatch(UpdateLabel(node_id=node_id, label=label))

    def load(self, tree: WorkflowTree) -> bool:
        return self.dispatch(LoadTree(tree=tree))

    def undo(self) -> bool:
        return self.dispatch(Undo())

    def redo(self) -> bool:
        return self.dispatch(Redo())

    def save(self) -> Path:
        """Write the current tree through the configured store."""

        if self._store is None:
            raise RuntimeError("WorkflowEditor has no store configured")
        return self._store.save(self.tree)
