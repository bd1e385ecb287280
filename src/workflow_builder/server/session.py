"""Per-app editing session shared by request handlers.

FastAPI runs sync handlers on a thread pool; the lock makes edits apply one at
a time, in arrival order, and keeps reads consistent with the last edit.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

from workflow_builder.engine.editor import WorkflowEditor
from workflow_builder.engine.edits import EditRequest
from workflow_builder.engine.history import WorkflowHistory
from workflow_builder.engine.ids import SequentialIdSource
from workflow_builder.engine.store import WorkflowTreeModel, WorkflowTreeStore
from workflow_builder.server.config import ServerSettings
from workflow_builder.server.models import EditResult, WorkflowView


@dataclass
class WorkflowSession:
    editor: WorkflowEditor

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: ServerSettings) -> WorkflowSession:
        store = WorkflowTreeStore(settings.workflow_tree_path)
        # Startup load seeds the history; it is not an undoable edit.
        history = WorkflowHistory(
            store.load(), id_source=SequentialIdSource(prefix=settings.workflow_id_prefix)
        )
        return cls(editor=WorkflowEditor(history, store=store))

    def _view_unlocked(self) -> WorkflowView:
        tree = self.editor.tree
        return WorkflowView(
            tree=WorkflowTreeModel.from_tree(tree),
            canUndo=self.editor.can_undo,
            canRedo=self.editor.can_redo,
            orphans=tree.orphan_ids(),
        )

    def view(self) -> WorkflowView:
        with self._lock:
            return self._view_unlocked()

    def apply(self, edit: EditRequest) -> EditResult:
        with self._lock:
            changed = self.editor.dispatch(edit)
            view = self._view_unlocked()
        return EditResult(**view.model_dump(), changed=changed)

    def save(self) -> Path:
        with self._lock:
            return self.editor.save()
