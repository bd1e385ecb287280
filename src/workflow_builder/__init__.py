"""Workflow Builder.

Edit a branching workflow (start -> actions/conditions -> end) with undo/redo:
- an immutable workflow tree engine
- configuration loaded from `.env`
- structured logging
- a CLI and a REST API over the same engine
"""

__version__ = "0.1.0"

from workflow_builder.config import EditorSettings
from workflow_builder.engine import WorkflowEditor

__all__ = ["__version__", "EditorSettings", "WorkflowEditor"]
