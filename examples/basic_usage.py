#!/usr/bin/env python3
"""Programmatic editing example.

This demonstrates using the engine directly:

* build a small workflow (start -> action -> condition -> end)
* undo and redo an edit
* save the result to a tree document

The output path is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from workflow_builder.engine.editor import WorkflowEditor
from workflow_builder.engine.ids import SequentialIdSource
from workflow_builder.engine.store import WorkflowTreeStore
from workflow_builder.logging import configure_logging
from workflow_builder.main import render_outline


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a small workflow (programmatic example).")
    parser.add_argument("--out", default="workflow/example.json", help="Where to save the tree")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging("INFO")

    editor = WorkflowEditor(
        store=WorkflowTreeStore(Path(args.out)), id_source=SequentialIdSource(prefix="step-")
    )
    root_id = editor.tree.root_id

    editor.add_node(root_id, 0, "action")
    editor.update_label("step-1", "Fetch order")
    editor.add_node("step-1", 0, "branch")
    editor.update_label("step-2", "Paid?")
    editor.add_node("step-2", 0, "end")
    editor.add_node("step-2", 1, "action")
    editor.update_label("step-4", "Send reminder")

    editor.undo()
    print("After undo:")
    print(render_outline(editor.tree))

    editor.redo()
    print("After redo:")
    print(render_outline(editor.tree))

    path = editor.save()
    print(f"Saved to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
