"""CLI entrypoint for the workflow builder.

Each command loads the persisted edit history, applies at most one edit and
writes the history back, so undo/redo work across invocations.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_builder import __version__
from workflow_builder.config import EditorSettings
from workflow_builder.engine.editor import WorkflowEditor
from workflow_builder.engine.history import HistoryState
from workflow_builder.engine.ids import SequentialIdSource
from workflow_builder.engine.model import (
    InvalidTreeError,
    NodeKind,
    WorkflowTree,
    slot_name,
)
from workflow_builder.engine.store import HistoryStore, WorkflowTreeStore, parse_tree, serialize_tree
from workflow_builder.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_INVALID_DOCUMENT = 3
EXIT_NO_CHANGE = 4

_INSERTABLE_KINDS = [NodeKind.ACTION.value, NodeKind.BRANCH.value, NodeKind.END.value]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-builder",
        description="Edit a branching workflow tree with undo/redo",
    )
    parser.add_argument("--version", action="version", version=f"workflow-builder {__version__}")
    parser.add_argument(
        "--history",
        default=None,
        help="Path to the history file (defaults to WORKFLOW_HISTORY_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Start a new workflow with a single start node")
    init.add_argument("--force", action="store_true", help="Overwrite an existing history file")

    show = subparsers.add_parser("show", help="Print the current workflow")
    show.add_argument("--json", action="store_true", help="Print the tree as JSON")
    show.add_argument("--orphans", action="store_true", help="List nodes unreachable from start")

    add = subparsers.add_parser("add", help="Insert a node into a parent's slot")
    add.add_argument("--parent", required=True, help="Parent node id")
    add.add_argument("--slot", type=int, default=0, help="Slot index on the parent (default 0)")
    add.add_argument("--kind", required=True, choices=_INSERTABLE_KINDS, help="Node kind")

    delete = subparsers.add_parser("delete", help="Delete a node, promoting its first child")
    delete.add_argument("--node", required=True, help="Node id")

    rename = subparsers.add_parser("rename", help="Change a node's label")
    rename.add_argument("--node", required=True, help="Node id")
    rename.add_argument("--label", required=True, help="New label")

    subparsers.add_parser("undo", help="Undo the last edit")
    subparsers.add_parser("redo", help="Redo the last undone edit")

    export = subparsers.add_parser("export", help="Save the current workflow as a tree document")
    export.add_argument(
        "--out", default=None, help="Output path (defaults to WORKFLOW_TREE_PATH)"
    )

    import_ = subparsers.add_parser("import", help="Replace the workflow with a tree document")
    import_.add_argument("--file", required=True, help="Tree document to load")

    validate = subparsers.add_parser("validate", help="Check a tree document without loading it")
    validate.add_argument("--file", required=True, help="Tree document to check")

    return parser


def render_outline(tree: WorkflowTree) -> str:
    """Indented outline of the reachable workflow, one node or empty slot per line."""

    lines: list[str] = []

    def visit(node_id: str, depth: int, prefix: str) -> None:
        node = tree.nodes[node_id]
        lines.append(f"{'  ' * depth}{prefix}{node.label} [{node.kind.value}] ({node.id})")
        for index, child in enumerate(node.children):
            slot = f"{slot_name(node.kind, index)}: "
            if child is None:
                lines.append(f"{'  ' * (depth + 1)}{slot}(empty)")
            else:
                visit(child, depth + 1, slot)

    visit(tree.root_id, 0, "")
    return "\n".join(lines)


def _read_document(path: Path) -> WorkflowTree:
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")
    return parse_tree(path.read_text(encoding="utf-8"))


def _report(changed: bool, message: str) -> int:
    if not changed:
        print("No change: the edit did not apply", file=sys.stderr)
        return EXIT_NO_CHANGE
    print(message)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = EditorSettings()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    configure_logging(settings.log_level)

    history_path = Path(args.history) if args.history else settings.workflow_history_path
    history_store = HistoryStore(history_path)

    try:
        if args.command == "init":
            if history_store.exists() and not args.force:
                print(f"History already exists: {history_path} (use --force)", file=sys.stderr)
                return EXIT_CONFIG
            history_store.save(HistoryState(past=(), present=WorkflowTree.initial(), future=()))
            print(f"Initialized workflow at {history_path}")
            return EXIT_OK

        if args.command == "validate":
            tree = _read_document(Path(args.file))
            print(f"OK: {len(tree.nodes)} node(s), {len(tree.orphan_ids())} orphan(s)")
            return EXIT_OK

        editor = WorkflowEditor.from_state(
            history_store.load(),
            store=WorkflowTreeStore(settings.workflow_tree_path),
            id_source=SequentialIdSource(prefix=settings.workflow_id_prefix),
        )

        if args.command == "show":
            if args.json:
                print(serialize_tree(editor.tree), end="")
            else:
                print(render_outline(editor.tree))
            if args.orphans:
                for orphan_id in editor.tree.orphan_ids():
                    print(f"orphan: {orphan_id}")
            return EXIT_OK

        if args.command == "export":
            if args.out:
                path = WorkflowTreeStore(Path(args.out)).save(editor.tree)
            else:
                path = editor.save()
            print(f"Saved workflow to {path}")
            return EXIT_OK

        if args.command == "add":
            changed = editor.add_node(args.parent, args.slot, args.kind)
            message = f"Added {args.kind} under {args.parent}[{args.slot}]"
        elif args.command == "delete":
            changed = editor.delete_node(args.node)
            message = f"Deleted {args.node}"
        elif args.command == "rename":
            changed = editor.update_label(args.node, args.label)
            message = f"Renamed {args.node}"
        elif args.command == "undo":
            changed = editor.undo()
            message = "Undone"
        elif args.command == "redo":
            changed = editor.redo()
            message = "Redone"
        elif args.command == "import":
            changed = editor.load(_read_document(Path(args.file)))
            message = f"Loaded workflow from {args.file}"
        else:
            logger.error("Unknown command", extra={"command": args.command})
            return EXIT_CONFIG

        if changed:
            history_store.save(editor.state)
        return _report(changed, message)

    except InvalidTreeError as e:
        logger.warning(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return EXIT_INVALID_DOCUMENT

    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
