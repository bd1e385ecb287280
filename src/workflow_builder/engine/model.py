"""Typed workflow tree: nodes, arity rules and the single root.

A :class:`WorkflowTree` is an immutable value. Mutations never edit a
published tree; they build a new one that shares untouched node records with
the previous snapshot.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType


class NodeKind(str, Enum):
    START = "start"
    ACTION = "action"
    BRANCH = "branch"
    END = "end"


ARITY: dict[NodeKind, int] = {
    NodeKind.START: 1,
    NodeKind.ACTION: 1,
    NodeKind.BRANCH: 2,
    NodeKind.END: 0,
}

# Branch slot 0 is taken when the condition holds.
BRANCH_SLOT_NAMES: tuple[str, str] = ("true", "false")

ROOT_ID = "start-1"


class UnknownNodeKindError(ValueError):
    """Raised for a node kind the engine has no rules for.

    This is an internal defect, never a consequence of user input.
    """


class InvalidTreeError(ValueError):
    pass


def _coerce_kind(kind: object) -> NodeKind:
    if isinstance(kind, NodeKind):
        return kind
    try:
        return NodeKind(kind)
    except ValueError:
        raise UnknownNodeKindError(f"Unknown node kind: {kind!r}") from None


def arity_of(kind: NodeKind | str) -> int:
    return ARITY[_coerce_kind(kind)]


def slot_name(kind: NodeKind | str, index: int) -> str:
    """Human-readable name of a slot (``true``/``false`` for branches)."""

    if _coerce_kind(kind) is NodeKind.BRANCH:
        return BRANCH_SLOT_NAMES[index]
    return str(index)


@dataclass(frozen=True, slots=True)
class NodeTemplate:
    kind: NodeKind
    label: str
    children: tuple[str | None, ...]


_TEMPLATES: dict[NodeKind, NodeTemplate] = {
    NodeKind.ACTION: NodeTemplate(kind=NodeKind.ACTION, label="Action", children=(None,)),
    NodeKind.BRANCH: NodeTemplate(kind=NodeKind.BRANCH, label="Condition", children=(None, None)),
    NodeKind.END: NodeTemplate(kind=NodeKind.END, label="End", children=()),
}


def template_for(kind: NodeKind | str) -> NodeTemplate:
    """Return the label and empty slots used to instantiate a new node.

    Only ``action``, ``branch`` and ``end`` nodes are ever instantiated; the
    single ``start`` node exists from the moment a tree is created.

    Raises:
        UnknownNodeKindError: if there is no template for ``kind``.
    """

    resolved = _coerce_kind(kind)
    template = _TEMPLATES.get(resolved)
    if template is None:
        raise UnknownNodeKindError(f"No node template for kind: {resolved.value}")
    return template


@dataclass(frozen=True, slots=True)
class WorkflowNode:
    id: str
    kind: NodeKind
    label: str
    children: tuple[str | None, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", _coerce_kind(self.kind))
        object.__setattr__(self, "children", tuple(self.children))
        expected = ARITY[self.kind]
        if len(self.children) != expected:
            raise ValueError(
                f"Node {self.id!r} of kind {self.kind.value} must have {expected} slot(s), "
                f"got {len(self.children)}"
            )

    @property
    def first_child(self) -> str | None:
        """First non-empty slot, scanned left to right."""

        return next((c for c in self.children if c is not None), None)

    def with_label(self, label: str) -> WorkflowNode:
        return replace(self, label=label)

    def with_slot(self, index: int, child_id: str | None) -> WorkflowNode:
        children = list(self.children)
        children[index] = child_id
        return replace(self, children=tuple(children))

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "children": list(self.children),
        }


@dataclass(frozen=True, slots=True)
class SlotRef:
    """Back-reference from a node to the slot holding it. Not an ownership edge."""

    parent_id: str
    index: int


def _build_parent_index(nodes: Mapping[str, WorkflowNode]) -> dict[str, SlotRef]:
    index: dict[str, SlotRef] = {}
    for node in nodes.values():
        for i, child in enumerate(node.children):
            if child is not None and child not in index:
                index[child] = SlotRef(parent_id=node.id, index=i)
    return index


@dataclass(frozen=True, slots=True)
class WorkflowTree:
    """An immutable snapshot of a workflow.

    ``nodes`` may contain orphans: nodes no longer reachable from the root.
    They are kept resident on purpose.

    ``parent_index`` is derived data and does not take part in equality. Trees
    built from scratch get it computed (and are validated); mutations pass the
    updated index in directly.
    """

    nodes: Mapping[str, WorkflowNode]
    root_id: str = ROOT_ID
    parent_index: Mapping[str, SlotRef] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.nodes, MappingProxyType):
            object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        if self.parent_index is None:
            self.validate()
            object.__setattr__(
                self, "parent_index", MappingProxyType(_build_parent_index(self.nodes))
            )

    @staticmethod
    def initial() -> WorkflowTree:
        root = WorkflowNode(id=ROOT_ID, kind=NodeKind.START, label="Start", children=(None,))
        return WorkflowTree(nodes={ROOT_ID: root}, root_id=ROOT_ID)

    @property
    def root(self) -> WorkflowNode:
        return self.nodes[self.root_id]

    def with_nodes(
        self, nodes: dict[str, WorkflowNode], parent_index: dict[str, SlotRef]
    ) -> WorkflowTree:
        """Build the next snapshot from freshly copied arena dicts."""

        return WorkflowTree(
            nodes=MappingProxyType(nodes),
            root_id=self.root_id,
            parent_index=MappingProxyType(parent_index),
        )

    def parent_of(self, node_id: str) -> SlotRef | None:
        return (self.parent_index or {}).get(node_id)

    def walk(self) -> Iterator[tuple[int, WorkflowNode]]:
        """Yield ``(depth, node)`` depth-first from the root, in slot order."""

        stack: list[tuple[int, str]] = [(0, self.root_id)]
        while stack:
            depth, node_id = stack.pop()
            node = self.nodes[node_id]
            yield depth, node
            for child in reversed(node.children):
                if child is not None:
                    stack.append((depth + 1, child))

    def reachable_ids(self) -> set[str]:
        return {node.id for _depth, node in self.walk()}

    def orphan_ids(self) -> list[str]:
        reachable = self.reachable_ids()
        return [node_id for node_id in self.nodes if node_id not in reachable]

    def validate(self) -> None:
        """Check the structural invariants of a tree built from outside the engine.

        Raises:
            InvalidTreeError: on the first violation found.
        """

        root = self.nodes.get(self.root_id)
        if root is None:
            raise InvalidTreeError(f"Root node {self.root_id!r} is missing")
        if root.kind is not NodeKind.START:
            raise InvalidTreeError(f"Root node must be a start node, got {root.kind.value}")

        referenced: set[str] = set()
        for key, node in self.nodes.items():
            if key != node.id:
                raise InvalidTreeError(f"Node stored under {key!r} has id {node.id!r}")
            for child in node.children:
                if child is None:
                    continue
                if child == self.root_id:
                    raise InvalidTreeError(f"Root node is referenced as a child of {node.id!r}")
                if child in referenced:
                    raise InvalidTreeError(f"Node {child!r} is referenced from more than one slot")
                referenced.add(child)

        # Single parent + root never a child means the reachable part is acyclic.
        stack = [self.root_id]
        while stack:
            node = self.nodes[stack.pop()]
            for child in node.children:
                if child is None:
                    continue
                if child not in self.nodes:
                    raise InvalidTreeError(f"Node {node.id!r} references missing node {child!r}")
                stack.append(child)

    def to_json(self) -> dict[str, object]:
        return {
            "rootId": self.root_id,
            "nodes": {node_id: node.to_json() for node_id, node in self.nodes.items()},
        }
