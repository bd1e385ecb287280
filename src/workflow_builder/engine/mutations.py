"""Pure tree mutations.

Every function takes a snapshot and returns either a new snapshot or the very
same object when the request does not apply (a no-op, detected by identity).
Only the touched node records and the arena dicts are copied; every other node
record is shared with the input tree.
"""

from __future__ import annotations

from .ids import IdSource
from .model import NodeKind, SlotRef, WorkflowNode, WorkflowTree, template_for


def add_node(
    tree: WorkflowTree,
    parent_id: str,
    slot_index: int,
    kind: NodeKind | str,
    id_source: IdSource,
) -> WorkflowTree:
    """Insert a node of ``kind`` into ``parent_id``'s slot ``slot_index``.

    If the slot is occupied, the occupant becomes the new node's first child.
    A new ``end`` node has no slots, so the occupant is dropped and stays in
    ``nodes`` as an orphan.
    """

    parent = tree.nodes.get(parent_id)
    if parent is None or not 0 <= slot_index < len(parent.children):
        return tree

    template = template_for(kind)
    new_id = id_source.next()
    if new_id in tree.nodes:
        raise ValueError(f"Identifier source returned an id already in use: {new_id}")

    nodes = dict(tree.nodes)
    parents = dict(tree.parent_index or {})

    children = list(template.children)
    occupant = parent.children[slot_index]
    if occupant is not None:
        if children:
            children[0] = occupant
            parents[occupant] = SlotRef(parent_id=new_id, index=0)
        else:
            parents.pop(occupant, None)

    nodes[new_id] = WorkflowNode(
        id=new_id, kind=template.kind, label=template.label, children=tuple(children)
    )
    nodes[parent_id] = parent.with_slot(slot_index, new_id)
    parents[new_id] = SlotRef(parent_id=parent_id, index=slot_index)
    return tree.with_nodes(nodes, parents)


def delete_node(tree: WorkflowTree, node_id: str) -> WorkflowTree:
    """Remove ``node_id`` and promote its first live child into the parent slot.

    Any further children of the deleted node are left in place as orphans.
    The root, unknown ids and nodes without a parent are never deleted.
    """

    if node_id == tree.root_id:
        return tree
    node = tree.nodes.get(node_id)
    ref = tree.parent_of(node_id)
    if node is None or ref is None:
        return tree

    successor = node.first_child
    parent = tree.nodes[ref.parent_id]

    nodes = dict(tree.nodes)
    parents = dict(tree.parent_index or {})

    nodes[parent.id] = parent.with_slot(ref.index, successor)
    del nodes[node_id]
    del parents[node_id]
    for child in node.children:
        if child is not None:
            parents.pop(child, None)
    if successor is not None:
        parents[successor] = ref
    return tree.with_nodes(nodes, parents)


def update_label(tree: WorkflowTree, node_id: str, label: str) -> WorkflowTree:
    node = tree.nodes.get(node_id)
    if node is None:
        return tree

    nodes = dict(tree.nodes)
    nodes[node_id] = node.with_label(label)
    return tree.with_nodes(nodes, dict(tree.parent_index or {}))


def load_tree(tree: WorkflowTree, new_tree: WorkflowTree) -> WorkflowTree:
    _ = tree
    return new_tree
