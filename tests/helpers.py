"""Small builders for hand-made content trees used across tests."""

from __future__ import annotations

from tooey.content_tree import ContentNode, ContentTree, ValueAnnotation


def value(name: str, text: str, **flags: bool) -> ValueAnnotation:
    return ValueAnnotation(name=name, value=text, **flags)


def node(node_id: str, *children_or_values, parent_id: str | None = None, depth: int = 0) -> ContentNode:
    """Build a node, fixing up ``parent_id``/``depth`` of nested children."""
    values = tuple(item for item in children_or_values if isinstance(item, ValueAnnotation))
    raw_children = [item for item in children_or_values if isinstance(item, ContentNode)]
    children = tuple(_reparent(child, node_id, depth + 1) for child in raw_children)
    return ContentNode(id=node_id, parent_id=parent_id, depth=depth, values=values, children=children)


def _reparent(child: ContentNode, parent_id: str, depth: int) -> ContentNode:
    children = tuple(_reparent(grandchild, child.id, depth + 1) for grandchild in child.children)
    return ContentNode(id=child.id, parent_id=parent_id, depth=depth, values=child.values, children=children)


def tree(root: ContentNode) -> ContentTree:
    return ContentTree(root)
