"""Content-tree datatypes: classified values, nodes, and the owning tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..errors import DeserializationError, NavigationInvariantViolation

VALUE_FLAGS: tuple[str, ...] = (
    "is_id",
    "is_url",
    "is_decorative",
    "is_action_link",
    "is_title",
    "is_primary_content",
    "is_main_primary_content",
)


@dataclass(frozen=True)
class ValueAnnotation:
    """One labeled scalar extracted from the source document."""

    name: str
    value: str
    is_id: bool = False
    is_url: bool = False
    is_decorative: bool = False
    is_action_link: bool = False
    is_title: bool = False
    is_primary_content: bool = False
    is_main_primary_content: bool = False


@dataclass(frozen=True)
class ContentNode:
    """One unit of extracted content; children are owned exclusively."""

    id: str
    parent_id: str | None
    depth: int
    values: tuple[ValueAnnotation, ...] = ()
    children: tuple[ContentNode, ...] = ()

    @property
    def is_degenerate(self) -> bool:
        """Return whether the node carries neither values nor children."""
        return not self.values and not self.children

    def walk(self) -> Iterator[ContentNode]:
        """Yield this node and its descendants in pre-order."""
        stack: list[ContentNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class ContentTree:
    """Immutable tree holder with an id index and precomputed depth bound.

    The constructor validates parent/child linkage, depth increments, and id
    uniqueness, raising ``DeserializationError`` on the first violation.
    """

    def __init__(self, root: ContentNode) -> None:
        if root.parent_id is not None:
            raise DeserializationError("root node must not have a parent_id", root.id)
        if root.depth < 0:
            raise DeserializationError("root depth must be non-negative", root.id)
        self.root = root
        self._index: dict[str, ContentNode] = {}
        self._order: list[ContentNode] = []
        max_depth = root.depth
        for node in root.walk():
            if node.id in self._index:
                raise DeserializationError(f"duplicate node id {node.id!r}", node.id)
            self._index[node.id] = node
            self._order.append(node)
            max_depth = max(max_depth, node.depth)
            for child in node.children:
                if child.parent_id != node.id:
                    raise DeserializationError(
                        f"parent_id {child.parent_id!r} does not match owner {node.id!r}",
                        child.id,
                    )
                if child.depth != node.depth + 1:
                    raise DeserializationError(
                        f"depth {child.depth} is not parent depth {node.depth} + 1",
                        child.id,
                    )
        self.min_depth = root.depth
        self.max_depth = max_depth

    def __len__(self) -> int:
        return len(self._order)

    def contains(self, node_id: str) -> bool:
        return node_id in self._index

    def node(self, node_id: str) -> ContentNode:
        """Resolve ``node_id`` or raise ``NavigationInvariantViolation``."""
        try:
            return self._index[node_id]
        except KeyError:
            raise NavigationInvariantViolation(f"unknown node id {node_id!r}") from None

    def walk(self) -> Iterator[ContentNode]:
        """Yield every node in tree (pre-) order."""
        return iter(self._order)

    def nodes_at_depth(self, depth: int) -> list[ContentNode]:
        return [node for node in self._order if node.depth == depth]
