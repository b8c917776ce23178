"""Depth- and parent-constrained projection of the content tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..content_tree import ContentNode, ContentTree
from ..errors import NavigationInvariantViolation

logger = logging.getLogger(__name__)


def _resolve_parent(tree: ContentTree, current_depth: int, ancestor_stack: Sequence[str]) -> ContentNode | None:
    if not ancestor_stack:
        return None
    parent = tree.node(ancestor_stack[-1])
    if parent.depth != current_depth - 1:
        raise NavigationInvariantViolation(
            f"ancestor {parent.id!r} sits at depth {parent.depth}, expected {current_depth - 1}"
        )
    return parent


def project_view(
    tree: ContentTree,
    current_depth: int,
    ancestor_stack: Sequence[str],
    is_renderable: Callable[[ContentNode], bool] | None = None,
) -> list[ContentNode]:
    """Return nodes visible at ``current_depth`` under the breadcrumb, in tree order.

    With an empty ``ancestor_stack`` every node at the depth qualifies.
    Degenerate nodes are dropped, as are nodes ``is_renderable`` rejects.
    A breadcrumb that does not resolve yields an empty view.
    """
    try:
        parent = _resolve_parent(tree, current_depth, ancestor_stack)
    except NavigationInvariantViolation as exc:
        logger.warning("Projection failed closed at depth %d: %s", current_depth, exc)
        return []

    candidates = parent.children if parent is not None else tree.nodes_at_depth(current_depth)
    view = [
        node
        for node in candidates
        if node.depth == current_depth
        and not node.is_degenerate
        and (is_renderable is None or is_renderable(node))
    ]
    logger.debug(
        "Projected %d of %d nodes at depth %d (breadcrumb %d deep)",
        len(view),
        len(candidates),
        current_depth,
        len(ancestor_stack),
    )
    return view
