"""Starting-depth heuristic based on where main primary content concentrates."""

from __future__ import annotations

import logging
from collections import Counter

from ..content_tree import ContentTree

logger = logging.getLogger(__name__)

CANDIDATE_SHARE = 0.10


def main_content_depth_counts(tree: ContentTree) -> dict[int, int]:
    """Count ``is_main_primary_content`` values per owning-node depth."""
    counts: Counter[int] = Counter()
    for node in tree.walk():
        for value in node.values:
            if value.is_main_primary_content:
                counts[node.depth] += 1
    return dict(counts)


def coherent_depth(tree: ContentTree) -> int | None:
    """Return one level above the shallowest dense main-content depth.

    A depth is dense when it holds more than ``CANDIDATE_SHARE`` of all main
    primary content values. Returns ``None`` when no depth qualifies.
    """
    counts = main_content_depth_counts(tree)
    total = sum(counts.values())
    candidates = [depth for depth, count in counts.items() if count > total * CANDIDATE_SHARE]
    if not candidates:
        return None
    return max(min(candidates) - 1, 0)


def initial_depth(tree: ContentTree, default: int = 0) -> int:
    """Guarded estimator: falls back to ``default`` and clamps into the tree."""
    estimated = coherent_depth(tree)
    if estimated is None:
        logger.info("No main primary content concentration; starting at depth %d", default)
        estimated = default
    else:
        logger.info("Estimated coherent depth %d", estimated)
    return max(tree.min_depth, min(estimated, tree.max_depth))
