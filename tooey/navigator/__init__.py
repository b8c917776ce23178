"""Navigation core: view projection, depth estimation, selection, and state.

All of it is synchronous and pure apart from ``Navigator``'s own state; the
content tree is shared read-only.
"""

from __future__ import annotations

from .estimate import CANDIDATE_SHARE, coherent_depth, initial_depth, main_content_depth_counts
from .projection import project_view
from .selection import SelectionList
from .state import NavigationState, Navigator

__all__ = [
    "CANDIDATE_SHARE",
    "coherent_depth",
    "initial_depth",
    "main_content_depth_counts",
    "project_view",
    "SelectionList",
    "NavigationState",
    "Navigator",
]
