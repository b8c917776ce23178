"""Content-tree model and document loading.

Defines ``ContentNode``/``ValueAnnotation`` and the immutable ``ContentTree``.
The loader turns extractor JSON into a validated tree.
"""

from __future__ import annotations

from .loader import SYNTHETIC_ROOT_ID, load_tree, load_tree_file, tree_from_data
from .types import VALUE_FLAGS, ContentNode, ContentTree, ValueAnnotation

__all__ = [
    "VALUE_FLAGS",
    "ValueAnnotation",
    "ContentNode",
    "ContentTree",
    "SYNTHETIC_ROOT_ID",
    "load_tree",
    "load_tree_file",
    "tree_from_data",
]
