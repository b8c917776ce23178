"""JSON document loading for content trees.

Accepts either a nested node document or the extractor's flat object list.
Malformed input raises ``DeserializationError``; partial trees are never returned.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..errors import DeserializationError
from .types import VALUE_FLAGS, ContentNode, ContentTree, ValueAnnotation

logger = logging.getLogger(__name__)

SYNTHETIC_ROOT_ID = "__root__"
TOO_DEEP_MESSAGE = "document nested too deeply"

# (id, parent_id, depth, values, child count) in pre-order
_Entry = tuple[str, str | None, int, tuple[ValueAnnotation, ...], int]


def load_tree(text: str) -> ContentTree:
    """Parse ``text`` as JSON and build a validated ``ContentTree``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeserializationError(f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    except RecursionError as exc:
        raise DeserializationError(TOO_DEEP_MESSAGE) from exc
    tree = tree_from_data(data)
    logger.info("Loaded content tree: %d nodes, max depth %d", len(tree), tree.max_depth)
    return tree


def load_tree_file(path: Path) -> ContentTree:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeserializationError(f"cannot read document: {exc}", str(path)) from exc
    return load_tree(text)


def tree_from_data(data: object) -> ContentTree:
    """Dispatch on document shape: flat ``complex_objects`` list or nested nodes."""
    if not isinstance(data, dict):
        raise DeserializationError("document must be a JSON object")
    try:
        if "complex_objects" in data:
            return ContentTree(_build_flat(data))
        if "root" in data:
            return ContentTree(_build_nested(data["root"]))
        return ContentTree(_build_nested(data))
    except RecursionError as exc:
        raise DeserializationError(TOO_DEEP_MESSAGE) from exc


def _scalar_text(raw: object, path: str) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (int, float)):
        return str(raw)
    raise DeserializationError("value must be a scalar", path)


def _annotation(raw: object, path: str) -> ValueAnnotation:
    if not isinstance(raw, dict):
        raise DeserializationError("value annotation must be an object", path)
    name = raw.get("name")
    if not isinstance(name, str):
        raise DeserializationError("value annotation needs a string 'name'", path)
    flags: dict[str, bool] = {}
    for flag in VALUE_FLAGS:
        flag_value = raw.get(flag, False)
        if not isinstance(flag_value, bool):
            raise DeserializationError(f"flag {flag!r} must be a boolean", path)
        flags[flag] = flag_value
    if flags["is_main_primary_content"] and not flags["is_primary_content"]:
        logger.debug("Promoting main primary content %s to primary content", path)
        flags["is_primary_content"] = True
    return ValueAnnotation(name=name, value=_scalar_text(raw.get("value"), f"{path}.value"), **flags)


def _annotations(raw: object, path: str) -> tuple[ValueAnnotation, ...]:
    if raw is None:
        return ()
    if isinstance(raw, dict):
        return tuple(
            ValueAnnotation(name=str(key), value=_scalar_text(value, f"{path}.{key}"))
            for key, value in raw.items()
        )
    if isinstance(raw, list):
        return tuple(_annotation(item, f"{path}[{idx}]") for idx, item in enumerate(raw))
    raise DeserializationError("values must be a list or an object", path)




def _declared_depth(raw: dict, path: str) -> int | None:
    declared = raw.get("depth")
    if declared is None:
        return None
    if isinstance(declared, bool) or not isinstance(declared, int) or declared < 0:
        raise DeserializationError("depth must be a non-negative integer", f"{path}.depth")
    return declared


def _assemble(entries: list[_Entry]) -> ContentNode:
    """Build owned nodes bottom-up from pre-order ``entries``."""
    built: list[ContentNode] = []
    for node_id, parent_id, depth, values, child_count in reversed(entries):
        children = tuple(built.pop() for _ in range(child_count))
        built.append(ContentNode(id=node_id, parent_id=parent_id, depth=depth, values=values, children=children))
    return built.pop()


def _build_nested(raw: object, path: str = "root") -> ContentNode:
    """Build a nested document; ids default to the dotted child position.

    The root takes its declared ``depth`` when present, else 0.
    """
    entries: list[_Entry] = []
    stack: list[tuple[object, str | None, int | None, str, str]] = [(raw, None, None, path, "0")]
    while stack:
        item, parent_id, depth, item_path, default_id = stack.pop()
        if not isinstance(item, dict):
            raise DeserializationError("node must be an object", item_path)
        node_id = item.get("id", default_id)
        if not isinstance(node_id, str) or not node_id:
            raise DeserializationError("node 'id' must be a non-empty string", item_path)

        declared_depth = _declared_depth(item, item_path)
        if depth is None:
            depth = declared_depth if declared_depth is not None else 0
        elif declared_depth is not None and declared_depth != depth:
            raise DeserializationError(
                f"declared depth {declared_depth!r} does not match nesting depth {depth}", item_path
            )
        declared_parent = item.get("parent_id")
        if declared_parent is not None and declared_parent != parent_id:
            raise DeserializationError(f"declared parent_id {declared_parent!r} does not match owner", item_path)

        values = _annotations(item.get("values"), f"{item_path}.values")
        raw_children = item.get("children", [])
        if raw_children is None:
            raw_children = []
        if not isinstance(raw_children, list):
            raise DeserializationError("children must be a list", f"{item_path}.children")

        entries.append((node_id, parent_id, depth, values, len(raw_children)))
        stack.extend(
            (child, node_id, depth + 1, f"{item_path}.children[{idx}]", f"{node_id}.{idx}")
            for idx, child in reversed(list(enumerate(raw_children)))
        )
    return _assemble(entries)


def _root_anchor(roots: list[str], records: dict[str, dict]) -> int | None:
    """Shared declared depth of every root, or ``None`` when any is missing or they differ."""
    declared = {records[object_id]["depth"] for object_id in roots}
    if len(declared) != 1 or None in declared:
        return None
    return declared.pop()


def _build_flat(data: dict) -> ContentNode:
    """Assemble the flat ``complex_objects`` form into one owned tree.

    Objects referenced by nobody become roots. Depths follow the roots'
    declared depth when they agree on one. More than one root is gathered
    under a synthetic root one level above them; roots declared at depth 0
    (or not at all) are then shifted down to depth 1.
    """
    raw_objects = data.get("complex_objects")
    if not isinstance(raw_objects, list):
        raise DeserializationError("complex_objects must be a list", "complex_objects")

    records: dict[str, dict] = {}
    order: list[str] = []
    for idx, raw in enumerate(raw_objects):
        path = f"complex_objects[{idx}]"
        if not isinstance(raw, dict):
            raise DeserializationError("object must be an object", path)
        object_id = raw.get("id")
        if not isinstance(object_id, str) or not object_id:
            raise DeserializationError("object 'id' must be a non-empty string", path)
        if object_id in records:
            raise DeserializationError(f"duplicate object id {object_id!r}", path)
        child_ids = raw.get("complex_objects", [])
        if not isinstance(child_ids, list) or not all(isinstance(child, str) for child in child_ids):
            raise DeserializationError("complex_objects must list child ids", f"{path}.complex_objects")
        records[object_id] = {
            "raw": raw,
            "path": path,
            "children": child_ids,
            "depth": _declared_depth(raw, path),
        }
        order.append(object_id)

    owner: dict[str, str] = {}
    for object_id in order:
        record = records[object_id]
        for child_id in record["children"]:
            if child_id not in records:
                raise DeserializationError(f"unknown child id {child_id!r}", f"{record['path']}.complex_objects")
            if child_id in owner:
                raise DeserializationError(f"object {child_id!r} has more than one parent", record["path"])
            owner[child_id] = object_id

    roots = [object_id for object_id in order if object_id not in owner]
    if not roots:
        raise DeserializationError("object graph has no root (cycle)", "complex_objects")

    anchor = _root_anchor(roots, records)
    entries: list[_Entry] = []
    if len(roots) == 1:
        top_parent: str | None = None
        top_depth = anchor if anchor is not None else 0
    else:
        if SYNTHETIC_ROOT_ID in records:
            raise DeserializationError(f"object id {SYNTHETIC_ROOT_ID!r} is reserved", "complex_objects")
        top_parent = SYNTHETIC_ROOT_ID
        top_depth = anchor if anchor is not None and anchor >= 1 else 1
        entries.append((SYNTHETIC_ROOT_ID, None, top_depth - 1, (), len(roots)))

    # Every object has at most one owner, so only unreachable objects can sit on a cycle.
    stack = [(object_id, top_parent, top_depth) for object_id in reversed(roots)]
    while stack:
        object_id, parent_id, depth = stack.pop()
        record = records[object_id]
        parent = records.get(parent_id) if parent_id is not None else None
        if parent is not None and parent["depth"] is not None and record["depth"] is not None:
            if record["depth"] != parent["depth"] + 1:
                raise DeserializationError(
                    f"declared depth {record['depth']} is not parent depth {parent['depth']} + 1",
                    record["path"],
                )
        values = _annotations(record["raw"].get("values"), f"{record['path']}.values")
        entries.append((object_id, parent_id, depth, values, len(record["children"])))
        stack.extend((child_id, object_id, depth + 1) for child_id in reversed(record["children"]))

    reached = len(entries) - (0 if top_parent is None else 1)
    if reached != len(records):
        raise DeserializationError("object graph contains an unreachable cycle", "complex_objects")
    return _assemble(entries)
