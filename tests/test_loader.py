"""Tests for JSON document loading in nested and flat shapes.

Malformed documents must raise ``DeserializationError`` with a locating path.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tooey.content_tree import SYNTHETIC_ROOT_ID, load_tree, load_tree_file, tree_from_data
from tooey.content_tree.loader import TOO_DEEP_MESSAGE
from tooey.errors import DeserializationError


NESTED_DOC = {
    "root": {
        "id": "page",
        "values": [{"name": "title", "value": "Front page", "is_title": True}],
        "children": [
            {
                "id": "story-1",
                "values": [
                    {"name": "headline", "value": "Hello", "is_primary_content": True, "is_main_primary_content": True},
                    {"name": "link", "value": "https://example.com/1", "is_url": True},
                ],
            },
            {"values": {"headline": "Second", "score": 42}},
        ],
    }
}


class NestedLoaderTests(unittest.TestCase):
    def test_loads_nested_document_with_generated_ids(self) -> None:
        tree = load_tree(json.dumps(NESTED_DOC))
        self.assertEqual(tree.root.id, "page")
        self.assertEqual([child.id for child in tree.root.children], ["story-1", "page.1"])
        self.assertEqual(tree.max_depth, 1)
        second = tree.node("page.1")
        self.assertEqual(second.parent_id, "page")
        self.assertEqual([(item.name, item.value) for item in second.values], [("headline", "Second"), ("score", "42")])

    def test_flags_are_read(self) -> None:
        tree = load_tree(json.dumps(NESTED_DOC))
        headline, link = tree.node("story-1").values
        self.assertTrue(headline.is_main_primary_content)
        self.assertTrue(headline.is_primary_content)
        self.assertTrue(link.is_url)
        self.assertFalse(link.is_primary_content)

    def test_main_primary_is_promoted_to_primary(self) -> None:
        doc = {"id": "r", "values": [{"name": "x", "value": "y", "is_main_primary_content": True}]}
        tree = load_tree(json.dumps(doc))
        self.assertTrue(tree.root.values[0].is_primary_content)

    def test_bare_node_document_is_accepted(self) -> None:
        tree = load_tree('{"id": "solo", "values": [{"name": "a", "value": null}]}')
        self.assertEqual(tree.root.values[0].value, "")

    def test_invalid_json_is_deserialization_error(self) -> None:
        with self.assertRaises(DeserializationError):
            load_tree("{not json")

    def test_non_object_document_is_rejected(self) -> None:
        with self.assertRaises(DeserializationError):
            load_tree("[1, 2, 3]")

    def test_error_path_points_at_bad_element(self) -> None:
        doc = {"id": "r", "children": [{"id": "a"}, {"id": "b", "values": [{"name": "n", "value": "v", "is_url": "yes"}]}]}
        with self.assertRaises(DeserializationError) as ctx:
            load_tree(json.dumps(doc))
        self.assertEqual(ctx.exception.path, "root.children[1].values[0]")

    def test_declared_depth_must_match_nesting(self) -> None:
        doc = {"id": "r", "depth": 0, "children": [{"id": "a", "depth": 3}]}
        with self.assertRaises(DeserializationError):
            load_tree(json.dumps(doc))

    def test_children_must_be_list(self) -> None:
        with self.assertRaises(DeserializationError):
            load_tree('{"id": "r", "children": {"id": "a"}}')

    def test_nested_values_must_be_scalars(self) -> None:
        with self.assertRaises(DeserializationError):
            load_tree('{"id": "r", "values": {"a": [1, 2]}}')

    def test_load_tree_file_reads_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.json"
            path.write_text(json.dumps(NESTED_DOC), encoding="utf-8")
            self.assertEqual(load_tree_file(path).root.id, "page")

    def test_load_tree_file_missing_path(self) -> None:
        with self.assertRaises(DeserializationError):
            load_tree_file(Path("/nonexistent/doc.json"))


class FlatLoaderTests(unittest.TestCase):
    def test_single_root_flat_document(self) -> None:
        doc = {
            "complex_types": [],
            "meta": {"object_count": 3, "type_count": 0},
            "complex_objects": [
                {"id": "c1", "type_id": "t", "values": {"b": "2"}, "depth": 1, "complex_objects": []},
                {"id": "root", "type_id": "t", "values": {"a": "1"}, "depth": 0, "complex_objects": ["c1", "c2"]},
                {"id": "c2", "type_id": "t", "values": {}, "depth": 1, "complex_objects": []},
            ],
        }
        tree = load_tree(json.dumps(doc))
        self.assertEqual(tree.root.id, "root")
        self.assertEqual([child.id for child in tree.root.children], ["c1", "c2"])
        self.assertEqual(tree.node("c1").depth, 1)

    def test_multiple_roots_are_gathered_under_synthetic_root(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "x", "values": {"a": "1"}, "depth": 0, "complex_objects": ["x1"]},
                {"id": "y", "values": {"a": "2"}, "depth": 0, "complex_objects": []},
                {"id": "x1", "values": {"a": "3"}, "depth": 1, "complex_objects": []},
            ]
        }
        tree = load_tree(json.dumps(doc))
        self.assertEqual(tree.root.id, SYNTHETIC_ROOT_ID)
        self.assertEqual([child.id for child in tree.root.children], ["x", "y"])
        self.assertEqual(tree.node("x1").depth, 2)
        self.assertEqual(tree.max_depth, 2)

    def test_shared_child_is_rejected(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "a", "complex_objects": ["c"]},
                {"id": "b", "complex_objects": ["c"]},
                {"id": "c", "complex_objects": []},
            ]
        }
        with self.assertRaises(DeserializationError):
            load_tree(json.dumps(doc))

    def test_detached_cycle_is_rejected(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "root", "complex_objects": []},
                {"id": "a", "complex_objects": ["b"]},
                {"id": "b", "complex_objects": ["a"]},
            ]
        }
        with self.assertRaises(DeserializationError):
            load_tree(json.dumps(doc))

    def test_unknown_child_reference_is_rejected(self) -> None:
        with self.assertRaises(DeserializationError) as ctx:
            load_tree('{"complex_objects": [{"id": "a", "complex_objects": ["ghost"]}]}')
        self.assertEqual(ctx.exception.path, "complex_objects[0].complex_objects")

    def test_inconsistent_declared_depths_are_rejected(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "a", "depth": 0, "complex_objects": ["b"]},
                {"id": "b", "depth": 5, "complex_objects": []},
            ]
        }
        with self.assertRaises(DeserializationError):
            load_tree(json.dumps(doc))

    def test_negative_declared_depth_is_rejected(self) -> None:
        with self.assertRaises(DeserializationError) as ctx:
            load_tree('{"complex_objects": [{"id": "a", "depth": -1, "complex_objects": []}]}')
        self.assertEqual(ctx.exception.path, "complex_objects[0].depth")


def flat_chain(length: int, first_depth: int | None = 0) -> dict:
    objects = []
    for idx in range(length):
        record = {"id": f"c{idx}", "values": {"t": f"level {idx}"}, "complex_objects": []}
        if idx + 1 < length:
            record["complex_objects"] = [f"c{idx + 1}"]
        if first_depth is not None:
            record["depth"] = first_depth + idx
        objects.append(record)
    return {"complex_objects": objects}


class DeepDocumentTests(unittest.TestCase):
    def test_long_flat_chain_loads(self) -> None:
        tree = load_tree(json.dumps(flat_chain(1500)))
        self.assertEqual(len(tree), 1500)
        self.assertEqual(tree.max_depth, 1499)
        self.assertEqual(tree.node("c1499").parent_id, "c1498")

    def test_deeply_nested_document_loads_or_fails_structured(self) -> None:
        text = '{"children": [' * 3000 + "{}" + "]}" * 3000
        try:
            tree = load_tree(text)
        except DeserializationError as exc:
            self.assertEqual(exc.message, TOO_DEEP_MESSAGE)
        else:
            self.assertEqual(tree.max_depth, 3000)

    def test_recursion_limit_becomes_deserialization_error(self) -> None:
        with mock.patch("tooey.content_tree.loader._build_nested", side_effect=RecursionError):
            with self.assertRaises(DeserializationError) as ctx:
                tree_from_data({"id": "r"})
        self.assertEqual(ctx.exception.message, TOO_DEEP_MESSAGE)


class DeclaredDepthTests(unittest.TestCase):
    def test_flat_root_keeps_declared_depth(self) -> None:
        tree = load_tree(json.dumps(flat_chain(3, first_depth=2)))
        self.assertEqual((tree.min_depth, tree.max_depth), (2, 4))
        self.assertEqual(tree.node("c1").depth, 3)

    def test_flat_roots_sharing_a_depth_keep_it(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "x", "depth": 1, "complex_objects": ["x1"]},
                {"id": "y", "depth": 1, "complex_objects": []},
                {"id": "x1", "depth": 2, "complex_objects": []},
            ]
        }
        tree = load_tree(json.dumps(doc))
        self.assertEqual(tree.root.id, SYNTHETIC_ROOT_ID)
        self.assertEqual(tree.root.depth, 0)
        self.assertEqual([tree.node(object_id).depth for object_id in ("x", "y", "x1")], [1, 1, 2])

    def test_flat_roots_with_mixed_depths_are_rebased(self) -> None:
        doc = {
            "complex_objects": [
                {"id": "x", "depth": 3, "complex_objects": []},
                {"id": "y", "depth": 5, "complex_objects": []},
            ]
        }
        tree = load_tree(json.dumps(doc))
        self.assertEqual([tree.node(object_id).depth for object_id in ("x", "y")], [1, 1])

    def test_undeclared_flat_root_starts_at_zero(self) -> None:
        tree = load_tree(json.dumps(flat_chain(2, first_depth=None)))
        self.assertEqual(tree.root.depth, 0)

    def test_nested_root_keeps_declared_depth(self) -> None:
        tree = load_tree('{"id": "r", "depth": 2, "children": [{"id": "a", "depth": 3}]}')
        self.assertEqual((tree.min_depth, tree.node("a").depth), (2, 3))


if __name__ == "__main__":
    unittest.main()
