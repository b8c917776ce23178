"""Tests for node-to-line rendering: selection, ordering, packing, wrap, truncation."""

from __future__ import annotations

import unittest

from helpers import node, value

from tooey.ansi import display_width
from tooey.content_tree import ContentNode
from tooey.render import ROLE_ATTENTION, ROLE_BODY, ROLE_EMPHASIS, TRUNCATION_MARKER, LineRenderer


class ValueSelectionTests(unittest.TestCase):
    def test_ids_and_action_links_are_never_shown(self) -> None:
        item = node(
            "n",
            value("id", "123", is_id=True),
            value("act", "click", is_action_link=True),
            value("body", "hello"),
        )
        renderer = LineRenderer()
        self.assertEqual([v.name for v in renderer.visible_values(item, primary_only=False)], ["body"])

    def test_primary_only_keeps_primary_values(self) -> None:
        item = node(
            "n",
            value("a", "x"),
            value("b", "y", is_primary_content=True),
            value("c", "z", is_primary_content=True, is_id=True),
        )
        renderer = LineRenderer()
        self.assertEqual([v.name for v in renderer.visible_values(item, primary_only=True)], ["b"])

    def test_primary_values_sort_first_then_by_name(self) -> None:
        item = node(
            "n",
            value("zeta", "1"),
            value("beta", "2", is_primary_content=True),
            value("alpha", "3"),
            value("alpha2", "4", is_primary_content=True),
        )
        renderer = LineRenderer()
        self.assertEqual(
            [v.name for v in renderer.visible_values(item, primary_only=False)],
            ["alpha2", "beta", "alpha", "zeta"],
        )


class PackingTests(unittest.TestCase):
    def test_short_values_share_a_line(self) -> None:
        item = node("n", value("a", "one"), value("b", "two"), value("c", "three"))
        lines = LineRenderer(wrap_width=40).render(item)
        self.assertEqual([line.plain_text for line in lines], ["one two three"])

    def test_line_flushes_when_next_value_does_not_fit(self) -> None:
        item = node("n", value("a", "aaaa"), value("b", "bbbb"), value("c", "cccc"))
        lines = LineRenderer(wrap_width=9).render(item)
        self.assertEqual([line.plain_text for line in lines], ["aaaa bbbb", "cccc"])

    def test_long_value_wraps_on_its_own_without_truncation(self) -> None:
        long_text = "x" * 99 + " " + "y" * 100
        self.assertEqual(len(long_text), 200)
        item = node("n", value("a", "tiny"), value("b", long_text))
        lines = LineRenderer(wrap_width=160).render(node("m", value("b", long_text)))
        self.assertEqual(len(lines), 2)
        self.assertNotIn(TRUNCATION_MARKER, [line.plain_text for line in lines])
        mixed = LineRenderer(wrap_width=160).render(item)
        self.assertEqual([line.plain_text for line in mixed], ["tiny", "x" * 99, "y" * 100])

    def test_wrap_never_breaks_mid_word(self) -> None:
        item = node("n", value("a", "alpha beta gamma delta epsilon"))
        lines = LineRenderer(wrap_width=12).render(item)
        for line in lines:
            for word in line.plain_text.split():
                self.assertIn(word, {"alpha", "beta", "gamma", "delta", "epsilon"})

    def test_line_breaks_inside_values_collapse_to_spaces(self) -> None:
        item = node("n", value("a", "a\nb\nc"), value("b", "tab\tand  \r\n gap"))
        lines = LineRenderer().render(item)
        self.assertEqual([line.plain_text for line in lines], ["a b c tab and gap"])
        for line in lines:
            for span in line.spans:
                self.assertNotIn("\n", span.text)

    def test_many_embedded_rows_still_respect_line_cap(self) -> None:
        rows = "\n".join(f"r{idx}" for idx in range(10))
        lines = LineRenderer(wrap_width=160, max_lines=20).render(node("n", value("a", rows)))
        self.assertEqual([line.plain_text for line in lines], [" ".join(f"r{idx}" for idx in range(10))])

    def test_wide_characters_wrap_by_display_columns(self) -> None:
        text = " ".join(["日本語"] * 10)
        lines = LineRenderer(wrap_width=40).render(node("n", value("a", text)))
        self.assertEqual(len(lines), 2)
        for line in lines:
            self.assertLessEqual(display_width(line.plain_text), 40)

    def test_wide_values_pack_by_display_columns(self) -> None:
        item = node("n", value("a", "日本語日本語"), value("b", "中文中文中文"))
        lines = LineRenderer(wrap_width=20).render(item)
        self.assertEqual([line.plain_text for line in lines], ["日本語日本語", "中文中文中文"])

    def test_truncates_to_line_cap_with_marker(self) -> None:
        values = [value(f"v{idx:02d}", "w" * 100) for idx in range(25)]
        lines = LineRenderer(wrap_width=160, max_lines=20).render(node("n", *values))
        self.assertEqual(len(lines), 21)
        self.assertEqual(lines[-1].plain_text, TRUNCATION_MARKER)
        self.assertEqual(lines[-1].spans[0].role, ROLE_ATTENTION)


class StyleTests(unittest.TestCase):
    def test_flags_map_to_span_styles(self) -> None:
        item = node(
            "n",
            value("a", "main", is_primary_content=True, is_main_primary_content=True),
            value("b", "https://x.test", is_url=True),
            value("c", "Heading", is_title=True),
            value("d", "plain"),
        )
        spans = {span.text: span for line in LineRenderer().render(item) for span in line.spans}
        self.assertEqual(spans["main"].role, ROLE_EMPHASIS)
        self.assertTrue(spans["https://x.test"].underline)
        self.assertTrue(spans["Heading"].bold)
        plain = spans["plain"]
        self.assertEqual((plain.role, plain.bold, plain.underline), (ROLE_BODY, False, False))


class RecursionTests(unittest.TestCase):
    def test_children_follow_parent_with_indent(self) -> None:
        item = node("p", value("a", "parent"), node("c1", value("a", "child one")), node("c2", value("a", "child two")))
        lines = LineRenderer().render(item)
        self.assertEqual([line.plain_text for line in lines], ["parent", "  child one", "  child two"])

    def test_blank_line_before_child_group(self) -> None:
        item = node(
            "p",
            value("a", "parent"),
            node("leaf", value("a", "inline")),
            node("group", value("a", "list head"), node("g1", value("a", "entry"))),
        )
        lines = LineRenderer().render(item)
        self.assertEqual(
            [line.plain_text for line in lines],
            ["parent", "  inline", "", "  list head", "    entry"],
        )

    def test_indent_and_separator_can_be_disabled(self) -> None:
        item = node("p", value("a", "parent"), node("group", value("a", "head"), node("g1", value("a", "entry"))))
        lines = LineRenderer(indent_children=False, separate_groups=False).render(item)
        self.assertEqual([line.plain_text for line in lines], ["parent", "head", "entry"])

    def test_fully_filtered_node_renders_nothing(self) -> None:
        item = node("p", value("id", "1", is_id=True), node("c", value("act", "go", is_action_link=True)))
        renderer = LineRenderer()
        self.assertEqual(renderer.render(item), [])
        self.assertFalse(renderer.has_output(item))

    def test_deep_chain_renders_in_tree_order(self) -> None:
        chain: ContentNode | None = None
        for depth in range(1499, -1, -1):
            chain = ContentNode(
                id=f"n{depth}",
                parent_id=f"n{depth - 1}" if depth else None,
                depth=depth,
                values=(value("a", f"v{depth}"),),
                children=(chain,) if chain is not None else (),
            )
        renderer = LineRenderer(indent_children=False, separate_groups=False)
        lines = renderer.render(chain)
        self.assertEqual(len(lines), 1500)
        self.assertEqual((lines[0].plain_text, lines[-1].plain_text), ("v0", "v1499"))
        self.assertTrue(renderer.has_output(chain))

    def test_node_without_own_values_renders_descendants(self) -> None:
        item = node("p", node("c", value("a", "only child")))
        self.assertEqual([line.plain_text for line in LineRenderer().render(item)], ["  only child"])


if __name__ == "__main__":
    unittest.main()
