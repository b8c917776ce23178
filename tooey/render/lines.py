"""Node-to-line rendering for the item list.

Turns a node subtree into styled, packed, word-wrapped lines. The output is
terminal-agnostic; ``screen`` maps span roles onto a theme.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import display_width
from ..content_tree import ContentNode, ValueAnnotation

DEFAULT_WRAP_WIDTH = 160
DEFAULT_MAX_LINES = 20
DEFAULT_INDENT_WIDTH = 2
TRUNCATION_MARKER = "(truncated)"

ROLE_BODY = "body"
ROLE_EMPHASIS = "emphasis"
ROLE_ATTENTION = "attention"


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    text: str
    role: str = ROLE_BODY
    bold: bool = False
    underline: bool = False


@dataclass(frozen=True)
class StyledLine:
    """One display line: styled spans plus a left inset in columns."""

    spans: tuple[Span, ...] = ()
    indent: int = 0

    @property
    def plain_text(self) -> str:
        return " " * self.indent + " ".join(span.text for span in self.spans)

    @property
    def is_blank(self) -> bool:
        return not self.spans


BLANK_LINE = StyledLine()


def span_for_value(value: ValueAnnotation, text: str | None = None) -> Span:
    """Map classification flags to a span style."""
    return Span(
        text=value.value if text is None else text,
        role=ROLE_EMPHASIS if value.is_main_primary_content else ROLE_BODY,
        bold=value.is_title,
        underline=value.is_url,
    )


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap measured in display columns; words wider than ``width`` stay whole."""
    rows: list[str] = []
    row: list[str] = []
    row_width = 0
    for word in text.split():
        word_width = display_width(word)
        needed = word_width if not row else row_width + 1 + word_width
        if row and needed > width:
            rows.append(" ".join(row))
            row = []
            needed = word_width
        row.append(word)
        row_width = needed
    if row:
        rows.append(" ".join(row))
    return rows


def _value_sort_key(value: ValueAnnotation) -> tuple[bool, str]:
    return (not value.is_primary_content, value.name)


class LineRenderer:
    """Render a node and its descendants as ``StyledLine`` sequences.

    ``max_lines`` caps each node's own lines (not its descendants'). Lines of
    descendants are appended in tree order, inset by ``indent_width`` per
    level when ``indent_children`` is set.
    """

    def __init__(
        self,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        max_lines: int = DEFAULT_MAX_LINES,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        indent_children: bool = True,
        separate_groups: bool = True,
    ) -> None:
        self.wrap_width = max(1, wrap_width)
        self.max_lines = max(1, max_lines)
        self.indent_width = max(0, indent_width)
        self.indent_children = indent_children
        self.separate_groups = separate_groups

    def visible_values(self, node: ContentNode, primary_only: bool) -> list[ValueAnnotation]:
        """Return displayable values: ids and action links never show, primary first."""
        kept = [
            value
            for value in node.values
            if not value.is_id
            and not value.is_action_link
            and (value.is_primary_content or not primary_only)
        ]
        kept.sort(key=_value_sort_key)
        return kept

    def node_lines(self, node: ContentNode, primary_only: bool) -> list[StyledLine]:
        """Pack, wrap, and truncate the node's own values (no descendants).

        Whitespace runs, line breaks included, collapse to single spaces so
        every ``StyledLine`` occupies exactly one terminal row.
        """
        lines: list[StyledLine] = []
        current: list[Span] = []
        current_len = 0

        def flush() -> None:
            nonlocal current, current_len
            if current:
                lines.append(StyledLine(tuple(current)))
            current = []
            current_len = 0

        for value in self.visible_values(node, primary_only):
            text = " ".join(value.value.split())
            width = display_width(text)
            if width > self.wrap_width:
                flush()
                lines.extend(
                    StyledLine((span_for_value(value, chunk),)) for chunk in wrap_words(text, self.wrap_width)
                )
                continue
            needed = width if not current else current_len + 1 + width
            if current and needed > self.wrap_width:
                flush()
                needed = width
            current.append(span_for_value(value, text))
            current_len = needed
        flush()

        if len(lines) > self.max_lines:
            lines = lines[: self.max_lines]
            lines.append(StyledLine((Span(TRUNCATION_MARKER, role=ROLE_ATTENTION),)))
        return lines

    def render(self, node: ContentNode, primary_only: bool = False) -> list[StyledLine]:
        """Render ``node`` followed by every descendant in tree order."""
        productive = self._productive_ids(node, primary_only)
        out: list[StyledLine] = []
        # (node, index in ``out`` where its parent's lines begin)
        stack: list[tuple[ContentNode, int]] = [(node, 0)]
        while stack:
            current, parent_start = stack.pop()
            if current.id not in productive:
                continue
            if (
                current is not node
                and self.separate_groups
                and current.children
                and len(out) > parent_start
                and not out[-1].is_blank
            ):
                out.append(BLANK_LINE)
            start = len(out)
            indent = self.indent_width * (current.depth - node.depth) if self.indent_children else 0
            out.extend(StyledLine(line.spans, indent) for line in self.node_lines(current, primary_only))
            stack.extend((child, start) for child in reversed(current.children))
        return out

    def _productive_ids(self, node: ContentNode, primary_only: bool) -> set[str]:
        """Ids of nodes in ``node``'s subtree that yield at least one line."""
        productive: set[str] = set()
        for current in reversed(list(node.walk())):
            if self.visible_values(current, primary_only) or any(
                child.id in productive for child in current.children
            ):
                productive.add(current.id)
        return productive

    def has_output(self, node: ContentNode, primary_only: bool = False) -> bool:
        """Return whether ``render`` would yield at least one line."""
        return any(self.visible_values(current, primary_only) for current in node.walk())
