"""Frame composition for the item list view.

Defines render context data and writes fully composed ANSI frames.
Scrolling math and styling are pure; only ``render_frame`` touches the fd.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..ansi import clip_ansi_line, fit_ansi_line
from ..content_tree import ContentNode
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import help_panel_lines
from .lines import ROLE_ATTENTION, ROLE_EMPHASIS, Span, StyledLine

SELECTED_GUTTER = "▌ "
PLAIN_GUTTER = "  "
BREADCRUMB_SEPARATOR = " › "
BREADCRUMB_LABEL_MAX = 24
EMPTY_VIEW_HINT = "(nothing to show at this depth; press - to rise)"


@dataclass
class RenderContext:
    items: list[list[StyledLine]]
    selected: int | None
    current_depth: int
    max_depth: int
    width: int
    height: int
    breadcrumb: list[str] = field(default_factory=list)
    primary_only: bool = False
    show_help: bool = False
    start: int = 0
    selected_value: str | None = None
    theme: UITheme = DEFAULT_THEME


def node_label(node: ContentNode, max_len: int = BREADCRUMB_LABEL_MAX) -> str:
    """Short human label for a node: first title, else first displayable value, else id."""
    shown = [value for value in node.values if not value.is_id and not value.is_action_link]
    titles = [value for value in shown if value.is_title]
    text = (titles or shown)[0].value if (titles or shown) else node.id
    text = " ".join(text.split())
    if len(text) > max_len:
        text = text[: max_len - 1] + "…"
    return text


def span_with_ansi(span: Span, theme: UITheme) -> str:
    if span.role == ROLE_EMPHASIS:
        color = theme.emphasis
    elif span.role == ROLE_ATTENTION:
        color = theme.attention
    else:
        color = theme.body
    prefix = color + (theme.bold if span.bold else "") + (theme.underline if span.underline else "")
    if not prefix:
        return span.text
    return f"{prefix}{span.text}{theme.reset}"


def styled_line_with_ansi(line: StyledLine, theme: UITheme) -> str:
    """Render one ``StyledLine`` as ANSI text, spans separated by single spaces."""
    body = " ".join(span_with_ansi(span, theme) for span in line.spans)
    return " " * line.indent + body


def build_item_rows(items: list[list[StyledLine]]) -> list[tuple[int, StyledLine]]:
    """Flatten item lines into ``(item_index, line)`` rows with blank separators."""
    rows: list[tuple[int, StyledLine]] = []
    for idx, lines in enumerate(items):
        if idx > 0:
            rows.append((-1, StyledLine()))
        rows.extend((idx, line) for line in lines)
    return rows


def scroll_start_for_selection(
    rows: list[tuple[int, StyledLine]],
    selected: int | None,
    visible_rows: int,
    start: int,
) -> int:
    """Adjust ``start`` so the selected item's first row stays on screen."""
    visible_rows = max(1, visible_rows)
    max_start = max(0, len(rows) - visible_rows)
    if selected is not None:
        item_rows = [row_idx for row_idx, (item_idx, _line) in enumerate(rows) if item_idx == selected]
        if item_rows:
            first, last = item_rows[0], item_rows[-1]
            if first < start:
                start = first
            elif last >= start + visible_rows:
                start = last - visible_rows + 1 if last - first < visible_rows else first
    return max(0, min(start, max_start))


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def build_frame(context: RenderContext) -> tuple[str, int]:
    """Compose a full frame; returns ``(ansi_text, effective_start)``."""
    theme = context.theme
    width = max(1, context.width)
    height = max(3, context.height)
    help_rows = help_panel_lines(theme) if context.show_help else []
    body_rows = max(1, height - 2 - len(help_rows))
    line_width = max(1, width - 1)

    out: list[str] = ["\033[H\033[J"]
    crumbs = BREADCRUMB_SEPARATOR.join(context.breadcrumb)
    header = (
        f"{theme.header}tooey{theme.reset} "
        f"depth {context.current_depth}/{context.max_depth}"
        f"{'  ' + theme.breadcrumb + crumbs + theme.reset if crumbs else ''}"
    )
    out.append(clip_ansi_line(header, line_width))
    out.append(theme.reset + "\r\n")

    rows = build_item_rows(context.items)
    start = scroll_start_for_selection(rows, context.selected, body_rows, context.start)
    for offset in range(body_rows):
        row_idx = start + offset
        if not rows and offset == 0:
            out.append(clip_ansi_line(f"{theme.empty_hint}{EMPTY_VIEW_HINT}{theme.reset}", line_width))
        elif row_idx < len(rows):
            item_idx, line = rows[row_idx]
            is_selected = item_idx >= 0 and item_idx == context.selected
            text = styled_line_with_ansi(line, theme)
            if is_selected:
                gutter = f"{theme.selected_marker}{SELECTED_GUTTER}{theme.reset}"
                row_text = fit_ansi_line(gutter + text, line_width)
                if theme.selected:
                    row_text = theme.selected + row_text.replace(theme.reset, theme.reset + theme.selected)
            else:
                row_text = clip_ansi_line(PLAIN_GUTTER + text, line_width)
            out.append(row_text)
            out.append(theme.reset)
        out.append("\r\n")

    for help_line in help_rows:
        out.append(clip_ansi_line(help_line, line_width))
        out.append(theme.reset + "\r\n")

    count = len(context.items)
    position = f"{context.selected + 1}/{count}" if context.selected is not None else f"-/{count}"
    mode = "primary" if context.primary_only else "all"
    left_status = f" item {position}  depth {context.current_depth}/{context.max_depth}  [{mode}]"
    if context.selected_value is not None:
        left_status += f"  value: {' '.join(context.selected_value.split())}"
    out.append(theme.status)
    out.append(build_status_line(left_status, width))
    out.append(theme.reset)
    return "".join(out), start


def render_frame(context: RenderContext, fd: int) -> int:
    """Write one composed frame to ``fd`` and return the effective scroll start."""
    frame, start = build_frame(context)
    os.write(fd, frame.encode("utf-8", errors="replace"))
    return start
