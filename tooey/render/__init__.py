"""Rendering: node-to-line conversion and terminal frame composition."""

from __future__ import annotations

from .lines import (
    DEFAULT_MAX_LINES,
    DEFAULT_WRAP_WIDTH,
    ROLE_ATTENTION,
    ROLE_BODY,
    ROLE_EMPHASIS,
    TRUNCATION_MARKER,
    LineRenderer,
    Span,
    StyledLine,
)
from .screen import RenderContext, build_frame, node_label, render_frame, styled_line_with_ansi

__all__ = [
    "DEFAULT_MAX_LINES",
    "DEFAULT_WRAP_WIDTH",
    "ROLE_ATTENTION",
    "ROLE_BODY",
    "ROLE_EMPHASIS",
    "TRUNCATION_MARKER",
    "LineRenderer",
    "Span",
    "StyledLine",
    "RenderContext",
    "build_frame",
    "node_label",
    "render_frame",
    "styled_line_with_ansi",
]
