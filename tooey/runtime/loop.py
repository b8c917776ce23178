"""Main interactive event loop for the terminal UI.

Single-threaded: redraw when dirty, poll one key with a bounded timeout,
decode it, and apply it to the navigator before the next redraw.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyRegistry, NavEvent, decode_key, default_key_registry, read_key
from ..navigator import Navigator
from ..render import RenderContext, node_label, render_frame
from ..session import SessionResult
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int = 50


@dataclass
class ViewState:
    """Presentation-only state owned by the loop, not the navigator."""

    show_help: bool = False
    start: int = 0
    dirty: bool = True
    last_size: tuple[int, int] | None = None


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``; tests swap these for fakes."""

    read_key: Callable[[int, int | None], str] = read_key
    render: Callable[[RenderContext, int], int] = render_frame
    terminal_size: Callable[[], tuple[int, int]] = lambda: tuple(shutil.get_terminal_size((80, 24)))
    on_filter_toggled: Callable[[bool], None] | None = None


def build_render_context(
    navigator: Navigator,
    view: ViewState,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> RenderContext:
    """Snapshot navigator + view state into a ``RenderContext``."""
    items = [navigator.renderer.render(node, navigator.primary_only) for node in navigator.view]
    selected_value = navigator.selected_value
    return RenderContext(
        items=items,
        selected=navigator.selection.cursor,
        current_depth=navigator.current_depth,
        max_depth=navigator.max_depth,
        width=width,
        height=height,
        breadcrumb=[node_label(node) for node in navigator.breadcrumb()],
        primary_only=navigator.primary_only,
        show_help=view.show_help,
        start=view.start,
        selected_value=selected_value.value if selected_value is not None else None,
        theme=theme,
    )


def handle_event(navigator: Navigator, view: ViewState, event: NavEvent) -> bool:
    """Apply one event; return ``True`` when the loop should stop."""
    if event is NavEvent.QUIT:
        return True
    if event is NavEvent.TOGGLE_HELP:
        view.show_help = not view.show_help
        view.dirty = True
        return False
    state_before = navigator.state.snapshot()
    if navigator.apply(event):
        if navigator.state.snapshot() != state_before:
            view.start = 0
        view.dirty = True
    return False


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming | None = None,
    callbacks: RuntimeLoopCallbacks | None = None,
    theme: UITheme = DEFAULT_THEME,
    registry: KeyRegistry[NavEvent] | None = None,
) -> SessionResult:
    """Run the interactive loop until a quit event and return the session result.

    ``InputError`` from the key reader propagates after the terminal has been
    restored by ``raw_mode``.
    """
    timing = timing or RuntimeLoopTiming()
    ops = callbacks or RuntimeLoopCallbacks()
    keys = registry or default_key_registry()
    view = ViewState()

    with terminal.raw_mode():
        while True:
            columns, lines = ops.terminal_size()
            if view.last_size != (columns, lines):
                view.last_size = (columns, lines)
                view.dirty = True
            if view.dirty:
                context = build_render_context(navigator, view, columns, lines, theme)
                view.start = ops.render(context, terminal.stdout_fd)
                view.dirty = False

            key = ops.read_key(stdin_fd, timing.poll_timeout_ms)
            if key == "":
                continue
            event = decode_key(key, keys)
            if event is None:
                logger.debug("Unbound key %r", key)
                continue
            primary_before = navigator.primary_only
            if handle_event(navigator, view, event):
                break
            if navigator.primary_only != primary_before and ops.on_filter_toggled is not None:
                ops.on_filter_toggled(navigator.primary_only)

    result = navigator.result()
    logger.info("Session ended at depth %d", result.depth)
    return result
