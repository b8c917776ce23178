"""Session bootstrap: options, navigator construction, and terminal wiring.

``build_navigator`` is shared by the interactive session and ``--render``.
``run_session`` owns the tty for the duration of the loop.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import termios
from dataclasses import dataclass

from ..content_tree import ContentTree
from ..errors import InputError
from ..navigator import Navigator, initial_depth
from ..render import DEFAULT_MAX_LINES, DEFAULT_WRAP_WIDTH, LineRenderer
from ..session import SessionResult
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from . import config
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
FALLBACK_DEPTH = 1


@dataclass(frozen=True)
class SessionOptions:
    """Resolved session settings (CLI flags layered over persisted config)."""

    depth: int | None = None
    estimate_depth: bool = True
    primary_only: bool = False
    theme_name: str | None = None
    no_color: bool = False
    wrap_width: int = DEFAULT_WRAP_WIDTH
    max_lines: int = DEFAULT_MAX_LINES


def starting_depth(tree: ContentTree, options: SessionOptions) -> int:
    """Explicit depth wins; otherwise the estimator, otherwise ``FALLBACK_DEPTH``."""
    if options.depth is not None:
        return options.depth
    if options.estimate_depth:
        return initial_depth(tree)
    return FALLBACK_DEPTH


def build_navigator(tree: ContentTree, options: SessionOptions) -> Navigator:
    renderer = LineRenderer(wrap_width=options.wrap_width, max_lines=options.max_lines)
    navigator = Navigator(
        tree,
        initial_depth=starting_depth(tree, options),
        primary_only=options.primary_only,
        renderer=renderer,
    )
    logger.info(
        "Navigator ready at depth %d/%d with %d items",
        navigator.current_depth,
        navigator.max_depth,
        len(navigator.view),
    )
    return navigator


@contextlib.contextmanager
def _input_fd():
    """Yield a readable tty fd: stdin when interactive, else ``/dev/tty``."""
    stdin_fd = sys.stdin.fileno()
    if os.isatty(stdin_fd):
        yield stdin_fd
        return
    try:
        tty_fd = os.open(TTY_PATH, os.O_RDONLY)
    except OSError as exc:
        raise InputError(f"cannot open {TTY_PATH} for key input: {exc}") from exc
    try:
        yield tty_fd
    finally:
        os.close(tty_fd)


def run_session(tree: ContentTree, options: SessionOptions) -> SessionResult:
    """Run one interactive session over ``tree`` and return its result.

    The frame is drawn on stderr so stdout stays free for the result record.
    """
    navigator = build_navigator(tree, options)
    theme = resolve_theme(options.theme_name, options.no_color)
    callbacks = RuntimeLoopCallbacks(on_filter_toggled=config.save_primary_only)
    with _input_fd() as stdin_fd:
        try:
            terminal = TerminalController(stdin_fd=stdin_fd, stdout_fd=sys.stderr.fileno())
        except termios.error as exc:
            raise InputError(f"key input is not a terminal: {exc}") from exc
        return run_main_loop(
            navigator,
            terminal,
            stdin_fd,
            timing=RuntimeLoopTiming(),
            callbacks=callbacks,
            theme=theme,
        )
