"""Command-line front door for tooey.

Parses CLI options, loads the content document, and configures logging.
Then dispatches into the interactive navigator or the one-shot renderer.
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path

from .ansi import clip_ansi_line
from .content_tree import ContentTree, load_tree
from .errors import DeserializationError, InputError
from .render import DEFAULT_MAX_LINES, DEFAULT_WRAP_WIDTH, styled_line_with_ansi
from .runtime import config
from .runtime.app import SessionOptions, build_navigator, run_session
from .ui_theme import available_theme_names, get_theme, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def configure_logging(log_file: str | None, level_name: str) -> None:
    """Log to ``log_file`` when given; otherwise stay silent (the TUI owns the tty)."""
    if log_file is None:
        package_logger = logging.getLogger("tooey")
        if not any(isinstance(handler, logging.NullHandler) for handler in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())
        return
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)


def read_document(path: str | None) -> str:
    """Return document text from ``path`` or redirected stdin ("" when neither)."""
    if path is not None:
        target = Path(path)
        if not target.exists():
            raise SystemExit(f"Path not found: {target}")
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SystemExit(f"Cannot read {target}: {exc}") from exc
    if sys.stdin is None or sys.stdin.isatty():
        logger.debug("Did not receive input from stdin")
        return ""
    return sys.stdin.read()


def render_view(tree: ContentTree, options: SessionOptions, max_cols: int) -> str:
    """Render the initial view as text, one blank line between items."""
    navigator = build_navigator(tree, options)
    theme = resolve_theme(options.theme_name, options.no_color)
    out: list[str] = []
    for idx, node in enumerate(navigator.view):
        if idx > 0:
            out.append("\n")
        for line in navigator.renderer.render(node, navigator.primary_only):
            row = clip_ansi_line(styled_line_with_ansi(line, theme), max_cols)
            out.append(row)
            if "\033" in row:
                out.append("\033[0m")
            out.append("\n")
    return "".join(out)


def resolve_options(args: argparse.Namespace) -> SessionOptions:
    """Layer CLI flags over persisted config values."""
    return SessionOptions(
        depth=args.depth,
        estimate_depth=not args.no_estimate,
        primary_only=args.primary_only or config.load_primary_only(),
        theme_name=args.theme or config.load_theme_name(),
        no_color=args.no_color,
        wrap_width=args.wrap_width or config.load_wrap_width() or DEFAULT_WRAP_WIDTH,
        max_lines=args.max_lines or config.load_max_lines() or DEFAULT_MAX_LINES,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tooey",
        description="Browse an extracted content tree level by level in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="JSON document. Defaults to stdin.")
    parser.add_argument("-f", "--file", dest="file", default=None, help="Provide file as document for processing.")
    parser.add_argument("--depth", type=_nonnegative_int, default=None, help="Start at this depth.")
    parser.add_argument(
        "--no-estimate",
        action="store_true",
        help="Skip the coherent-depth estimate and start at depth 1.",
    )
    parser.add_argument("--primary-only", action="store_true", help="Show primary content values only.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--render", action="store_true", help="Print the initial view and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--wrap-width", type=_positive_int, default=None, help="Wrap width for value text.")
    parser.add_argument("--max-lines", type=_positive_int, default=None, help="Line cap per node.")
    parser.add_argument("--log-file", default=None, help="Write logs to this file.")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file (default: INFO).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, load the document, and run the navigator.

    Malformed documents exit with status 2 before any terminal setup. Input
    failures during the session exit with status 1 after the terminal is
    restored. The session result is printed to stdout as one JSON line.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.path is not None and args.file is not None:
        raise SystemExit("Cannot combine positional path with --file.")
    configure_logging(args.log_file, args.log_level)

    text = read_document(args.file or args.path)
    if not text.strip():
        logger.debug("JSON not provided, aborting")
        return

    try:
        tree = load_tree(text)
    except DeserializationError as exc:
        logger.error("Failed to load document: %s", exc)
        print(f"tooey: invalid document: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if args.theme is not None:
        if get_theme(args.theme) is None:
            logger.warning("Unknown theme %r, using default", args.theme)
        else:
            config.save_theme_name(args.theme)

    options = resolve_options(args)
    if args.render:
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(render_view(tree, options, max_cols))
        return

    try:
        result = run_session(tree, options)
    except InputError as exc:
        logger.error("Session ended with input error: %s", exc)
        print(f"tooey: input error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    sys.stdout.write(json.dumps(result.to_dict()) + "\n")


if __name__ == "__main__":
    main()
