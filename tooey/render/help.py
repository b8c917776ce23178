"""Help panel content for the navigator screen."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("j/k Up/Down", "select next/previous"),
    ("g/G", "first/last item"),
    ("+ l Right", "deeper"),
    ("- h Left", "higher"),
    ("Enter/Backspace", "next/previous value"),
    ("p", "primary content only"),
    ("?", "toggle help"),
    ("q", "quit"),
)


def help_panel_lines(theme: UITheme | None = None) -> list[str]:
    """Return styled help rows, two entries per row."""
    active = theme or DEFAULT_THEME
    cells = [f"{active.help_key}{keys}{active.reset} {active.help_dim}{label}{active.reset}" for keys, label in HELP_ENTRIES]
    return ["   ".join(cells[idx : idx + 2]) for idx in range(0, len(cells), 2)]
