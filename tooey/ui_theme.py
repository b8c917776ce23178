"""UI theme definitions and selection helpers.

Themes map the line renderer's span roles and the screen chrome onto ANSI
SGR sequences. ``plain`` disables color entirely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    body: str
    emphasis: str
    attention: str
    bold: str
    underline: str
    selected: str
    selected_marker: str
    header: str
    breadcrumb: str
    status: str
    help_key: str
    help_dim: str
    empty_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    body="\033[38;5;252m",
    emphasis="\033[38;5;81m",
    attention="\033[38;5;214m",
    bold="\033[1m",
    underline="\033[4m",
    selected="\033[48;5;238m",
    selected_marker="\033[1;38;5;229m",
    header="\033[1;38;5;81m",
    breadcrumb="\033[38;5;250m",
    status="\033[7m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    empty_hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    body="\033[38;5;153m",
    emphasis="\033[38;5;45m",
    attention="\033[38;5;215m",
    bold="\033[1m",
    underline="\033[4m",
    selected="\033[48;5;24m",
    selected_marker="\033[1;38;5;45m",
    header="\033[1;38;5;39m",
    breadcrumb="\033[38;5;110m",
    status="\033[7;38;5;31m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    empty_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    body="",
    emphasis="",
    attention="",
    bold="",
    underline="",
    selected="",
    selected_marker="",
    header="",
    breadcrumb="",
    status="",
    help_key="",
    help_dim="",
    empty_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(_THEMES)


def get_theme(name: str | None) -> UITheme | None:
    """Return theme by case-insensitive name, or ``None`` when unknown."""
    if not name:
        return None
    return _THEMES.get(name.strip().lower())


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Pick the active theme: ``plain`` when color is off, default when unknown."""
    if no_color:
        return PLAIN_THEME
    return get_theme(name) or DEFAULT_THEME
