"""Decoded navigation events and the default key map."""

from __future__ import annotations

from enum import Enum

from .key_registry import KeyBinding, KeyRegistry


class NavEvent(Enum):
    QUIT = "quit"
    SELECT_NEXT = "select-next"
    SELECT_PREVIOUS = "select-previous"
    DEEPEN = "deepen"
    RISE = "rise"
    FIRST = "first"
    LAST = "last"
    TOGGLE_FILTER_MODE = "toggle-filter-mode"
    NEXT_VALUE = "next-value"
    PREVIOUS_VALUE = "previous-value"
    TOGGLE_HELP = "toggle-help"


DEFAULT_BINDINGS: tuple[KeyBinding[NavEvent], ...] = (
    KeyBinding(("q", "Q", "CTRL_C"), NavEvent.QUIT),
    KeyBinding(("j", "DOWN"), NavEvent.SELECT_NEXT),
    KeyBinding(("k", "UP"), NavEvent.SELECT_PREVIOUS),
    KeyBinding(("+", "l", "RIGHT"), NavEvent.DEEPEN),
    KeyBinding(("-", "h", "LEFT"), NavEvent.RISE),
    KeyBinding(("g",), NavEvent.FIRST),
    KeyBinding(("G",), NavEvent.LAST),
    KeyBinding(("p",), NavEvent.TOGGLE_FILTER_MODE),
    KeyBinding(("ENTER",), NavEvent.NEXT_VALUE),
    KeyBinding(("BACKSPACE",), NavEvent.PREVIOUS_VALUE),
    KeyBinding(("?",), NavEvent.TOGGLE_HELP),
)


def default_key_registry() -> KeyRegistry[NavEvent]:
    return KeyRegistry[NavEvent]().register_bindings(*DEFAULT_BINDINGS)


def decode_key(key: str, registry: KeyRegistry[NavEvent] | None = None) -> NavEvent | None:
    """Translate a key token from ``read_key`` into a ``NavEvent``."""
    active = registry if registry is not None else default_key_registry()
    return active.decode(key)
