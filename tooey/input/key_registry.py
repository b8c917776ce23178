"""Reusable key-binding registry primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

E = TypeVar("E")


@dataclass(frozen=True)
class KeyBinding(Generic[E]):
    """Mapping from one or more key tokens to a single decoded event."""

    keys: tuple[str, ...]
    event: E


class KeyRegistry(Generic[E]):
    """Small exact-match key-to-event table."""

    def __init__(self) -> None:
        self._events: dict[str, E] = {}

    def register_binding(self, binding: KeyBinding[E]) -> KeyRegistry[E]:
        """Register one binding, overwriting existing events for the same keys."""
        for key in binding.keys:
            self._events[key] = binding.event
        return self

    def register_bindings(self, *bindings: KeyBinding[E]) -> KeyRegistry[E]:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def decode(self, key: str) -> E | None:
        """Return the event bound to ``key`` or ``None`` when unbound."""
        return self._events.get(key)
