"""Cyclic selection cursor over the current view's items."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


class SelectionList(Generic[T]):
    """Ordered items plus an optional cursor.

    ``cursor`` is ``None`` until the first move. ``clear`` drops the cursor
    but remembers it, so the next move resumes where the user left off.
    Moves on an empty list are no-ops.
    """

    def __init__(self, items: Sequence[T] = ()) -> None:
        self.items: list[T] = list(items)
        self.cursor: int | None = None
        self._last_selected: int | None = None

    def __len__(self) -> int:
        return len(self.items)

    @property
    def selected(self) -> T | None:
        if self.cursor is None:
            return None
        return self.items[self.cursor]

    def select(self, index: int | None) -> None:
        if index is None or not self.items:
            self.clear()
            return
        self.cursor = max(0, min(index, len(self.items) - 1))
        self._last_selected = self.cursor

    def clear(self) -> None:
        if self.cursor is not None:
            self._last_selected = self.cursor
        self.cursor = None

    def _resume_index(self) -> int:
        last = self._last_selected
        if last is not None and 0 <= last < len(self.items):
            return last
        return 0

    def next(self) -> None:
        if not self.items:
            return
        if self.cursor is None:
            self.select(self._resume_index())
        else:
            self.select((self.cursor + 1) % len(self.items))

    def previous(self) -> None:
        if not self.items:
            return
        if self.cursor is None:
            self.select(self._resume_index())
        else:
            self.select((self.cursor - 1) % len(self.items))

    def first(self) -> None:
        if self.items:
            self.select(0)

    def last(self) -> None:
        if self.items:
            self.select(len(self.items) - 1)

    def index_where(self, predicate) -> int | None:
        """Return the first index whose item satisfies ``predicate``."""
        for idx, item in enumerate(self.items):
            if predicate(item):
                return idx
        return None
