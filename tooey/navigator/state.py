"""Navigation state machine: depth, breadcrumb, selection, and filter mode.

``Navigator`` is the only mutable piece of a session. The content tree it
navigates is never modified; every transition re-projects the current view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..content_tree import ContentNode, ContentTree, ValueAnnotation
from ..input.events import NavEvent
from ..render.lines import LineRenderer
from ..session import SessionResult
from .projection import project_view
from .selection import SelectionList

logger = logging.getLogger(__name__)


@dataclass
class NavigationState:
    current_depth: int
    ancestor_stack: list[str] = field(default_factory=list)

    def snapshot(self) -> tuple[int, tuple[str, ...]]:
        return (self.current_depth, tuple(self.ancestor_stack))


class Navigator:
    """Drive deepen/rise/selection transitions over one ``ContentTree``.

    Deepen collapses chains of single-item levels in one step; rise always
    moves exactly one level so the user can retrace the path taken.
    """

    def __init__(
        self,
        tree: ContentTree,
        *,
        initial_depth: int = 1,
        primary_only: bool = False,
        renderer: LineRenderer | None = None,
        collapse_initial: bool = True,
    ) -> None:
        self.tree = tree
        self.renderer = renderer if renderer is not None else LineRenderer()
        self.primary_only = primary_only
        self.state = NavigationState(self._clamp_depth(initial_depth))
        self.selection: SelectionList[ContentNode] = SelectionList()
        self.value_cursor: int | None = None
        self.refresh_view()
        if collapse_initial and len(self.selection) == 1:
            self.selection.first()
            self.deepen()

    @property
    def max_depth(self) -> int:
        return self.tree.max_depth

    @property
    def current_depth(self) -> int:
        return self.state.current_depth

    @property
    def ancestor_stack(self) -> list[str]:
        return self.state.ancestor_stack

    @property
    def view(self) -> list[ContentNode]:
        return self.selection.items

    @property
    def selected(self) -> ContentNode | None:
        return self.selection.selected

    def _clamp_depth(self, depth: int) -> int:
        return max(self.tree.min_depth, min(depth, self.tree.max_depth))

    def _is_renderable(self, node: ContentNode) -> bool:
        return self.renderer.has_output(node, self.primary_only)

    def refresh_view(self) -> None:
        """Rebuild the selection list from scratch for the current state."""
        items = project_view(
            self.tree,
            self.state.current_depth,
            self.state.ancestor_stack,
            is_renderable=self._is_renderable,
        )
        self.selection = SelectionList(items)
        self.value_cursor = None

    def deepen(self) -> bool:
        """Descend into the selected node, collapsing single-item levels."""
        selected = self.selection.selected
        if selected is None or self.state.current_depth >= self.max_depth:
            return False
        changed = False
        while selected is not None and self.state.current_depth < self.max_depth:
            self.state.ancestor_stack.append(selected.id)
            self.state.current_depth += 1
            self.refresh_view()
            changed = True
            logger.debug("Deepened to depth %d under %r", self.state.current_depth, selected.id)
            if len(self.selection) != 1:
                break
            self.selection.first()
            selected = self.selection.selected
        return changed

    def rise(self) -> bool:
        if self.state.current_depth <= self.tree.min_depth:
            return False
        if self.state.ancestor_stack:
            self.state.ancestor_stack.pop()
        self.state.current_depth -= 1
        self.refresh_view()
        logger.debug("Rose to depth %d", self.state.current_depth)
        return True

    def _move(self, mover) -> bool:
        before = self.selection.cursor
        mover()
        if self.selection.cursor != before:
            self.value_cursor = None
            return True
        return False

    def select_next(self) -> bool:
        return self._move(self.selection.next)

    def select_previous(self) -> bool:
        return self._move(self.selection.previous)

    def select_first(self) -> bool:
        return self._move(self.selection.first)

    def select_last(self) -> bool:
        return self._move(self.selection.last)

    def toggle_primary_only(self) -> bool:
        """Flip the value filter and re-project, keeping the selection when visible."""
        previous = self.selection.selected
        self.primary_only = not self.primary_only
        self.refresh_view()
        if previous is not None:
            self.selection.select(self.selection.index_where(lambda node: node.id == previous.id))
        logger.debug("Filter mode primary_only=%s", self.primary_only)
        return True

    def selected_values(self) -> list[ValueAnnotation]:
        selected = self.selection.selected
        if selected is None:
            return []
        return self.renderer.visible_values(selected, self.primary_only)

    @property
    def selected_value(self) -> ValueAnnotation | None:
        values = self.selected_values()
        if self.value_cursor is None or self.value_cursor >= len(values):
            return None
        return values[self.value_cursor]

    def _step_value(self, step: int) -> bool:
        values = self.selected_values()
        if not values:
            return False
        if self.value_cursor is None:
            self.value_cursor = 0 if step > 0 else len(values) - 1
        else:
            self.value_cursor = (self.value_cursor + step) % len(values)
        return True

    def next_value(self) -> bool:
        return self._step_value(1)

    def previous_value(self) -> bool:
        return self._step_value(-1)

    def apply(self, event: NavEvent) -> bool:
        """Apply one decoded event; return whether the view needs a redraw."""
        handlers = {
            NavEvent.SELECT_NEXT: self.select_next,
            NavEvent.SELECT_PREVIOUS: self.select_previous,
            NavEvent.FIRST: self.select_first,
            NavEvent.LAST: self.select_last,
            NavEvent.DEEPEN: self.deepen,
            NavEvent.RISE: self.rise,
            NavEvent.TOGGLE_FILTER_MODE: self.toggle_primary_only,
            NavEvent.NEXT_VALUE: self.next_value,
            NavEvent.PREVIOUS_VALUE: self.previous_value,
        }
        handler = handlers.get(event)
        if handler is None:
            return False
        return handler()

    def breadcrumb(self) -> list[ContentNode]:
        """Return the ancestor nodes that still resolve, root side first."""
        return [self.tree.node(node_id) for node_id in self.state.ancestor_stack if self.tree.contains(node_id)]

    def result(self) -> SessionResult:
        selected = self.selection.selected
        value = self.selected_value
        url: str | None = None
        if value is not None and value.is_url:
            url = value.value
        elif selected is not None:
            url = next((item.value for item in selected.values if item.is_url), None)
        return SessionResult(
            depth=self.state.current_depth,
            node_id=selected.id if selected is not None else None,
            value=value.value if value is not None else None,
            url=url,
        )
