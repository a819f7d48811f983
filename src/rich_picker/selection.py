"""Selection controller for searchable lists.

The controller owns one ``SelectionState`` and is its only writer. It reads
the registry's visible items to move the selection with wraparound, resets
the selection when the search text changes, and drives the pagination
trigger, the scroll planner and navigation memory after every change.

The navigation step itself is the pure function ``plan_move`` so it can be
tested without any registry or callbacks.

Example:
    registry = ItemRegistry()
    controller = SelectionController(registry, on_selection_change=print)
    controller.mount()
    registry.register(Item(key="a", title="Apple"))   # prints "a"
    registry.register(Item(key="b", title="Banana"))
    controller.move(Direction.DOWN)                   # prints "b"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .filtering import FilterEngine
from .keys import (
    is_backspace,
    is_down,
    is_enter,
    is_escape,
    is_search_char,
    is_shift_tab,
    is_tab,
    is_up,
)
from .navigation import NavigationHost, SelectionMemory
from .pagination import DEFAULT_PAGINATION, PaginationConfig, PaginationTrigger
from .registry import ItemRegistry
from .scroll import ScrollPlanner
from .throttle import SearchTextThrottle
from .types import Direction, Item, SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """Outcome of one navigation step.

    Attributes:
        index: Index to select.
        load_more: Selection stays put and pagination should be asked instead.
        healed: The previous selection was stale and was reset to the first
            visible item.
    """

    index: int | None
    load_more: bool = False
    healed: bool = False


def plan_move(
    visible_indices: list[int],
    selected_index: int | None,
    direction: int,
    has_more: bool = False,
) -> Move | None:
    """Compute the next selection among visible indices (ascending).

    Returns:
        None when nothing is visible, otherwise the planned ``Move``.
    """
    if not visible_indices:
        return None
    try:
        pos = visible_indices.index(selected_index)
    except ValueError:
        return Move(index=visible_indices[0], healed=True)

    next_pos = pos + direction
    total = len(visible_indices)
    if direction > 0 and next_pos >= total and has_more:
        return Move(index=selected_index, load_more=True)
    if next_pos < 0:
        next_pos = total - 1
    elif next_pos >= total:
        next_pos = 0
    return Move(index=visible_indices[next_pos])


class SelectionController:
    """Selection, filtering and pagination state machine for one collection.

    Args:
        registry: Registry the collection's rows register into.
        on_selection_change: Called with the selected item's key (or None)
            whenever the selected index changes.
        on_search_text_change: Called with the search text on every change,
            or after a quiet period when ``throttle`` is set.
        on_load_more: Called at most once per pagination boundary.
        on_action: Called with ``(key, action)`` by ``activate()``.
        has_more: Whether more items can be loaded.
        is_loading: Whether the host is fetching items; shown by renderers.
        filtering: Whether search text filters items.
        search_text: Initial search text.
        selected_key: Initial controlled selection.
        navigation: Host navigation stack for selection memory.
        scroll_planner: Planner invoked after every selection change.
        pagination: Threshold tuning.
        throttle: Debounce ``on_search_text_change``.
        throttle_delay: Quiet period in seconds for the throttle.
    """

    def __init__(
        self,
        registry: ItemRegistry | None = None,
        *,
        on_selection_change: Callable[[str | None], None] | None = None,
        on_search_text_change: Callable[[str], None] | None = None,
        on_load_more: Callable[[], None] | None = None,
        on_action: Callable[[str | None, str], None] | None = None,
        has_more: bool = False,
        is_loading: bool = False,
        filtering: bool = True,
        search_text: str = "",
        selected_key: str | None = None,
        navigation: NavigationHost | None = None,
        scroll_planner: ScrollPlanner | None = None,
        pagination: PaginationConfig = DEFAULT_PAGINATION,
        throttle: bool = False,
        throttle_delay: float = 0.3,
    ):
        self.registry = registry if registry is not None else ItemRegistry()
        self.filter_engine = FilterEngine(self.registry)
        self.pagination = PaginationTrigger(on_load_more, has_more=has_more, config=pagination)
        self.scroll = scroll_planner if scroll_planner is not None else ScrollPlanner()
        self.memory = SelectionMemory(navigation)
        self.state = SelectionState(search_text=search_text, filtering_enabled=filtering)
        self.on_selection_change = on_selection_change
        self.on_action = on_action
        self.is_loading = is_loading
        self.search_throttle: SearchTextThrottle | None = None
        self._emit_search: Callable[[str], None] | None = on_search_text_change
        if on_search_text_change is not None and throttle:
            self.search_throttle = SearchTextThrottle(on_search_text_change, throttle_delay)
            self._emit_search = self.search_throttle.push
        self._pending_key = selected_key
        self._pending_index: int | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._recomputing = False

    # ── lifecycle ─────────────────────────────────────────────────────────

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        """Start tracking the registry and seed the selection.

        The seed is the controlled key if given, else the index recorded on
        the current navigation frame, else the first visible item. A recorded
        index that has not registered yet is held until the next registry
        change and dropped if it is still missing then.
        """
        if self.mounted:
            return
        self._unsubscribe = self.registry.subscribe(self._on_registry_change)
        self._pending_index = self.memory.restore()
        visible = self._recompute()
        if self._apply_pending_key():
            return
        self._heal(visible)

    def unmount(self) -> None:
        """Stop tracking the registry. Navigation memory is left intact."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ── reads ─────────────────────────────────────────────────────────────

    @property
    def selected_index(self) -> int | None:
        return self.state.selected_index

    @property
    def search_text(self) -> str:
        return self.state.search_text

    @property
    def has_more(self) -> bool:
        return self.pagination.has_more

    @property
    def selected_item(self) -> Item | None:
        """The selected item, or None if nothing valid is selected."""
        item = self.registry.get(self.state.selected_index)
        if item is None or not item.visible:
            return None
        return item

    def visible_items(self) -> list[Item]:
        return self.registry.visible()

    def selected_position(self) -> int | None:
        """Position of the selection within the visible items."""
        for pos, item in enumerate(self.registry.visible()):
            if item.index == self.state.selected_index:
                return pos
        return None

    def is_selected(self, index: int) -> bool:
        return index == self.state.selected_index

    def selected_actions(self) -> tuple[str, ...]:
        item = self.selected_item
        return item.actions if item else ()

    # ── commands ──────────────────────────────────────────────────────────

    def move(self, direction: int) -> bool:
        """Move the selection one visible item up or down.

        Returns:
            True if the selected index changed.
        """
        visible = self.registry.visible()
        planned = plan_move(
            [item.index for item in visible],
            self.state.selected_index,
            direction,
            self.pagination.has_more,
        )
        if planned is None:
            return False
        if planned.load_more:
            pos = self.selected_position()
            self.pagination.observe(len(visible) - 1 if pos is None else pos, len(visible))
            return False
        if planned.healed:
            logger.debug("Selection %s is stale, healing", self.state.selected_index)
        return self._select(planned.index)

    def select_by_key(self, key: str | None) -> bool:
        """Select the item with ``key`` among all attached items.

        Returns:
            True if an item with that key exists.
        """
        item = self.registry.find_by_key(key)
        if item is None:
            return False
        self._select(item.index)
        return True

    def set_selected_key(self, key: str | None) -> None:
        """Controlled selection: select ``key`` now or once it registers."""
        self._pending_key = key
        self._apply_pending_key()

    def set_search_text(self, text: str) -> None:
        """Apply new search text and reset selection to the first match."""
        if text == self.state.search_text:
            return
        self.state.search_text = text
        self._refilter_and_reset()
        if self._emit_search is not None:
            self._emit_search(text)

    def set_filtering(self, enabled: bool) -> None:
        if enabled == self.state.filtering_enabled:
            return
        self.state.filtering_enabled = enabled
        self._refilter_and_reset()

    def set_has_more(self, has_more: bool) -> None:
        self.pagination.has_more = has_more

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def scroll_to_selected(self) -> int | None:
        """Ask the scroll planner to center the current selection."""
        return self.scroll.plan(self.selected_item)

    def activate(self) -> str | None:
        """Run the selected item's primary action.

        Falls back to ``on_selection_change`` when the item has no actions.

        Returns:
            The action fired, or None.
        """
        item = self.selected_item
        if item is None:
            return None
        if item.actions:
            action = item.actions[0]
            if self.on_action is not None:
                self.on_action(item.key, action)
            return action
        if self.on_selection_change is not None:
            self.on_selection_change(item.key)
        return None

    def poll(self) -> bool:
        """Deliver throttled search text whose delay has passed."""
        if self.search_throttle is None:
            return False
        return self.search_throttle.flush_due()

    def handle_key(self, key: str) -> bool:
        """Apply one key press.

        Returns:
            False if the key was not consumed (Escape with empty search,
            Enter, or an unbound key), True otherwise.
        """
        if is_down(key) or is_tab(key):
            self.move(Direction.DOWN)
        elif is_up(key) or is_shift_tab(key):
            self.move(Direction.UP)
        elif is_escape(key):
            if not self.state.search_text:
                return False
            self.set_search_text("")
        elif is_backspace(key):
            self.set_search_text(self.state.search_text[:-1])
        elif is_enter(key):
            return False
        elif is_search_char(key):
            self.set_search_text(self.state.search_text + key)
        else:
            return False
        return True

    # ── internals ─────────────────────────────────────────────────────────

    def _select(self, index: int | None) -> bool:
        self._pending_index = None
        if index == self.state.selected_index:
            return False
        self.state.selected_index = index
        item = self.registry.get(index)
        self.scroll.plan(item)
        self.memory.remember(index)
        if item is not None and item.visible:
            visible = self.registry.visible()
            pos = next(p for p, v in enumerate(visible) if v.index == index)
            self.pagination.observe(pos, len(visible))
        if self.on_selection_change is not None:
            self.on_selection_change(item.key if item else None)
        return True

    def _recompute(self) -> list[Item]:
        self._recomputing = True
        try:
            visible = self.filter_engine.apply(
                self.state.search_text, self.state.filtering_enabled
            )
        finally:
            self._recomputing = False
        self.pagination.observe_total(len(visible))
        return visible

    def _refilter_and_reset(self) -> None:
        visible = self._recompute()
        self._select(visible[0].index if visible else None)

    def _on_registry_change(self) -> None:
        if self._recomputing:
            return
        visible = self._recompute()
        if self._apply_pending_key():
            return
        self._heal(visible)

    def _heal(self, visible: list[Item]) -> None:
        """Move a missing or hidden selection to the first visible item."""
        indices = [item.index for item in visible]
        if self._pending_index is not None:
            if not indices:
                return
            target = self._pending_index if self._pending_index in indices else indices[0]
            self._select(target)
            return
        if self.state.selected_index in indices:
            return
        if self.state.selected_index is not None:
            logger.debug("Selection %s is stale, healing", self.state.selected_index)
        self._select(indices[0] if indices else None)

    def _apply_pending_key(self) -> bool:
        if self._pending_key is None or not self.select_by_key(self._pending_key):
            return False
        self._pending_key = None
        return True
