"""Dropdown (overlay) controller.

A dropdown is a modal popup with its own registry and its own
``SelectionController``: indices inside the popup are independent of the
host collection. Opening the popup moves keyboard focus to its search field;
confirming commits the selected item's key as the dropdown value, cancelling
leaves the committed value untouched.

Example:
    dropdown = DropdownController(on_change=print, default_value="b")
    dropdown.add_section("Fruit", [Item(key="a", title="Apple"), Item(key="b", title="Banana")])
    dropdown.mount()
    dropdown.current_title()        # "Banana"
    dropdown.open()
    dropdown.handle_key("\\n")      # prints "b", closes the popup
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .filtering import Section, group_sections
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
from .registry import ItemRegistry
from .selection import SelectionController
from .types import Direction, Focus, Item

logger = logging.getLogger(__name__)


def _section_id(title: str) -> str:
    return re.sub(r"\W+", "-", title.strip().lower()).strip("-") or "section"


class DropdownController:
    """Open/close lifecycle and commit semantics around a popup list.

    Args:
        on_change: Called with the committed key when the user confirms.
        on_cancel: Called when the popup is dismissed without committing.
        on_selection_change: Called as the highlighted popup item changes.
        on_search_text_change: Called as the popup search text changes.
        on_focus_change: Called with ``Focus.POPUP`` on open and
            ``Focus.HOST`` on close.
        value: Controlled committed value. The host owns it: ``confirm()``
            only reports the choice through ``on_change`` and the host
            applies it with ``set_value()``.
        default_value: Initial committed value when ``value`` is None. The
            dropdown then owns its value and ``confirm()`` updates it.
        placeholder: Text shown in the empty popup search field.
        tooltip: Label shown at the top of the open popup.
        is_loading: Whether the host is fetching popup items.
        filtering: Whether popup search filters items.
        throttle: Debounce ``on_search_text_change``.
        throttle_delay: Quiet period in seconds for the throttle.
    """

    def __init__(
        self,
        *,
        on_change: Callable[[str | None], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
        on_selection_change: Callable[[str | None], None] | None = None,
        on_search_text_change: Callable[[str], None] | None = None,
        on_focus_change: Callable[[Focus], None] | None = None,
        value: str | None = None,
        default_value: str | None = None,
        placeholder: str = "Search…",
        tooltip: str | None = None,
        is_loading: bool = False,
        filtering: bool = True,
        throttle: bool = False,
        throttle_delay: float = 0.3,
    ):
        self.registry = ItemRegistry()
        self.selection = SelectionController(
            self.registry,
            on_selection_change=on_selection_change,
            on_search_text_change=on_search_text_change,
            is_loading=is_loading,
            filtering=filtering,
            throttle=throttle,
            throttle_delay=throttle_delay,
        )
        self.on_change = on_change
        self.on_cancel = on_cancel
        self.on_focus_change = on_focus_change
        self.controlled = value is not None
        self.value = value if value is not None else default_value
        self.placeholder = placeholder
        self.tooltip = tooltip
        self.is_open = False
        self.focus = Focus.HOST

    # ── items ─────────────────────────────────────────────────────────────

    def add_item(self, item: Item, handle: str | None = None) -> int:
        return self.registry.register(item, handle=handle)

    def add_section(self, title: str, items: list[Item]) -> list[int]:
        """Register items under one section, in order."""
        section_id = _section_id(title)
        with self.registry.batch():
            return [
                self.registry.register(
                    Item(
                        key=item.key,
                        title=item.title,
                        subtitle=item.subtitle,
                        keywords=item.keywords,
                        section_id=section_id,
                        section_title=title,
                        actions=item.actions,
                    )
                )
                for item in items
            ]

    def sections(self) -> list[Section]:
        """Visible popup items grouped for display."""
        return group_sections(self.registry.snapshot(), self.selection.search_text)

    # ── lifecycle ─────────────────────────────────────────────────────────

    def mount(self) -> None:
        self.selection.mount()

    def unmount(self) -> None:
        self.selection.unmount()

    def open(self) -> None:
        """Show the popup and give its search field keyboard focus."""
        if self.is_open:
            return
        self.is_open = True
        self._set_focus(Focus.POPUP)
        if self.value is not None:
            self.selection.select_by_key(self.value)
        self.selection.scroll_to_selected()
        logger.debug("Dropdown opened with value %r", self.value)

    def close(self) -> None:
        """Hide the popup, clear its search and hand focus back to the host."""
        if not self.is_open:
            return
        self.is_open = False
        self.selection.set_search_text("")
        self._set_focus(Focus.HOST)

    def confirm(self) -> str | None:
        """Commit the highlighted item and close.

        Returns:
            The committed key, or None if nothing is highlighted (the popup
            then stays open).
        """
        if not self.is_open:
            return None
        item = self.selection.selected_item
        if item is None:
            return None
        if not self.controlled:
            self.value = item.key
        logger.debug("Dropdown committed %r", item.key)
        if self.on_change is not None:
            self.on_change(item.key)
        self.close()
        return item.key

    def cancel(self) -> None:
        """Close without committing."""
        if not self.is_open:
            return
        self.close()
        if self.on_cancel is not None:
            self.on_cancel()

    def set_value(self, value: str | None) -> None:
        """Set the committed value, as the host does after ``on_change``."""
        self.value = value

    @property
    def is_loading(self) -> bool:
        return self.selection.is_loading

    def set_loading(self, loading: bool) -> None:
        self.selection.set_loading(loading)

    def current_title(self) -> str | None:
        """Title of the committed item, for the closed dropdown's label."""
        item = self.registry.find_by_key(self.value)
        return item.title if item else None

    def handle_key(self, key: str) -> bool:
        """Route one key press to the open popup.

        Returns:
            False when the popup is closed or the key is unbound.
        """
        if not self.is_open:
            return False
        if is_down(key) or is_tab(key):
            self.selection.move(Direction.DOWN)
        elif is_up(key) or is_shift_tab(key):
            self.selection.move(Direction.UP)
        elif is_enter(key):
            self.confirm()
        elif is_escape(key):
            self.cancel()
        elif is_backspace(key):
            self.selection.set_search_text(self.selection.search_text[:-1])
        elif is_search_char(key):
            self.selection.set_search_text(self.selection.search_text + key)
        else:
            return False
        return True

    def _set_focus(self, focus: Focus) -> None:
        self.focus = focus
        if self.on_focus_change is not None:
            self.on_focus_change(focus)
