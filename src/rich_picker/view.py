"""Rich.Live front-end for searchable lists.

``SearchableList`` is the rendering layer around ``SelectionController``:
it registers rows, reports each row's line offset back to the registry after
layout, draws the selection, and feeds key presses read with readchar into
the controllers. An optional ``DropdownController`` is drawn as an accessory
and takes over the keyboard while open.

Example:
    from rich_picker import Item, SearchableList

    picker = SearchableList(
        title="Fruit",
        items=[
            Item(key="apple", title="Apple", keywords=("red",)),
            Item(key="banana", title="Banana", subtitle="yellow"),
        ],
    )
    choice = picker.show()  # "banana", or None if the user pressed Esc
"""

from __future__ import annotations

from typing import Callable

import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel

from .config import PickerConfig, load_config
from .dropdown import DropdownController
from .filtering import group_sections
from .keys import is_dropdown_toggle, is_enter, is_escape, is_interrupt
from .navigation import NavigationHost
from .registry import ItemRegistry
from .scroll import ScrollPlanner
from .selection import SelectionController
from .themes import Theme
from .types import Geometry, Item


class SearchableList:
    """Interactive searchable list with keyboard navigation and live updates.

    Keyboard controls:
        - Type: filter rows
        - Up/Down, Tab/Shift-Tab, Ctrl-N/Ctrl-P: move selection
        - Enter: activate the selected row and exit
        - Backspace: delete a search character
        - Esc: clear search, or exit when search is empty
        - Ctrl-D: open the dropdown accessory (when given)

    Args:
        title: Panel title.
        items: Initial rows, in display order.
        console: Rich Console for output (auto-created if not provided).
        theme: Visual theme, defaults to the config's theme.
        config: Resolved configuration, loaded from the user config file
            when not given.
        navigation: Host navigation stack for selection memory.
        dropdown: Optional accessory dropdown.
        placeholder: Text shown in the empty search field.
        empty_title: Headline shown when no row is visible.
        empty_description: Optional second line under ``empty_title``.
        is_loading: Show a loading indicator until ``set_loading(False)``.

    Callback, pagination and selection arguments are passed through to
    ``SelectionController``.

    Raises:
        ValueError: If there are no items and nothing can load more.
    """

    def __init__(
        self,
        title: str,
        items: list[Item],
        console: Console | None = None,
        theme: Theme | None = None,
        config: PickerConfig | None = None,
        navigation: NavigationHost | None = None,
        dropdown: DropdownController | None = None,
        placeholder: str = "Search…",
        empty_title: str = "No results",
        empty_description: str | None = None,
        is_loading: bool = False,
        on_selection_change: Callable[[str | None], None] | None = None,
        on_search_text_change: Callable[[str], None] | None = None,
        on_load_more: Callable[[], None] | None = None,
        on_action: Callable[[str | None, str], None] | None = None,
        has_more: bool = False,
        selected_key: str | None = None,
    ):
        if not items and on_load_more is None:
            raise ValueError("List must have at least one item")

        self.config = config if config is not None else load_config()
        self.title = title
        self.console = console or Console()
        self.theme = theme or self.config.theme
        self.placeholder = placeholder
        self.empty_title = empty_title
        self.empty_description = empty_description
        self.dropdown = dropdown
        self.window_offset = 0
        self.result: str | None = None
        self.should_exit = False

        self.registry = ItemRegistry()
        self.controller = SelectionController(
            self.registry,
            on_selection_change=on_selection_change,
            on_search_text_change=on_search_text_change,
            on_load_more=on_load_more,
            on_action=on_action,
            has_more=has_more,
            is_loading=is_loading,
            filtering=self.config.filtering,
            selected_key=selected_key,
            navigation=navigation,
            scroll_planner=ScrollPlanner(
                scroll_to=self._scroll_to,
                viewport_height=lambda: self.theme.max_visible_items,
            ),
            pagination=self.config.pagination,
            throttle=self.config.throttle,
            throttle_delay=self.config.throttle_delay,
        )
        self.add_items(items)
        self.controller.mount()
        if self.dropdown is not None and not self.dropdown.selection.mounted:
            self.dropdown.mount()

    # ── data ──────────────────────────────────────────────────────────────

    def add_items(self, items: list[Item], has_more: bool | None = None) -> None:
        """Append a batch of rows, typically from an ``on_load_more`` handler."""
        with self.registry.batch():
            for item in items:
                self.registry.register(item)
        if has_more is not None:
            self.controller.set_has_more(has_more)

    def set_loading(self, loading: bool) -> None:
        self.controller.set_loading(loading)

    # ── layout ────────────────────────────────────────────────────────────

    def _scroll_to(self, target: int) -> None:
        self.window_offset = target

    def _layout(self) -> list[str]:
        """Build content lines and report each row's geometry."""
        lines: list[str] = []
        sections = group_sections(self.registry.snapshot(), self.controller.search_text)
        with self.registry.batch():
            for section in sections:
                if section.show_header:
                    lines.append(
                        f"[{self.theme.section_color}]{escape(section.title or '')}"
                        f"[/{self.theme.section_color}]"
                    )
                for item in section.items:
                    geometry = Geometry(offset=len(lines), size=1)
                    if item.geometry != geometry:
                        self.registry.update(item.index, geometry=geometry)
                    lines.append(self._render_row(item))
        return lines

    def _render_row(self, item: Item) -> str:
        text = escape(item.title)
        if item.subtitle:
            text += f" [{self.theme.dim_color}]{escape(item.subtitle)}[/{self.theme.dim_color}]"
        if self.controller.is_selected(item.index):
            color = self.theme.selected_color
            return f"[{color}]{self.theme.cursor_icon} {text}[/{color}]"
        return f"  {text}"

    def _search_line(self) -> str:
        text = self.controller.search_text
        if not text:
            shown = f"[{self.theme.dim_color}]{escape(self.placeholder)}[/{self.theme.dim_color}]"
        else:
            shown = escape(text)
        line = f"{self.theme.search_icon} {shown}"
        if self.dropdown is not None:
            label = self.dropdown.current_title() or "none"
            line += f"   [{self.theme.dim_color}]▾ {escape(label)}[/{self.theme.dim_color}]"
        return line

    def _clamp_window(self, total_lines: int) -> None:
        max_offset = max(0, total_lines - self.theme.max_visible_items)
        self.window_offset = max(0, min(self.window_offset, max_offset))

    def _render_dropdown(self) -> Panel:
        dropdown = self.dropdown
        dim = self.theme.dim_color
        lines: list[str] = []
        if dropdown.tooltip:
            lines.append(f"[{dim}]{escape(dropdown.tooltip)}   esc[/{dim}]")
        search = dropdown.selection.search_text
        if search:
            lines.append(f"{self.theme.search_icon} {escape(search)}")
        else:
            lines.append(f"[{dim}]{self.theme.search_icon} {escape(dropdown.placeholder)}[/{dim}]")
        rows: list[str] = []
        selected_row = 0
        for section in dropdown.sections():
            if section.show_header:
                rows.append(
                    f"[{self.theme.section_color}]{escape(section.title or '')}"
                    f"[/{self.theme.section_color}]"
                )
            for item in section.items:
                if dropdown.selection.is_selected(item.index):
                    selected_row = len(rows)
                    rows.append(
                        f"[{self.theme.selected_color}]{self.theme.cursor_icon} "
                        f"{escape(item.title)}[/{self.theme.selected_color}]"
                    )
                else:
                    rows.append(f"  {escape(item.title)}")
        height = self.theme.max_visible_items
        start = max(0, min(selected_row - height // 2, len(rows) - height))
        lines.extend(rows[start : start + height])
        if dropdown.is_loading:
            lines.append(f"[{dim}]  Loading…[/{dim}]")
        return Panel(
            "\n".join(lines),
            title="[bold]Dropdown[/bold]",
            border_style=self.theme.popup_border_color,
            width=self.theme.panel_width,
        )

    def render(self) -> Panel | Group:
        """Render the list (and the open dropdown) as Rich renderables."""
        lines = self._layout()
        self.controller.scroll_to_selected()
        self._clamp_window(len(lines))

        height = self.theme.max_visible_items
        window_end = min(self.window_offset + height, len(lines))
        body = [self._search_line(), ""]
        if self.window_offset > 0:
            body.append(
                f"[{self.theme.dim_color}]  {self.theme.scroll_up_icon} "
                f"{self.window_offset} more above[/{self.theme.dim_color}]"
            )
        body.extend(lines[self.window_offset : window_end])
        dim = self.theme.dim_color
        if self.controller.is_loading:
            body.append(f"[{dim}]  Loading…[/{dim}]")
        elif not lines:
            body.append(f"[{dim}]  {escape(self.empty_title)}[/{dim}]")
            if self.empty_description:
                body.append(f"[{dim}]  {escape(self.empty_description)}[/{dim}]")
        below = len(lines) - window_end
        if below > 0:
            body.append(
                f"[{self.theme.dim_color}]  {self.theme.scroll_down_icon} "
                f"{below} more below[/{self.theme.dim_color}]"
            )

        hints = f"{self.theme.scroll_up_icon}{self.theme.scroll_down_icon} navigate • Enter select • Esc back"
        if self.dropdown is not None:
            hints += " • ^D dropdown"
        body.append("")
        body.append(f"[{self.theme.dim_color}]{hints}[/{self.theme.dim_color}]")

        panel = Panel(
            "\n".join(body),
            title=f"[bold]{escape(self.title)}[/bold]",
            border_style=self.theme.border_color,
            width=self.theme.panel_width,
        )
        if self.dropdown is not None and self.dropdown.is_open:
            return Group(panel, self._render_dropdown())
        return panel

    # ── input ─────────────────────────────────────────────────────────────

    def _handle_key(self, key: str) -> None:
        """Handle keyboard input and update list state."""
        if self.dropdown is not None and self.dropdown.is_open:
            self.dropdown.handle_key(key)
            return

        if is_interrupt(key):
            self.should_exit = True
        elif self.dropdown is not None and is_dropdown_toggle(key):
            self.dropdown.open()
        elif is_enter(key):
            item = self.controller.selected_item
            if item is not None:
                self.controller.activate()
                self.result = item.key
                self.should_exit = True
        elif not self.controller.handle_key(key) and is_escape(key):
            self.should_exit = True
        self.controller.poll()

    def show(self) -> str | None:
        """Display the list and block until the user exits.

        Returns:
            Key of the activated row, or None if the user exited.
        """
        with Live(self.render(), console=self.console, refresh_per_second=20) as live:
            while not self.should_exit:
                try:
                    key = readchar.readkey()
                    self._handle_key(key)
                    live.update(self.render())
                except KeyboardInterrupt:
                    self.should_exit = True

        if self.controller.search_throttle is not None:
            self.controller.search_throttle.flush()
        self.controller.unmount()
        return self.result
