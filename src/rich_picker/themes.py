"""Configurable themes for the rich_picker renderer.

The Theme dataclass holds all visual elements (colors, icons, layout) used
by ``SearchableList``.
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for picker views.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        selected_color: Color for the cursor and selected row.
        section_color: Color for section headers.
        dim_color: Color for subtitles, hints and placeholders.
        border_color: Color for the list panel border.
        popup_border_color: Color for the dropdown panel border.

        cursor_icon: Character shown next to the selected row.
        search_icon: Character shown before the search field.
        scroll_up_icon: Character indicating more rows above.
        scroll_down_icon: Character indicating more rows below.

        panel_width: Fixed width of the list panel.
        max_visible_items: Rows shown before scrolling.
    """

    # Colors
    selected_color: str = "cyan"
    section_color: str = "bold magenta"
    dim_color: str = "dim"
    border_color: str = "cyan"
    popup_border_color: str = "yellow"

    # Icons
    cursor_icon: str = "›"
    search_icon: str = "⌕"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"

    # Layout
    panel_width: int = 80
    max_visible_items: int = 12


# Default theme used when none is specified
DEFAULT_THEME = Theme()
