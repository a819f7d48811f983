"""Searchable, keyboard-navigable selection for Rich terminal UIs.

Controllers track a changing set of items in mount order, filter them by
free-text search, keep exactly one selection, move it with wraparound,
request more data near the end of the list and remember the cursor per
navigation frame.

Example:
    from rich_picker import Item, SearchableList

    picker = SearchableList(
        title="Fruit",
        items=[
            Item(key="apple", title="Apple"),
            Item(key="banana", title="Banana"),
        ],
    )
    choice = picker.show()  # "banana"
"""

from .config import PickerConfig, load_config
from .dropdown import DropdownController
from .filtering import FilterEngine, Section, compute_visibility, group_sections
from .navigation import NavigationStack, SelectionMemory
from .pagination import PaginationConfig, PaginationTrigger, compute_threshold
from .registry import ItemRegistry
from .scroll import ScrollPlanner, plan_scroll
from .selection import Move, SelectionController, plan_move
from .themes import DEFAULT_THEME, Theme
from .throttle import SearchTextThrottle
from .types import Direction, Focus, Geometry, Item, NavigationFrame
from .view import SearchableList

__all__ = [
    # Main classes
    "SearchableList",
    "SelectionController",
    "DropdownController",
    "ItemRegistry",
    # Data
    "Item",
    "Geometry",
    "Direction",
    "Focus",
    "NavigationFrame",
    "Move",
    "Section",
    # Collaborators
    "FilterEngine",
    "PaginationTrigger",
    "PaginationConfig",
    "ScrollPlanner",
    "NavigationStack",
    "SelectionMemory",
    "SearchTextThrottle",
    # Functions
    "compute_visibility",
    "group_sections",
    "compute_threshold",
    "plan_scroll",
    "plan_move",
    # Config and theming
    "PickerConfig",
    "load_config",
    "Theme",
    "DEFAULT_THEME",
]
