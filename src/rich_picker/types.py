"""Type definitions for rich_picker.

Shared dataclasses and enums used by the registry, the controllers and the
Rich renderer. Items are immutable: every change goes through
``ItemRegistry.update`` which swaps in a replaced copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Direction(IntEnum):
    """Relative navigation step."""

    UP = -1
    DOWN = 1


class Focus(str, Enum):
    """Which surface currently owns keyboard input."""

    HOST = "host"
    POPUP = "popup"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Geometry:
    """Layout information reported by the renderer.

    Attributes:
        offset: Position along the scroll axis, relative to the content origin.
        size: Extent along the scroll axis (rows for a terminal list).
    """

    offset: int
    size: int = 1


@dataclass(frozen=True)
class Item:
    """One selectable entry.

    Attributes:
        key: Stable logical identifier supplied by the author (may be None).
        title: Primary display text.
        subtitle: Secondary display text.
        keywords: Extra search terms that are never displayed.
        section_id: Grouping key for section headers.
        section_title: Display name of the enclosing section (searchable).
        actions: Labels of actions attached to this item.
        index: Registry-assigned order, -1 until registered.
        visible: Result of the last filter pass.
        geometry: Layout info, None until the renderer has laid it out.
    """

    key: str | None = None
    title: str = ""
    subtitle: str = ""
    keywords: tuple[str, ...] = ()
    section_id: str | None = None
    section_title: str | None = None
    actions: tuple[str, ...] = ()
    index: int = -1
    visible: bool = True
    geometry: Geometry | None = None


@dataclass
class SelectionState:
    """Mutable selection state owned by one collection."""

    selected_index: int | None = None
    search_text: str = ""
    filtering_enabled: bool = True


@dataclass
class PaginationState:
    """Load-more latch.

    ``triggered`` is a one-shot flag reset whenever ``last_visible_count``
    changes.
    """

    has_more: bool = False
    triggered: bool = False
    last_visible_count: int = 0


@dataclass
class NavigationFrame:
    """One logical screen on the host navigation stack."""

    frame_id: str
    selected_index: int | None = None
