"""Center-biased scroll planning."""

from __future__ import annotations

from typing import Callable

from .types import Geometry, Item


def plan_scroll(geometry: Geometry | None, content_offset: int, viewport_height: int) -> int | None:
    """Return the viewport offset that centers an item, or None if unknown.

    Args:
        geometry: Item layout, None when not laid out yet.
        content_offset: Origin of the scrollable content.
        viewport_height: Visible extent of the viewport.
    """
    if geometry is None:
        return None
    relative_top = geometry.offset - content_offset
    return max(0, relative_top - viewport_height // 2)


class ScrollPlanner:
    """Turns a selection into a scroll request for the viewport.

    Args:
        scroll_to: Called with the target offset.
        viewport_height: Callable returning the current viewport height.
        content_offset: Callable returning the content origin.
    """

    def __init__(
        self,
        scroll_to: Callable[[int], None] | None = None,
        viewport_height: Callable[[], int] = lambda: 10,
        content_offset: Callable[[], int] = lambda: 0,
    ):
        self.scroll_to = scroll_to
        self.viewport_height = viewport_height
        self.content_offset = content_offset
        self.last_target: int | None = None

    def plan(self, item: Item | None) -> int | None:
        if item is None:
            return None
        target = plan_scroll(item.geometry, self.content_offset(), self.viewport_height())
        if target is None:
            return None
        self.last_target = target
        if self.scroll_to is not None:
            self.scroll_to(target)
        return target
