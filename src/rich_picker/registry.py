"""Mount-order item registry.

Each collection owns one ``ItemRegistry``. Rows call ``register`` when they
attach, ``update`` when their data or layout changes and ``unregister`` when
they detach. Indices come from a monotonic counter, so ``snapshot()`` always
reflects attachment order even after rows in the middle go away.

Example:
    registry = ItemRegistry()
    with registry.batch():
        registry.register(Item(key="a", title="Apple"))
        registry.register(Item(key="b", title="Banana"))
    [item.key for item in registry.snapshot()]  # ["a", "b"]
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Iterator

from .types import Item

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ItemRegistry:
    """Ordered registry of attached items with change notification."""

    def __init__(self) -> None:
        self._items: dict[int, Item] = {}
        self._handles: dict[str, int] = {}
        self._next_index = 0
        self._listeners: list[Listener] = []
        self._batch_depth = 0
        self._dirty = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.snapshot())

    def __contains__(self, index: object) -> bool:
        return index in self._items

    @property
    def next_index(self) -> int:
        return self._next_index

    # ── mutation ──────────────────────────────────────────────────────────

    def register(
        self,
        item: Item,
        handle: str | None = None,
        order: int | None = None,
    ) -> int:
        """Attach an item and return its index.

        Args:
            item: Item data. Its ``index`` field is ignored and overwritten.
            handle: Stable id of the attaching row. Re-registering the same
                handle keeps the index and only refreshes the data.
            order: Explicit index to use instead of the next counter value.

        Returns:
            The index assigned to this item.

        Raises:
            ValueError: If ``order`` is held by another attached item.
        """
        if handle is not None and handle in self._handles:
            index = self._handles[handle]
            current = self._items[index]
            refreshed = replace(
                item,
                index=index,
                visible=current.visible,
                geometry=item.geometry or current.geometry,
            )
            if refreshed != current:
                self._items[index] = refreshed
                self._changed()
            return index

        if order is not None:
            if order in self._items:
                raise ValueError(f"Index {order} is already registered")
            index = order
        else:
            index = self._next_index
        self._next_index = max(self._next_index, index + 1)

        self._handles[handle or uuid.uuid4().hex] = index
        self._items[index] = replace(item, index=index)
        logger.debug("Registered item %r at index %d", item.key, index)
        self._changed()
        return index

    def update(self, index: int, /, **patch: Any) -> Item:
        """Replace fields of an attached item without touching its index.

        Raises:
            KeyError: If nothing is registered at ``index``.
        """
        if index not in self._items:
            raise KeyError(index)
        patch.pop("index", None)
        current = self._items[index]
        updated = replace(current, **patch)
        if updated != current:
            self._items[index] = updated
            self._changed()
        return updated

    def unregister(self, index: int) -> None:
        """Detach the item at ``index``. Surviving indices are not renumbered."""
        if index not in self._items:
            logger.debug("Ignoring unregister of unknown index %d", index)
            return
        del self._items[index]
        for handle, value in list(self._handles.items()):
            if value == index:
                del self._handles[handle]
        logger.debug("Unregistered index %d", index)
        self._changed()

    def reset(self) -> None:
        """Drop every item and restart index allocation (full remount)."""
        had_items = bool(self._items)
        self._items.clear()
        self._handles.clear()
        self._next_index = 0
        if had_items:
            self._changed()

    @contextmanager
    def batch(self) -> Iterator["ItemRegistry"]:
        """Defer notifications until the outermost batch exits."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._notify()

    # ── reads ─────────────────────────────────────────────────────────────

    def get(self, index: int | None) -> Item | None:
        if index is None:
            return None
        return self._items.get(index)

    def index_for_handle(self, handle: str) -> int | None:
        return self._handles.get(handle)

    def find_by_key(self, key: str | None) -> Item | None:
        """Return the first attached item (in index order) with this key."""
        if key is None:
            return None
        for item in self.snapshot():
            if item.key == key:
                return item
        return None

    def snapshot(self) -> list[Item]:
        """Return all attached items sorted by index."""
        return [self._items[i] for i in sorted(self._items)]

    def visible(self) -> list[Item]:
        """Return visible items sorted by index."""
        return [item for item in self.snapshot() if item.visible]

    # ── notification ──────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self._dirty = True
        if self._batch_depth == 0:
            self._notify()

    def _notify(self) -> None:
        self._dirty = False
        for listener in list(self._listeners):
            listener()
