"""Free-text filtering of registered items.

Matching is a single case-insensitive substring test against the item's
title, subtitle, keywords and section name joined by spaces. There is no
ranking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .registry import ItemRegistry
from .types import Item

logger = logging.getLogger(__name__)


def normalize(text: str) -> str:
    """Trim edges and lowercase. Internal whitespace is preserved."""
    return text.strip().lower()


def searchable_text(item: Item) -> tuple[str, ...]:
    """Return the ordered, non-empty search fields of an item."""
    fields = (item.title, item.subtitle, *item.keywords, item.section_title or "")
    return tuple(f for f in fields if f)


def compute_visibility(item: Item, search_text: str, filtering_enabled: bool = True) -> bool:
    needle = normalize(search_text)
    if not needle or not filtering_enabled:
        return True
    haystack = " ".join(searchable_text(item)).lower()
    return needle in haystack


class FilterEngine:
    """Applies the current search text to every item in a registry."""

    def __init__(self, registry: ItemRegistry):
        self.registry = registry

    def apply(self, search_text: str, filtering_enabled: bool = True) -> list[Item]:
        """Recompute visibility for all items in one notification batch.

        Returns:
            Visible items sorted by index.
        """
        with self.registry.batch():
            for item in self.registry.snapshot():
                visible = compute_visibility(item, search_text, filtering_enabled)
                if visible != item.visible:
                    self.registry.update(item.index, visible=visible)
        visible_items = self.registry.visible()
        logger.debug(
            "Filter %r: %d of %d visible",
            search_text,
            len(visible_items),
            len(self.registry),
        )
        return visible_items


@dataclass
class Section:
    """A run of items sharing a section id, for header rendering."""

    section_id: str | None
    title: str | None
    items: list[Item] = field(default_factory=list)
    show_header: bool = True


def group_sections(items: list[Item], search_text: str = "") -> list[Section]:
    """Group visible items by section, preserving first-seen section order.

    Sections with no visible item are dropped. Headers are suppressed while
    search text is non-empty and for items without a section.
    """
    searching = bool(normalize(search_text))
    sections: dict[str | None, Section] = {}
    for item in items:
        if not item.visible:
            continue
        section = sections.get(item.section_id)
        if section is None:
            section = Section(
                section_id=item.section_id,
                title=item.section_title,
                show_header=not searching and item.section_id is not None,
            )
            sections[item.section_id] = section
        section.items.append(item)
    return list(sections.values())
