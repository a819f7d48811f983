"""Load-more trigger for incrementally fetched collections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .types import PaginationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationConfig:
    """Tuning for the load-more threshold.

    The threshold is ``round(total * ratio)`` clamped to
    ``[min_threshold, max_threshold]``.
    """

    ratio: float = 0.2
    min_threshold: int = 1
    max_threshold: int = 5

    def __post_init__(self):
        if self.ratio <= 0:
            raise ValueError(f"Pagination ratio must be positive, got {self.ratio}")
        if not 1 <= self.min_threshold <= self.max_threshold:
            raise ValueError(
                "Pagination thresholds must satisfy 1 <= min <= max, "
                f"got min={self.min_threshold} max={self.max_threshold}"
            )


DEFAULT_PAGINATION = PaginationConfig()


def compute_threshold(total_visible: int, config: PaginationConfig = DEFAULT_PAGINATION) -> int:
    """Return how many rows from the end pagination should fire."""
    # Round half up; builtin round() would send 2.5 to 2.
    raw = int(max(total_visible, 0) * config.ratio + 0.5)
    return max(config.min_threshold, min(config.max_threshold, raw))


class PaginationTrigger:
    """Fires ``on_load_more`` at most once per data boundary.

    The latch resets whenever the observed visible count changes, which
    happens when a new batch arrives or the filter changes.
    """

    def __init__(
        self,
        on_load_more: Callable[[], None] | None = None,
        has_more: bool = False,
        config: PaginationConfig = DEFAULT_PAGINATION,
    ):
        self.on_load_more = on_load_more
        self.config = config
        self.state = PaginationState(has_more=has_more)

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    @has_more.setter
    def has_more(self, value: bool) -> None:
        self.state.has_more = value

    def observe_total(self, total_visible: int) -> None:
        """Record the visible count, resetting the latch if it moved."""
        if total_visible != self.state.last_visible_count:
            self.state.last_visible_count = total_visible
            if self.state.triggered:
                logger.debug("Visible count now %d, re-arming load more", total_visible)
            self.state.triggered = False

    def observe(self, visible_pos: int, total_visible: int) -> bool:
        """Check the selection position and fire if near the tail.

        Returns:
            True if ``on_load_more`` was fired by this call.
        """
        self.observe_total(total_visible)
        if total_visible <= 0 or not self.state.has_more or self.state.triggered:
            return False
        threshold = compute_threshold(total_visible, self.config)
        if total_visible - visible_pos > threshold:
            return False
        self.state.triggered = True
        logger.debug(
            "Load more at position %d of %d (threshold %d)",
            visible_pos,
            total_visible,
            threshold,
        )
        if self.on_load_more is not None:
            self.on_load_more()
        return True
