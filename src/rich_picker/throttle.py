"""Trailing-edge throttle for search text callbacks.

Nothing runs in the background: the host loop calls ``flush_due()`` between
key reads and the pending text is delivered once the delay has passed.
"""

from __future__ import annotations

import time
from typing import Callable


class SearchTextThrottle:
    """Deliver only the latest search text after a quiet period."""

    def __init__(
        self,
        callback: Callable[[str], None],
        delay: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.callback = callback
        self.delay = delay
        self.clock = clock
        self._pending: str | None = None
        self._deadline = 0.0

    @property
    def pending(self) -> str | None:
        return self._pending

    def push(self, text: str) -> None:
        if self.delay <= 0:
            self.callback(text)
            return
        self._pending = text
        self._deadline = self.clock() + self.delay

    def flush_due(self) -> bool:
        """Deliver the pending text if its deadline has passed."""
        if self._pending is None or self.clock() < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Deliver the pending text now, if any."""
        if self._pending is None:
            return False
        text, self._pending = self._pending, None
        self.callback(text)
        return True
