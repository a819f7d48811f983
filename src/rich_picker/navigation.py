"""Navigation-scoped selection memory.

The host owns a stack of frames (one per logical screen). A collection reads
its last selection from the top frame when it mounts and writes it back on
every change, so popping back to a screen restores the cursor.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .types import NavigationFrame

logger = logging.getLogger(__name__)


class NavigationHost(Protocol):
    def get_frame(self) -> NavigationFrame | None: ...

    def set_frame(self, **patch) -> None: ...


class NavigationStack:
    """Minimal host navigation stack.

    Frames are kept by id, so pushing a frame id that was visited before
    returns to the same frame and its recorded selection.
    """

    def __init__(self) -> None:
        self._stack: list[NavigationFrame] = []
        self._frames: dict[str, NavigationFrame] = {}

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, frame_id: str) -> NavigationFrame:
        frame = self._frames.setdefault(frame_id, NavigationFrame(frame_id=frame_id))
        self._stack.append(frame)
        return frame

    def pop(self) -> NavigationFrame | None:
        if not self._stack:
            return None
        return self._stack.pop()

    def get_frame(self) -> NavigationFrame | None:
        return self._stack[-1] if self._stack else None

    def set_frame(self, **patch) -> None:
        frame = self.get_frame()
        if frame is None:
            return
        for name, value in patch.items():
            setattr(frame, name, value)


class SelectionMemory:
    """Reads and writes ``selected_index`` on the host's top frame."""

    def __init__(self, host: NavigationHost | None):
        self.host = host

    def restore(self) -> int | None:
        if self.host is None:
            return None
        frame = self.host.get_frame()
        if frame is None:
            return None
        return frame.selected_index

    def remember(self, index: int | None) -> bool:
        """Write ``index`` to the top frame if it differs.

        Returns:
            True if the frame was written.
        """
        if self.host is None:
            return False
        frame = self.host.get_frame()
        if frame is None or frame.selected_index == index:
            return False
        self.host.set_frame(selected_index=index)
        logger.debug("Frame %s remembers index %s", frame.frame_id, index)
        return True
