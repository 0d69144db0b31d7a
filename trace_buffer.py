"""Trace buffer: fixed-capacity circular storage of 3D points.

The storage is a single (capacity, 3) NumPy array allocated once. Appends
write at a wrapping cursor; the renderer draws a contiguous physical
slice of the array (a draw range) instead of receiving a reordered copy.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

# Points kept per trajectory
DEFAULT_CAPACITY = 100_000


class VisibleWindow(NamedTuple):
    """Physical draw range into a trace buffer.

    Supports tuple unpacking: ``start, count = window``.
    """

    start: int
    count: int

    @property
    def stop(self) -> int:
        return self.start + self.count


class TraceBuffer:
    """Circular buffer of 3D points with a write cursor.

    ``head`` is the slot the next append writes to, always equal to the
    number of appends so far modulo capacity. ``written`` counts appends
    and saturates at capacity, so ``written < capacity`` means the buffer
    has not wrapped yet.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, dtype=np.float32):
        if capacity <= 0:
            raise ValueError(f"Trace buffer capacity must be positive, got {capacity}")
        self._data = np.zeros((capacity, 3), dtype=dtype)
        self.head = 0
        self.written = 0

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    @property
    def is_full(self) -> bool:
        return self.written == self.capacity

    @property
    def points(self) -> np.ndarray:
        """Read-only view of the whole physical storage."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self.written

    def append(self, point) -> None:
        """Write point at head and advance the cursor with wraparound."""
        self._data[self.head] = point
        self.head = (self.head + 1) % self.capacity
        if self.written < self.capacity:
            self.written += 1

    def clear(self) -> None:
        """Zero every slot in place and rewind the cursor."""
        self._data.fill(0)
        self.head = 0
        self.written = 0

    def visible_window(self, max_visible: int) -> VisibleWindow:
        """Return the draw range ``[max(0, head - max_visible), head)``.

        The range is over the physical layout and never crosses slot 0,
        so once the head wraps the window only covers points written
        since the wrap. Right after a wrap it is short or empty, which
        shows up as the trace briefly shortening on screen.
        """
        if max_visible < 0:
            raise ValueError(f"max_visible must be non-negative, got {max_visible}")
        start = max(0, self.head - int(max_visible))
        return VisibleWindow(start, self.head - start)

    def window_points(self, max_visible: int) -> np.ndarray:
        """Read-only view of the points inside visible_window(max_visible)."""
        start, count = self.visible_window(max_visible)
        return self.points[start:start + count]

    def latest(self):
        """Most recently appended point, or None when empty."""
        if self.written == 0:
            return None
        return self._data[(self.head - 1) % self.capacity].copy()

    def history(self) -> np.ndarray:
        """Copy of the stored points in chronological order, oldest first.

        Unlike visible_window() this does unwrap the ring, at the cost of
        a copy. Intended for inspection, not for per-frame rendering.
        """
        if self.written < self.capacity:
            return self._data[:self.written].copy()
        return np.concatenate((self._data[self.head:], self._data[:self.head]))
