"""Sliding window of recent request timestamps, keyed on record time.

Used by the rolling alert monitor.  Deque-based: O(1) append, amortized
O(1) eviction.  Time only moves when a record arrives, so the newest
timestamp in the window is "now".
"""

from collections import deque

from http_monitor.errors import ChronologyError


class SlidingWindow:
    __slots__ = ("max_age", "_buf")

    def __init__(self, max_age_seconds: int):
        self.max_age = max_age_seconds
        self._buf: deque[int] = deque()

    def add(self, timestamp: int) -> None:
        """Append timestamp and evict everything max_age or more seconds older."""
        if self._buf and timestamp < self._buf[-1]:
            raise ChronologyError(timestamp, self._buf[-1])
        self._buf.append(timestamp)
        self._evict(timestamp)

    def _evict(self, now: int) -> None:
        # A record exactly max_age old is out: the window is (now - max_age, now].
        cutoff = now - self.max_age
        while self._buf and self._buf[0] <= cutoff:
            self._buf.popleft()

    def __len__(self) -> int:
        return len(self._buf)
