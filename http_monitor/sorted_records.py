"""Reorder buffer: turns a mostly-sorted record stream into a sorted one.

Access logs are written roughly in timestamp order, but concurrent
requests finishing at different times shuffle neighbouring lines by a
second or so.  Records are held in a min-heap until nothing still to
arrive can sort before them, then released in order.

A record can be overtaken only by one at most 2 * max_timestamp_error
seconds earlier, so anything that far behind the largest timestamp seen
(the watermark) is safe to release.
"""

import heapq
import sys
from collections import deque

from http_monitor import metrics
from http_monitor.errors import ChronologyError


class SortedRecordIterator:
    """Iterator yielding records from *records* in non-decreasing date order.

    Single pass; ties keep arrival order.  Raises ChronologyError (strict
    mode) for a record older than anything the buffer can still place.
    """

    def __init__(self, records, config):
        self._source = enumerate(records)
        self._exhausted = False
        self.buffer_seconds = 2 * config.max_timestamp_error
        self.strict = config.strict_chronology

        # Largest timestamp pulled from the source so far.
        self.largest_timestamp: int | None = None
        # Released records, already in final order.
        self._ready = deque()
        # Records whose position is still open: (date, arrival index, record).
        self._pending: list = []

    def __iter__(self):
        return self

    def __next__(self):
        while not self._ready:
            if self._exhausted:
                # Nothing else can arrive, so the heap order is final.
                if not self._pending:
                    raise StopIteration
                record = heapq.heappop(self._pending)[2]
                metrics.reorder_buffered_records.set(len(self._pending))
                return record
            try:
                index, record = next(self._source)
            except StopIteration:
                self._exhausted = True
                continue
            self._push(index, record)

        record = self._ready.popleft()
        metrics.reorder_buffered_records.set(self.buffered)
        return record

    @property
    def buffered(self) -> int:
        """Records read from the source but not yet yielded."""
        return len(self._ready) + len(self._pending)

    def stop(self) -> None:
        """Stop reading the source.  Buffered records are still yielded, in order."""
        self._exhausted = True

    def _push(self, index: int, record) -> None:
        date = record.date
        if self.largest_timestamp is not None:
            earliest = self.largest_timestamp - self.buffer_seconds
            if date < earliest:
                if self.strict:
                    raise ChronologyError(date, earliest)
                metrics.late_records_dropped_total.inc()
                print(f"WARNING: skipping record at {date}, "
                      f"more than {self.buffer_seconds}s behind {self.largest_timestamp}",
                      file=sys.stderr)
                return
            if date < self.largest_timestamp:
                metrics.out_of_order_records_total.inc()

        if self.largest_timestamp is None or date > self.largest_timestamp:
            self.largest_timestamp = date

        heapq.heappush(self._pending, (date, index, record))

        floor = self.largest_timestamp - self.buffer_seconds
        while self._pending and self._pending[0][0] < floor:
            self._ready.append(heapq.heappop(self._pending)[2])
