"""Chunked stats — one traffic summary per fixed-width time chunk.

Chunks are back-to-back, stats_window seconds wide, and anchored on the
first record's timestamp rather than on wall-clock boundaries.  A chunk
is reported as soon as a record lands past its end; silent stretches get
one "no requests" line per chunk so the output timeline has no gaps.
"""

from collections import Counter

from http_monitor import metrics
from http_monitor.errors import ChronologyError
from http_monitor.monitors import Monitor, utc_datetime

_TOP_SECTIONS = 1
_TOP_STATUS_CODES = 3


def _top(counts: Counter, n: int) -> list[tuple]:
    # Highest count first; equal counts in ascending key order.
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:n]


class ChunkedStatsMonitor(Monitor):
    def __init__(self, config):
        self.chunk_seconds = config.stats_window

        # [start, end) of the chunk being aggregated; None until the first record.
        self.chunk_start: int | None = None
        self.request_count = 0
        self.requests_by_status_code: Counter = Counter()
        self.requests_by_section: Counter = Counter()

    @property
    def chunk_end(self) -> int | None:
        if self.chunk_start is None:
            return None
        return self.chunk_start + self.chunk_seconds

    def push(self, record) -> list[str]:
        output = self._flush_before(record.date)

        self.request_count += 1
        self.requests_by_status_code[record.status] += 1
        self.requests_by_section["/" + record.section] += 1

        return output

    def pending(self) -> list[str]:
        """Summary of the open chunk, which no record has closed yet."""
        if self.chunk_start is None:
            return []
        metrics.stats_chunks_total.labels(empty=str(self.request_count == 0).lower()).inc()
        return [self._render()]

    def _flush_before(self, date: int) -> list[str]:
        """Close every chunk that ends at or before *date*."""
        if self.chunk_start is None:
            self.chunk_start = date
            return []
        if date < self.chunk_start:
            raise ChronologyError(date, self.chunk_start)

        output = []
        while date >= self.chunk_end:
            output.extend(self.pending())
            self._reset()
            self.chunk_start += self.chunk_seconds
        return output

    def _reset(self) -> None:
        self.request_count = 0
        self.requests_by_status_code.clear()
        self.requests_by_section.clear()

    def _render(self) -> str:
        start = utc_datetime(self.chunk_start).strftime("%Y-%m-%d %H:%M:%S")
        end = utc_datetime(self.chunk_end).strftime("%H:%M:%S")

        if self.request_count == 0:
            return f"{start}-{end}  |  no requests"

        total = self.request_count
        rate = total / self.chunk_seconds
        sections = ", ".join(
            f"{100 * count // total:3}% in {section:<11}"
            for section, count in _top(self.requests_by_section, _TOP_SECTIONS)
        )
        statuses = ", ".join(
            f"{100 * count // total:3}% {code:03}"
            for code, count in _top(self.requests_by_status_code, _TOP_STATUS_CODES)
        )
        return (f"{start}-{end}  |  {total:4} requests at {rate:5.1f}rps  |  "
                f"{sections}  |  {statuses}")
