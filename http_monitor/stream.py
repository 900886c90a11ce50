"""End-to-end run: CSV source -> reorder buffer -> monitors -> text sink."""

from dataclasses import dataclass
from typing import Callable, TextIO

from http_monitor.engine import MonitorEngine
from http_monitor.reader import read_records
from http_monitor.sorted_records import SortedRecordIterator


@dataclass
class StreamSummary:
    records: int
    lines: int


def monitor_stream(source: TextIO, sink: TextIO, config,
                   running: Callable[[], bool] | None = None) -> StreamSummary:
    """Read CSV request records from *source*, run the monitors, write their output to *sink*.

    Lines for closed chunks are written as they happen, so on an error the
    sink already holds everything up to the failure.  If *running* returns
    False the source stops being read, but records already buffered are
    still processed and the open chunk is flushed.
    """
    records = SortedRecordIterator(read_records(source), config)
    engine = MonitorEngine(config)
    written = 0

    for record in records:
        written += _write(sink, engine.process(record))
        if running is not None and not running():
            records.stop()

    written += _write(sink, engine.finish())
    return StreamSummary(records=engine.records, lines=written)


def _write(sink: TextIO, lines: list[str]) -> int:
    for line in lines:
        sink.write(f"{line}\n")
    if lines:
        sink.flush()
    return len(lines)
