"""Monitor engine — fans ordered records out to every monitor.

Pure business logic, no I/O.  stream.monitor_stream feeds records in and
writes the returned lines to the sink.

Monitors run in a fixed order (stats, then alerts).  The order only
decides how their lines interleave.
"""

from http_monitor import metrics
from http_monitor.monitors import Monitor, default_monitors


class MonitorEngine:

    def __init__(self, config, monitors: list[Monitor] | None = None):
        self.config = config
        self.monitors = monitors if monitors is not None else default_monitors(config)
        self.records = 0

    def process(self, record) -> list[str]:
        """Feed one record, get back zero or more output lines."""
        self.records += 1
        metrics.records_total.inc()

        lines = []
        for monitor in self.monitors:
            lines.extend(monitor.push(record))
        return lines

    def finish(self) -> list[str]:
        """Flush whatever each monitor still holds.  Call once, at end of stream."""
        lines = []
        for monitor in self.monitors:
            lines.extend(monitor.pending())
        return lines
