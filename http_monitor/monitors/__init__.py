# Monitors are plain Python classes sharing one small interface.
#
# The set is closed: the engine always runs ChunkedStatsMonitor then
# RollingAlertsMonitor.  The base class exists so tests and the engine can
# treat them alike, not as a plugin point.

from datetime import datetime, timezone


def utc_datetime(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class Monitor:
    """Base stream monitor. Subclass and implement push()."""

    def push(self, record) -> list[str]:
        """Feed one record (in date order), get back zero or more output lines."""
        raise NotImplementedError

    def pending(self) -> list[str]:
        """Output for records not yet reported.

        Called once at end of stream so records in a chunk that no later
        record closed aren't lost.  Monitors whose output already reflects
        every pushed record keep this default.
        """
        return []


from http_monitor.monitors.chunked_stats import ChunkedStatsMonitor
from http_monitor.monitors.rolling_alerts import RollingAlertsMonitor


def default_monitors(config) -> list[Monitor]:
    return [ChunkedStatsMonitor(config), RollingAlertsMonitor(config)]
