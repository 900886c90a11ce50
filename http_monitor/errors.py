"""Exceptions raised by the monitor pipeline.

Everything derives from MonitorError so the CLI can report any pipeline
failure with one except clause.  Input and config errors are also
ValueErrors, which is what they are.
"""


class MonitorError(Exception):
    """Base class for pipeline failures."""


class InputError(MonitorError, ValueError):
    """CSV header mismatch or a row that can't be decoded."""


class ConfigError(MonitorError, ValueError):
    """A configuration value is missing, unknown or out of range."""


class ChronologyError(MonitorError):
    """A record arrived after records later than it were already emitted."""

    def __init__(self, timestamp: int, earliest_allowed: int):
        self.timestamp = timestamp
        self.earliest_allowed = earliest_allowed
        super().__init__(
            f"record at {timestamp} arrived too late: "
            f"records before {earliest_allowed} were already emitted"
        )
