"""Record and configuration value types.

Both are frozen dataclasses.  A RequestRecord is built once by the CSV
reader and then shared, read-only, by every monitor.
"""

from dataclasses import dataclass, fields

from http_monitor.errors import ConfigError

# Section reported for request lines we can't pull a path out of.
UNKNOWN_SECTION = "unknown"


@dataclass(frozen=True)
class RequestRecord:
    remote_host: str
    date: int      # unix timestamp, seconds
    request: str   # e.g. "GET /api/user HTTP/1.0"
    status: int
    bytes: int

    @property
    def section(self) -> str:
        """First path segment of the request, without the leading slash.

        "GET /api/user HTTP/1.0" -> "api", "GET / HTTP/1.0" -> "".
        Anything that isn't "METHOD /path [PROTO]" is UNKNOWN_SECTION.
        """
        parts = self.request.split()
        if len(parts) not in (2, 3):
            return UNKNOWN_SECTION
        path = parts[1]
        if not path.startswith("/"):
            return UNKNOWN_SECTION
        path = path.split("?", 1)[0]
        return path[1:].split("/", 1)[0]


@dataclass(frozen=True)
class Config:
    """Tunables for one monitoring run."""

    # Seconds of traffic summarised by each stats line.  Chunks are
    # back-to-back and anchored on the first record's timestamp.
    stats_window: int = 10
    # Seconds covered by the rolling alert window.
    alert_window: int = 120
    # Average requests/second over alert_window that triggers an alert.
    alert_rate: int = 10
    # How far (seconds) a record's timestamp may be off from its true order.
    max_timestamp_error: int = 1
    # False: late records are reported and skipped instead of aborting.
    strict_chronology: bool = True

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if field.type in (bool, "bool"):
                if not isinstance(value, bool):
                    raise ConfigError(f"{field.name} must be a boolean, got {value!r}")
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{field.name} must be an integer, got {value!r}")

        for name in ("stats_window", "alert_window", "alert_rate"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.max_timestamp_error < 0:
            raise ConfigError(
                f"max_timestamp_error must not be negative, got {self.max_timestamp_error}"
            )


def default_config() -> Config:
    """10s stats chunks, 10 req/s over 120s alerts, 1s timestamp tolerance."""
    return Config()
