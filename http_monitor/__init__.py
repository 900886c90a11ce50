"""Access-log traffic monitor: chunked stats and rolling-rate alerts."""

from http_monitor.models import Config, RequestRecord, default_config
from http_monitor.stream import monitor_stream

__all__ = ["Config", "RequestRecord", "default_config", "monitor_stream"]
