"""Prometheus collectors for the monitor pipeline.

Each Counter/Gauge below registers itself in prometheus_client's global
REGISTRY on construction.  The CLI only exposes them when started with
--metrics-port; otherwise they are updated and never read.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Input / ordering
# ---------------------------------------------------------------------------
records_total = Counter(
    "http_monitor_records_total",
    "Request records dispatched to the monitors",
)
out_of_order_records_total = Counter(
    "http_monitor_out_of_order_records_total",
    "Records that arrived behind the reorder watermark but within tolerance",
)
late_records_dropped_total = Counter(
    "http_monitor_late_records_dropped_total",
    "Records skipped in lenient mode because they arrived too late to reorder",
)
reorder_buffered_records = Gauge(
    "http_monitor_reorder_buffered_records",
    "Records currently held by the reorder buffer",
)

# ---------------------------------------------------------------------------
# Monitor output
# ---------------------------------------------------------------------------
stats_chunks_total = Counter(
    "http_monitor_stats_chunks_total",
    "Stats chunks flushed",
    ["empty"],
)
alert_transitions_total = Counter(
    "http_monitor_alert_transitions_total",
    "Alert state transitions",
    ["state"],
)
alert_active = Gauge(
    "http_monitor_alert_active",
    "1 while the traffic-rate alert is triggered",
)
