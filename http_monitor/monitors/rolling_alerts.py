"""Rolling alerts — sustained high request rate over a sliding window.

Fires when the average rate over the last alert_window seconds reaches
alert_rate, and reports recovery when it drops back below.  Edge-triggered:
one line per state change, nothing while the state holds.
"""

from http_monitor import metrics
from http_monitor.monitors import Monitor, utc_datetime
from http_monitor.sliding_window import SlidingWindow


class RollingAlertsMonitor(Monitor):
    def __init__(self, config):
        self.window_seconds = config.alert_window
        self.alert_rate = config.alert_rate
        self.alert_triggered = False
        self.window = SlidingWindow(self.window_seconds)

    def push(self, record) -> list[str]:
        self.window.add(record.date)

        # Integer form of len / window_seconds >= alert_rate.
        triggered = len(self.window) >= self.alert_rate * self.window_seconds
        if triggered == self.alert_triggered:
            return []

        self.alert_triggered = triggered
        metrics.alert_active.set(1 if triggered else 0)
        return [self._render(record.date)]

    @property
    def rate(self) -> float:
        return len(self.window) / self.window_seconds

    def _render(self, date: int) -> str:
        when = utc_datetime(date).strftime("%Y-%m-%d %H:%M:%S")
        if self.alert_triggered:
            metrics.alert_transitions_total.labels(state="alert").inc()
            return (f"{when} ALERT-----+------> average of {self.rate:5.1f}rps "
                    f"over last {self.window_seconds:3} seconds exceeds threshold of  "
                    f"{float(self.alert_rate):5.1f}rps <-------ALERT")
        metrics.alert_transitions_total.labels(state="recovery").inc()
        return (f"{when} RECOVERY--+------> average of {self.rate:5.1f}rps "
                f"over last {self.window_seconds:3} seconds is below threshold of "
                f"{float(self.alert_rate):5.1f}rps <----RECOVERY")
