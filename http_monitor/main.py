"""Access-log monitor CLI — reads CSV request logs, prints stats and alerts.

Stats and alert lines go to stdout; status messages and errors go to
stderr.  On SIGINT/SIGTERM the input stops being read, buffered records
are processed and the open stats chunk is flushed.  A second signal
aborts immediately.

Usage:
    python -m http_monitor.main < sample_input.csv
    python -m http_monitor.main access.csv --stats-window 30 --alert-rate 5
    tail -f access.csv | python -m http_monitor.main --lenient --metrics-port 9090
"""

import argparse
import signal
import sys

from prometheus_client import start_http_server

from http_monitor.config import load_config
from http_monitor.errors import ConfigError, MonitorError
from http_monitor.stream import monitor_stream

running = True


def _shutdown(sig, frame):
    global running
    if not running:
        raise KeyboardInterrupt
    print("\nShutting down monitor (signal again to abort)...", file=sys.stderr)
    running = False


def _is_running() -> bool:
    return running


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HTTP access-log monitor")
    parser.add_argument(
        "input", nargs="?", default="-",
        help="CSV access log to read (default: stdin)",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--stats-window", type=int, help="Seconds per stats chunk")
    parser.add_argument("--alert-window", type=int, help="Seconds in the rolling alert window")
    parser.add_argument("--alert-rate", type=int, help="Requests/second that trigger an alert")
    parser.add_argument(
        "--max-timestamp-error", type=int,
        help="Seconds a record may be out of order",
    )
    parser.add_argument(
        "--lenient", action="store_true", default=False,
        help="Skip records that arrive too late to reorder instead of aborting",
    )
    parser.add_argument(
        "--metrics-port", type=int, default=None,
        help="Serve Prometheus metrics on this port",
    )
    return parser


def _print_tty_usage():
    print("ERROR: stdin must be a stream or file, not a terminal.", file=sys.stderr)
    print(file=sys.stderr)
    print("example usage:", file=sys.stderr)
    print("    http-monitor < sample_input.csv", file=sys.stderr)
    print("    python -m http_monitor.main sample_input.csv", file=sys.stderr)


def main(argv=None) -> int:
    global running
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(args.config, overrides={
            "stats_window": args.stats_window,
            "alert_window": args.alert_window,
            "alert_rate": args.alert_rate,
            "max_timestamp_error": args.max_timestamp_error,
            "strict_chronology": False if args.lenient else None,
        })
    except (ConfigError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.input == "-":
        if sys.stdin.isatty():
            _print_tty_usage()
            return 1
        source = sys.stdin
    else:
        try:
            source = open(args.input, newline="", encoding="utf-8")
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    if args.metrics_port is not None:
        start_http_server(args.metrics_port)
        print(f"Prometheus metrics server started on :{args.metrics_port}", file=sys.stderr)

    print(f"Monitor started  stats_window={config.stats_window}s  "
          f"alert={config.alert_rate}rps/{config.alert_window}s  "
          f"max_timestamp_error={config.max_timestamp_error}s  "
          f"strict={config.strict_chronology}", file=sys.stderr)

    running = True
    previous = {
        sig: signal.signal(sig, _shutdown) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        summary = monitor_stream(source, sys.stdout, config, running=_is_running)
    except MonitorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        return 130
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        if source is not sys.stdin:
            source.close()

    print(f"Done. {summary.records} records processed, {summary.lines} lines written.",
          file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
