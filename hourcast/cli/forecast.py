#!/usr/bin/env python3
"""
forecast.py: Print the hourly forecast for a location in the terminal.

Runs one resolution-and-fetch cycle of the weather widget: discovers the local
timezone when no location is given, geocodes it, fetches the forecast and
prints the upcoming hours.

Usage:
    python -m hourcast.cli.forecast [--location "New York"] [--hours 8]
                                    [--timeout 30] [--log-file hourcast.log]
"""

import argparse
import sys

import hourcast.core.data_processing as hc_dp
from hourcast import config as cfg
from hourcast.core.widget import WeatherWidget
from hourcast.models.state import Key, Phase
from hourcast.utils.log_util import app_logger, attach_log_file

logger = app_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the hourly weather forecast.")
    parser.add_argument(
        "--location",
        type=str,
        default=cfg.initial_location(),
        help="Place name or timezone path (default: $HOURCAST_LOCATION, else system timezone)",
    )
    parser.add_argument(
        "--hours", type=int, default=cfg.DISPLAY_HOURS, help="Number of hours to show"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=cfg.SETTLE_TIMEOUT_SECONDS,
        help="Seconds to wait for the forecast",
    )
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")
    return parser


def run(widget: WeatherWidget, hours: int, timeout: float) -> int:
    """
    Fetch once and print the outcome.

    :return: Process exit code, 0 on success.
    """
    widget.press(Key.CONFIRM)
    print(hc_dp.FETCHING_TEXT)
    state = widget.run_until_settled(timeout)

    if state.phase is Phase.FETCHING:
        print(f"❌ No forecast after {timeout:.0f}s.")
        return 1
    if state.phase is Phase.ERROR:
        print(f"❌ {state.last_error}")
        return 1

    print(f"\n📍 {state.forecast_label}\n")
    table = hc_dp.upcoming_table(state.forecast, hc_dp.current_forecast_hour(), hours)
    print(table.to_string(index=False))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_file:
        attach_log_file(args.log_file)

    widget = WeatherWidget(location_hint=args.location)
    try:
        return run(widget, args.hours, args.timeout)
    finally:
        widget.close()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        logger.exception(f"❌ Unhandled exception in forecast: {e}")
        sys.exit(1)
