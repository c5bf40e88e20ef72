"""data_processing.py
Collection of functions to shape widget state for the presentation layers
"""

from typing import List, Optional, Tuple

import pandas as pd

from hourcast import config as cfg
from hourcast.models.state import ApplicationState, Phase
from hourcast.models.weather import ForecastSet, HourlyRecord
from hourcast.utils.weather_utils import (
    format_hour_label,
    format_wind,
    format_wind_direction,
    weather_code_to_text,
)

RELOAD_HINT = "Press <ENTER> to reload, <Ctrl-w> to enter a new location"
RUN_HINT = "Press <ENTER> to run, <Ctrl-w> to enter a new location"
FETCHING_TEXT = "Fetching data..."

FORECAST_COLUMNS = [
    "hour",
    "temperature",
    "precipitation_probability",
    "wind_speed",
    "wind_direction",
    "weather_code",
]


def forecast_to_dataframe(forecast: ForecastSet) -> pd.DataFrame:
    """
    Convert a ForecastSet into a DataFrame indexed by hour slot.

    :param forecast: Mapping hour index -> HourlyRecord.
    :return: DataFrame with one row per hour and a derived ``conditions`` column.
    """
    if not forecast:
        return pd.DataFrame(columns=FORECAST_COLUMNS + ["conditions"]).set_index("hour")

    rows = [
        {
            "hour": hour,
            "temperature": record.temperature,
            "precipitation_probability": record.precipitation_probability,
            "wind_speed": record.wind_speed,
            "wind_direction": record.wind_direction,
            "weather_code": record.weather_code,
        }
        for hour, record in sorted(forecast.items())
    ]
    df = pd.DataFrame(rows, columns=FORECAST_COLUMNS).set_index("hour")
    df["conditions"] = df["weather_code"].map(weather_code_to_text)
    return df


def current_forecast_hour(now: Optional[pd.Timestamp] = None) -> int:
    """
    Hour slot of today that ``now`` falls in.

    The forecast series starts at 00:00 GMT of the current day, so the slot
    is the UTC hour, not the local one.

    :param now: Point in time, defaults to the current time. Naive
        timestamps are taken as UTC.
    :return: Hour of day (0-23) in UTC.
    """
    now = pd.Timestamp.now(tz="UTC") if now is None else now
    if now.tzinfo is None:
        return now.hour
    return now.tz_convert("UTC").hour


def upcoming_hours(
    forecast: ForecastSet, current_hour: int, count: int = cfg.DISPLAY_HOURS
) -> List[Tuple[int, HourlyRecord]]:
    """
    Records from the current hour onward, in ascending order.

    :param forecast: Mapping hour index -> HourlyRecord.
    :param current_hour: UTC hour of day (0-23), used as the starting slot.
    :param count: Maximum number of records to return.
    :return: List of (hour index, record) pairs.
    """
    items = sorted(forecast.items())
    return items[current_hour : current_hour + count]


def upcoming_table(
    forecast: ForecastSet, current_hour: int, count: int = cfg.DISPLAY_HOURS
) -> pd.DataFrame:
    """Display table of the upcoming hours with formatted columns."""
    rows = [
        {
            "Time": format_hour_label(hour),
            "Conditions": weather_code_to_text(record.weather_code),
            "Temp": f"{record.temperature}°C",
            "Rain": f"💧 {record.precipitation_probability}%",
            "Wind": format_wind(record.wind_speed, record.wind_direction),
            "From": format_wind_direction(record.wind_direction),
        }
        for hour, record in upcoming_hours(forecast, current_hour, count)
    ]
    return pd.DataFrame(rows, columns=["Time", "Conditions", "Temp", "Rain", "Wind", "From"])


def status_lines(state: ApplicationState) -> Tuple[str, str]:
    """
    Headline and controls hint for the current phase.

    :param state: Current widget state.
    :return: (headline, hint); either may be empty.
    """
    if state.phase is Phase.ERROR:
        return state.last_error, RELOAD_HINT
    if state.phase is Phase.TYPING_LOCATION:
        return f"Enter desired location: {state.draft_input}_", ""
    if state.phase is Phase.FETCHING:
        return FETCHING_TEXT, ""
    if state.phase is Phase.IDLE:
        return RUN_HINT, ""
    return state.forecast_label or "", RELOAD_HINT
