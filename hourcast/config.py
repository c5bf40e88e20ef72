# config.py
"""
Configurations for the Hourcast weather widget.

This module contains the Open-Meteo endpoints, the hourly variables requested
from the forecast API, the local timezone discovery command and the runtime
limits shared by the Streamlit page and the CLI.
"""

import os
from typing import Optional

GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# Order matters: it is the order of the ``hourly`` query parameter.
HOURLY_VARS = [
    "temperature_2m",
    "precipitation_probability",
    "wind_speed_10m",
    "wind_direction_10m",
    "weather_code",
]

# Hour slots kept from each forecast response (indices 0..166).
FORECAST_HOURS = 167

# Rows shown by the presentation layer.
DISPLAY_HOURS = 8

TIMEZONE_COMMAND = [
    "bash",
    "-c",
    "timedatectl | grep \"Time zone\" | awk '{print $3}'",
]

HTTP_TIMEOUT_SECONDS = 20
COMMAND_TIMEOUT_SECONDS = 10
SETTLE_TIMEOUT_SECONDS = 30
MAX_WORKERS = 3

LOCATION_ENV_VAR = "HOURCAST_LOCATION"


def initial_location() -> Optional[str]:
    """
    Return the configured starting location hint, if any.

    :return: The value of ``HOURCAST_LOCATION`` or None when unset or blank.
    """
    location = os.environ.get(LOCATION_ENV_VAR, "").strip()
    return location or None
