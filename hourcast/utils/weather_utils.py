"""
Weather utility functions for formatting forecast values.

This module provides reusable formatting helpers for hourly records that the
presentation layers (Streamlit page and CLI) share.
"""

WMO_DESCRIPTIONS = {
    0: "CLEAR SKY",
    1: "MAINLY CLEAR",
    2: "PARTLY CLOUDY",
    3: "OVERCAST",
    45: "FOG",
    48: "FOG",
    51: "LIGHT DRIZZLE",
    53: "MODERATE DRIZZLE",
    55: "DENSE DRIZZLE",
    56: "FREEZING DRIZZLE (LIGHT)",
    57: "FREEZING DRIZZLE (DENSE)",
    61: "SLIGHT RAIN",
    63: "MODERATE RAIN",
    65: "HEAVY RAIN",
    66: "FREEZING RAIN (LIGHT)",
    67: "FREEZING RAIN (HEAVY)",
    71: "SLIGHT SNOW",
    73: "MODERATE SNOW",
    75: "HEAVY SNOW",
    77: "SNOW GRAINS",
    80: "RAIN SHOWERS (SLIGHT)",
    81: "RAIN SHOWERS (MODERATE)",
    82: "RAIN SHOWERS (VIOLENT)",
    85: "SNOW SHOWERS (SLIGHT)",
    86: "SNOW SHOWERS (HEAVY)",
    95: "THUNDERSTORM",
    96: "THUNDERSTORM (SLIGHT HAIL)",
    99: "THUNDERSTORM (HEAVY HAIL)",
}


def weather_code_to_text(code: int) -> str:
    """
    Convert a WMO weather code to its description.

    :param code: WMO weather interpretation code
    :return: Upper-case description, or an empty string for unknown codes
    """
    return WMO_DESCRIPTIONS.get(code, "")


def format_wind_direction(degrees: float) -> str:
    """
    Convert wind direction in degrees to cardinal direction.

    :param degrees: Wind direction in degrees (0-360)
    :return: Cardinal direction string (N, NE, E, SE, S, SW, W, NW)
    """
    if 337.5 <= degrees or degrees < 22.5:
        return "N"
    elif 22.5 <= degrees < 67.5:
        return "NE"
    elif 67.5 <= degrees < 112.5:
        return "E"
    elif 112.5 <= degrees < 157.5:
        return "SE"
    elif 157.5 <= degrees < 202.5:
        return "S"
    elif 202.5 <= degrees < 247.5:
        return "SW"
    elif 247.5 <= degrees < 292.5:
        return "W"
    else:
        return "NW"


def wind_direction_arrow(degrees: int) -> str:
    """
    Arrow showing where the wind blows to.

    Wind direction is reported as the direction the wind comes from, so a
    north wind points down.

    :param degrees: Wind direction in degrees (0-360)
    :return: Arrow character, or "?" when out of range
    """
    if degrees < 0 or degrees > 360:
        return "?"
    if degrees < 45 or degrees == 360:
        return "↓"
    elif degrees < 90:
        return "↙"
    elif degrees < 135:
        return "←"
    elif degrees < 180:
        return "↖"
    elif degrees < 225:
        return "↑"
    elif degrees < 270:
        return "↗"
    elif degrees < 315:
        return "→"
    else:
        return "↘"


def format_hour_label(index: int) -> str:
    """
    Clock label for an hour slot of the forecast.

    Slot 0 is 00:00 GMT of the first forecast day, so labels are UTC clock
    times.

    :param index: Hour index in the forecast set
    :return: "HH:00" string
    """
    return f"{index % 24:02d}:00"


def format_wind(wind_speed: float, wind_direction: int) -> str:
    return f"{wind_direction_arrow(wind_direction)}  {wind_speed}kph"
