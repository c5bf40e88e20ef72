"""
Weather data models and type definitions.

This module provides type-safe data structures for the hourly forecast and
the resolved location used throughout the application.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class HourlyRecord:
    """One forecast sample for an hour slot."""

    temperature: float  # °C
    precipitation_probability: int  # %
    wind_speed: float  # km/h
    wind_direction: int  # degrees
    weather_code: int  # WMO


@dataclass(frozen=True)
class Geolocation:
    """Resolved coordinates of the requested location."""

    latitude: float
    longitude: float


# Hour index (0..166) -> record, built in ascending key order.
ForecastSet = Dict[int, HourlyRecord]
