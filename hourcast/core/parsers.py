"""
Decoders for Open-Meteo response bodies.

Both parsers take the raw body bytes and apply the same two stages before
reading fields: UTF-8 decode (``EncodingError``) then JSON parse
(``MalformedPayload``). Field access is strict: a missing, null or mistyped
value raises ``MissingField`` and nothing partial is ever returned.
"""

import json
from typing import Any, Tuple

from hourcast.config import FORECAST_HOURS
from hourcast.core.errors import EncodingError, MalformedPayload, MissingField, NoResultsFound
from hourcast.models.weather import ForecastSet, Geolocation, HourlyRecord


def _load_json(body: bytes) -> Any:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(str(e)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPayload(str(e)) from e


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid JSON number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_float(value: Any, name: str, index=None) -> float:
    if not _is_number(value):
        raise MissingField(name, index)
    return float(value)


def _as_count(value: Any, name: str, index=None) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MissingField(name, index)
    return value


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise MissingField(name)
    return value


def _series(hourly: dict, key: str, name: str) -> list:
    values = hourly.get(key)
    if not isinstance(values, list):
        raise MissingField(name)
    return values


def _at(values: list, index: int, name: str) -> Any:
    if index >= len(values):
        raise MissingField(name, index)
    return values[index]


def parse_weather_data(body: bytes) -> ForecastSet:
    """
    Decode a forecast response into a ForecastSet of exactly 167 records.

    :param body: Raw response bytes.
    :return: Mapping hour index -> HourlyRecord in ascending order.
    :raises EncodingError, MalformedPayload, MissingField:
    """
    payload = _load_json(body)
    hourly = payload.get("hourly") if isinstance(payload, dict) else None
    if not isinstance(hourly, dict):
        raise MissingField("hourly")

    temperature = _series(hourly, "temperature_2m", "temperature")
    precipitation = _series(hourly, "precipitation_probability", "precipitation_probability")
    wind_speed = _series(hourly, "wind_speed_10m", "wind speed")
    wind_direction = _series(hourly, "wind_direction_10m", "wind direction")
    weather_code = _series(hourly, "weather_code", "weather code")

    forecast: ForecastSet = {}
    for i in range(FORECAST_HOURS):
        forecast[i] = HourlyRecord(
            temperature=_as_float(_at(temperature, i, "temperature"), "temperature", i),
            precipitation_probability=_as_count(
                _at(precipitation, i, "precipitation_probability"),
                "precipitation_probability",
                i,
            ),
            wind_speed=_as_float(_at(wind_speed, i, "wind speed"), "wind speed", i),
            wind_direction=_as_count(
                _at(wind_direction, i, "wind direction"), "wind direction", i
            ),
            weather_code=_as_count(_at(weather_code, i, "weather code"), "weather code", i),
        )
    return forecast


def parse_geocode(body: bytes) -> Tuple[Geolocation, str]:
    """
    Decode a geocoding response into coordinates and a "City, Country" label.

    :param body: Raw response bytes.
    :return: (Geolocation, label) of the first result.
    :raises EncodingError, MalformedPayload, NoResultsFound, MissingField:
    """
    payload = _load_json(body)
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list) or not results:
        raise NoResultsFound()

    first = results[0]
    if not isinstance(first, dict):
        raise MissingField("latitude")

    latitude = _as_float(first.get("latitude"), "latitude")
    longitude = _as_float(first.get("longitude"), "longitude")
    city = _as_str(first.get("name"), "name")
    country = _as_str(first.get("country"), "country")
    return Geolocation(latitude=latitude, longitude=longitude), f"{city}, {country}"
