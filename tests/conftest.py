"""
Shared fixtures: Open-Meteo payload builders and completion events.
"""

import json

import pytest

from hourcast.models.state import CommandResult, HttpResult


def build_weather_payload(hours=167, **overrides):
    hourly = {
        "time": [f"2024-06-{1 + i // 24:02d}T{i % 24:02d}:00" for i in range(hours)],
        "temperature_2m": [round(10.0 + i * 0.1, 1) for i in range(hours)],
        "precipitation_probability": [i % 101 for i in range(hours)],
        "wind_speed_10m": [round(5.0 + (i % 7) * 1.5, 1) for i in range(hours)],
        "wind_direction_10m": [(i * 15) % 361 for i in range(hours)],
        "weather_code": [[0, 1, 2, 3, 61, 95][i % 6] for i in range(hours)],
    }
    hourly.update(overrides)
    return {"latitude": 52.52, "longitude": 13.41, "hourly": hourly}


def build_geocode_payload(results=None):
    if results is None:
        results = [
            {
                "id": 2950159,
                "name": "Berlin",
                "latitude": 52.52437,
                "longitude": 13.41053,
                "country": "Germany",
            }
        ]
    return {"results": results, "generationtime_ms": 0.5}


def to_bytes(payload):
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def weather_body():
    return to_bytes(build_weather_payload())


@pytest.fixture
def geocode_body():
    return to_bytes(build_geocode_payload())


@pytest.fixture
def http_result():
    def _make(tag, body=b"", status=200, generation=None):
        context = {"id": tag}
        if generation is not None:
            context["generation"] = str(generation)
        return HttpResult(status=status, headers={}, body=body, context=context)

    return _make


@pytest.fixture
def command_result():
    def _make(stdout=b"Europe/Berlin\n", stderr=b"", exit_code=0, generation=None):
        context = {"id": "TIMEZONE_COMMAND_ID"}
        if generation is not None:
            context["generation"] = str(generation)
        return CommandResult(
            exit_code=exit_code, stdout=stdout, stderr=stderr, context=context
        )

    return _make
