"""
Unit tests for location hint resolution and request construction.
"""

import pytest

from hourcast import config as cfg
from hourcast.core.errors import EncodingError, RequestFailed
from hourcast.core.location import (
    build_geocode_request,
    build_timezone_command,
    build_weather_request,
    geocode_query,
    next_resolution_request,
    parse_timezone_output,
)
from hourcast.models.state import CommandRequest, HttpRequest, RequestTag
from hourcast.models.weather import Geolocation


class TestGeocodeQuery:
    """Test place name derivation from hints."""

    def test_timezone_path_uses_last_segment(self):
        assert geocode_query("Europe/Berlin") == "Berlin"

    def test_nested_timezone_path(self):
        assert geocode_query("America/Argentina/Buenos_Aires") == "Buenos_Aires"

    def test_free_text_spaces(self):
        assert geocode_query("New York") == "New+York"

    def test_hyphens(self):
        assert geocode_query("Port-au-Prince") == "Port+au+Prince"

    def test_plain_name_verbatim(self):
        assert geocode_query("Tokyo") == "Tokyo"

    def test_path_with_spaces(self):
        assert geocode_query("America/New York") == "New+York"


class TestRequestBuilders:
    """Test outbound request construction."""

    def test_geocode_request(self):
        request = build_geocode_request("Europe/Berlin", generation=3)
        assert isinstance(request, HttpRequest)
        assert request.url == (
            "https://geocoding-api.open-meteo.com/v1/search"
            "?name=Berlin&count=1&language=en&format=json"
        )
        assert request.method == "GET"
        assert request.headers == {}
        assert request.body == b""
        assert request.context == {"id": "geocode", "generation": "3"}

    @pytest.mark.parametrize(
        "hint, name",
        [
            ("Trinidad & Tobago", "Trinidad+%26+Tobago"),
            ("What?", "What%3F"),
            ("Room #5", "Room+%235"),
            ("São Paulo", "S%C3%A3o+Paulo"),
        ],
    )
    def test_geocode_request_escapes_reserved_characters(self, hint, name):
        request = build_geocode_request(hint)
        assert f"?name={name}&count=1&" in request.url

    def test_weather_request(self):
        request = build_weather_request(Geolocation(52.52, 13.41), generation=1)
        assert request.url == (
            "https://api.open-meteo.com/v1/forecast?latitude=52.52&longitude=13.41"
            "&hourly=temperature_2m,precipitation_probability,wind_speed_10m,"
            "wind_direction_10m,weather_code"
        )
        assert RequestTag.from_context(request.context) is RequestTag.WEATHER

    def test_timezone_command(self):
        request = build_timezone_command(generation=2)
        assert isinstance(request, CommandRequest)
        assert request.argv == cfg.TIMEZONE_COMMAND
        assert request.context == {"id": "TIMEZONE_COMMAND_ID", "generation": "2"}

    def test_next_request_with_hint_is_geocode(self):
        request = next_resolution_request("New York", generation=1)
        assert RequestTag.from_context(request.context) is RequestTag.GEOCODE
        assert "name=New+York" in request.url

    @pytest.mark.parametrize("hint", [None, "", "   "])
    def test_next_request_without_hint_is_timezone_command(self, hint):
        request = next_resolution_request(hint, generation=1)
        assert isinstance(request, CommandRequest)
        assert RequestTag.from_context(request.context) is RequestTag.TIMEZONE_DISCOVERY


class TestParseTimezoneOutput:
    """Test parsing of the timezone discovery command's stdout."""

    def test_single_line(self):
        assert parse_timezone_output(b"Europe/Berlin\n") == "Europe/Berlin"

    def test_leading_blank_lines(self):
        assert parse_timezone_output(b"\n  America/Chicago  \n") == "America/Chicago"

    def test_empty_output(self):
        with pytest.raises(RequestFailed) as exc:
            parse_timezone_output(b"\n")
        assert exc.value.stage == "timezone"

    def test_invalid_utf8(self):
        with pytest.raises(EncodingError):
            parse_timezone_output(b"\xff")


class TestRequestTag:
    def test_unknown_id(self):
        assert RequestTag.from_context({"id": "something-else"}) is None

    def test_missing_id(self):
        assert RequestTag.from_context({}) is None
