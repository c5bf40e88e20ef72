"""
Unit tests for the Open-Meteo response parsers.
"""

import pytest

from conftest import build_geocode_payload, build_weather_payload, to_bytes
from hourcast.core.errors import EncodingError, MalformedPayload, MissingField, NoResultsFound
from hourcast.core.parsers import parse_geocode, parse_weather_data
from hourcast.models.weather import Geolocation, HourlyRecord


class TestParseWeatherData:
    """Test forecast decoding."""

    def test_returns_167_records_matching_source(self):
        """Every index 0..166 is decoded from the same array position."""
        payload = build_weather_payload()
        forecast = parse_weather_data(to_bytes(payload))

        assert list(forecast.keys()) == list(range(167))
        hourly = payload["hourly"]
        for i in (0, 1, 83, 166):
            assert forecast[i] == HourlyRecord(
                temperature=hourly["temperature_2m"][i],
                precipitation_probability=hourly["precipitation_probability"][i],
                wind_speed=hourly["wind_speed_10m"][i],
                wind_direction=hourly["wind_direction_10m"][i],
                weather_code=hourly["weather_code"][i],
            )

    def test_extra_hours_are_ignored(self):
        """A 7-day payload (168 hours) still yields 167 records."""
        forecast = parse_weather_data(to_bytes(build_weather_payload(hours=168)))
        assert len(forecast) == 167

    def test_same_payload_decodes_identically(self, weather_body):
        """Decoding is a pure function of the bytes."""
        assert parse_weather_data(weather_body) == parse_weather_data(weather_body)

    def test_integer_temperatures_become_floats(self):
        """JSON integers are valid for float fields."""
        payload = build_weather_payload(temperature_2m=[20] * 167)
        forecast = parse_weather_data(to_bytes(payload))
        assert forecast[0].temperature == 20.0
        assert isinstance(forecast[0].temperature, float)

    def test_invalid_utf8(self):
        """Bytes that are not UTF-8 fail before JSON parsing."""
        with pytest.raises(EncodingError):
            parse_weather_data(b"\xff\xfe{not utf8")

    def test_invalid_json(self):
        """Syntax errors are reported as malformed payloads."""
        with pytest.raises(MalformedPayload):
            parse_weather_data(b'{"hourly": [')

    def test_missing_hourly_object(self):
        with pytest.raises(MissingField) as exc:
            parse_weather_data(to_bytes({"latitude": 1.0}))
        assert exc.value.name == "hourly"

    @pytest.mark.parametrize(
        "key, name",
        [
            ("temperature_2m", "temperature"),
            ("precipitation_probability", "precipitation_probability"),
            ("wind_speed_10m", "wind speed"),
            ("wind_direction_10m", "wind direction"),
            ("weather_code", "weather code"),
        ],
    )
    def test_missing_array(self, key, name):
        """Each of the five arrays is required."""
        payload = build_weather_payload()
        del payload["hourly"][key]
        with pytest.raises(MissingField) as exc:
            parse_weather_data(to_bytes(payload))
        assert exc.value.name == name

    def test_short_array_fails_whole_decode(self):
        """An array with fewer than 167 entries rejects the batch."""
        payload = build_weather_payload()
        payload["hourly"]["wind_speed_10m"] = payload["hourly"]["wind_speed_10m"][:100]
        with pytest.raises(MissingField) as exc:
            parse_weather_data(to_bytes(payload))
        assert exc.value.name == "wind speed"
        assert exc.value.index == 100

    def test_null_value_is_missing(self):
        """Open-Meteo nulls are treated as missing values."""
        payload = build_weather_payload()
        payload["hourly"]["precipitation_probability"][150] = None
        with pytest.raises(MissingField) as exc:
            parse_weather_data(to_bytes(payload))
        assert exc.value.index == 150

    @pytest.mark.parametrize("value", ["3", 2.5, True, -1])
    def test_mistyped_integer_field(self, value):
        """Integer fields reject strings, reals, booleans and negatives."""
        payload = build_weather_payload()
        payload["hourly"]["weather_code"][10] = value
        with pytest.raises(MissingField):
            parse_weather_data(to_bytes(payload))

    @pytest.mark.parametrize("value", ["12.5", False, [1.0]])
    def test_mistyped_float_field(self, value):
        payload = build_weather_payload()
        payload["hourly"]["temperature_2m"][0] = value
        with pytest.raises(MissingField):
            parse_weather_data(to_bytes(payload))


class TestParseGeocode:
    """Test geocode decoding."""

    def test_first_result(self, geocode_body):
        geolocation, label = parse_geocode(geocode_body)
        assert geolocation == Geolocation(latitude=52.52437, longitude=13.41053)
        assert label == "Berlin, Germany"

    def test_only_first_result_is_used(self):
        payload = build_geocode_payload(
            [
                {"name": "Paris", "latitude": 48.85, "longitude": 2.35, "country": "France"},
                {"name": "Paris", "latitude": 33.66, "longitude": -95.55, "country": "United States"},
            ]
        )
        geolocation, label = parse_geocode(to_bytes(payload))
        assert geolocation.latitude == 48.85
        assert label == "Paris, France"

    def test_empty_results(self):
        """Zero matches is its own error kind."""
        with pytest.raises(NoResultsFound):
            parse_geocode(to_bytes(build_geocode_payload([])))

    def test_results_key_absent(self):
        """Open-Meteo omits ``results`` entirely when nothing matches."""
        with pytest.raises(NoResultsFound):
            parse_geocode(to_bytes({"generationtime_ms": 0.3}))

    @pytest.mark.parametrize("field", ["latitude", "longitude", "name", "country"])
    def test_missing_field(self, field):
        payload = build_geocode_payload()
        del payload["results"][0][field]
        with pytest.raises(MissingField) as exc:
            parse_geocode(to_bytes(payload))
        assert exc.value.name == field

    def test_mistyped_field(self):
        payload = build_geocode_payload()
        payload["results"][0]["latitude"] = "52.5"
        with pytest.raises(MissingField):
            parse_geocode(to_bytes(payload))

    def test_invalid_utf8(self):
        with pytest.raises(EncodingError):
            parse_geocode(b"\xc3\x28")

    def test_invalid_json(self):
        with pytest.raises(MalformedPayload):
            parse_geocode(b"<html>502 Bad Gateway</html>")
