"""
location.py: Turn a location hint into the next outbound request.

A hint is either a timezone path ("Europe/Berlin") or a free-text place name
("New York"). With a hint the next step is a geocode lookup; without one the
local timezone is discovered first and its output becomes the hint.

Functions:
- geocode_query: Place name to send to the geocoding API.
- build_geocode_request / build_weather_request / build_timezone_command
- next_resolution_request: Pick between timezone discovery and geocoding.
- parse_timezone_output: Hint from the timezone command's stdout.
"""

from typing import Optional, Union
from urllib.parse import quote

from hourcast import config as cfg
from hourcast.core.errors import EncodingError, RequestFailed
from hourcast.models.state import CommandRequest, HttpRequest, RequestTag
from hourcast.models.weather import Geolocation
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)


def _context(tag: RequestTag, generation: int) -> dict:
    return {"id": tag.value, "generation": str(generation)}


def geocode_query(hint: str) -> str:
    """
    Derive the geocoding ``name`` parameter from a hint.

    Timezone paths keep only their last segment. Spaces and hyphens become
    ``+`` as the geocoding API expects.

    :param hint: Timezone path or place name.
    :return: Query-safe place name.
    """
    place = hint.split("/")[-1].strip()
    return place.replace(" ", "+").replace("-", "+")


def build_geocode_request(hint: str, generation: int = 0) -> HttpRequest:
    place = geocode_query(hint)
    url = f"{cfg.GEOCODE_URL}?name={quote(place, safe='+')}&count=1&language=en&format=json"
    logger.info(f"Geocode request for '{place}'")
    return HttpRequest(url=url, context=_context(RequestTag.GEOCODE, generation))


def build_weather_request(geolocation: Geolocation, generation: int = 0) -> HttpRequest:
    url = (
        f"{cfg.FORECAST_URL}?latitude={geolocation.latitude}"
        f"&longitude={geolocation.longitude}&hourly={','.join(cfg.HOURLY_VARS)}"
    )
    logger.info(
        f"Weather request for {geolocation.latitude}, {geolocation.longitude}"
    )
    return HttpRequest(url=url, context=_context(RequestTag.WEATHER, generation))


def build_timezone_command(generation: int = 0) -> CommandRequest:
    logger.info("Discovering local timezone")
    return CommandRequest(
        argv=list(cfg.TIMEZONE_COMMAND),
        context=_context(RequestTag.TIMEZONE_DISCOVERY, generation),
    )


def next_resolution_request(
    hint: Optional[str], generation: int = 0
) -> Union[CommandRequest, HttpRequest]:
    """
    Decide the first request of a resolution run.

    :param hint: Known location hint, or None.
    :param generation: Generation to stamp on the request context.
    :return: Geocode request when a hint is known, else the timezone command.
    """
    if hint and hint.strip():
        return build_geocode_request(hint, generation)
    return build_timezone_command(generation)


def parse_timezone_output(stdout: bytes) -> str:
    """
    Extract the timezone identifier printed by the discovery command.

    :param stdout: Captured standard output.
    :return: First non-empty line, stripped.
    :raises EncodingError: stdout is not UTF-8.
    :raises RequestFailed: nothing was printed.
    """
    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(str(e)) from e
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    raise RequestFailed("timezone", "no timezone reported")
