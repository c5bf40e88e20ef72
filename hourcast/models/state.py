"""
Application state, events and outbound requests of the weather widget.

The orchestrator is the only writer of ``ApplicationState``; everything else
reads snapshots. Events are the sole inputs to the orchestrator and requests
its sole outputs.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from hourcast.core.errors import InvalidStateError
from hourcast.models.weather import ForecastSet, Geolocation


class Phase(Enum):
    """Named display/processing phases of the widget."""

    IDLE = "idle"
    TYPING_LOCATION = "typing_location"
    FETCHING = "fetching"
    DISPLAYING = "displaying"
    ERROR = "error"


class RequestTag(Enum):
    """Correlation tags carried in the ``id`` key of a request context."""

    TIMEZONE_DISCOVERY = "TIMEZONE_COMMAND_ID"
    GEOCODE = "geocode"
    WEATHER = "weather"

    @classmethod
    def from_context(cls, context: Dict[str, str]) -> Optional["RequestTag"]:
        """Return the tag named by ``context["id"]``, or None when unknown."""
        try:
            return cls(context.get("id"))
        except ValueError:
            return None


class Key(Enum):
    CONFIRM = "confirm"
    NEW_LOCATION = "new_location"
    DELETE_CHAR = "delete_char"
    APPEND_CHAR = "append_char"


# ---------- events ----------


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: Optional[str] = None


@dataclass(frozen=True)
class CommandResult:
    exit_code: Optional[int]
    stdout: bytes
    stderr: bytes
    context: Dict[str, str]


@dataclass(frozen=True)
class HttpResult:
    status: int
    headers: Dict[str, str]
    body: bytes
    context: Dict[str, str]


# ---------- requests ----------


@dataclass(frozen=True)
class CommandRequest:
    argv: List[str]
    context: Dict[str, str]


@dataclass(frozen=True)
class HttpRequest:
    url: str
    context: Dict[str, str]
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


# ---------- state ----------


@dataclass(frozen=True)
class ApplicationState:
    """
    Snapshot of everything the widget knows.

    Built with an explicit ``phase``; the optional fields must agree with it
    or construction fails with ``InvalidStateError``.
    """

    phase: Phase = Phase.IDLE
    forecast: ForecastSet = field(default_factory=dict)
    requested_location_hint: Optional[str] = None
    resolved_label: Optional[str] = None
    forecast_label: Optional[str] = None
    geolocation: Optional[Geolocation] = None
    last_error: Optional[str] = None
    is_fetching: bool = False
    draft_input: Optional[str] = None
    generation: int = 0

    def __post_init__(self):
        if (self.draft_input is not None) != (self.phase is Phase.TYPING_LOCATION):
            raise InvalidStateError(
                f"draft_input must be set only while typing (phase={self.phase.value})"
            )
        if (self.last_error is not None) != (self.phase is Phase.ERROR):
            raise InvalidStateError(
                f"last_error must be set only in the error phase (phase={self.phase.value})"
            )
        if self.is_fetching != (self.phase is Phase.FETCHING):
            raise InvalidStateError(
                f"is_fetching must be true only while fetching (phase={self.phase.value})"
            )
        if self.phase is Phase.DISPLAYING and not self.forecast:
            raise InvalidStateError("displaying phase requires a forecast")
        if self.phase is Phase.IDLE and self.forecast:
            raise InvalidStateError("idle phase requires an empty forecast")

    def evolve(self, **changes) -> "ApplicationState":
        return replace(self, **changes)


def initial_state(location_hint: Optional[str] = None) -> ApplicationState:
    """
    Build the startup state.

    :param location_hint: Configured location, equivalent to a typed-in one.
    :return: ApplicationState in the idle phase.
    """
    hint = location_hint.strip() if location_hint else None
    return ApplicationState(requested_location_hint=hint or None)
