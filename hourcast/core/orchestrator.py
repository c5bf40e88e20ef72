"""
orchestrator.py: The widget's state machine.

``reduce(state, event)`` is the single transition function. It never performs
I/O: it returns the next ApplicationState together with the outbound requests
the host runtime should dispatch. Events are routed by phase for key presses
and by correlation tag for command/HTTP completions.

Resolution chain:
    [timezone command] -> geocode request -> weather request -> forecast

Every fresh resolution bumps ``generation`` and stamps it on its requests.
Completions from an older generation, or arriving when no fetch is running,
are dropped.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from hourcast.core import location
from hourcast.core.errors import HourcastError, InvalidTransition, NoResultsFound
from hourcast.core.parsers import parse_geocode, parse_weather_data
from hourcast.models.state import (
    ApplicationState,
    CommandRequest,
    CommandResult,
    HttpRequest,
    HttpResult,
    Key,
    KeyEvent,
    Phase,
    RequestTag,
)
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)

Event = Union[KeyEvent, CommandResult, HttpResult]
Request = Union[CommandRequest, HttpRequest]

TRANSITIONS = {
    Phase.IDLE: {Phase.FETCHING, Phase.TYPING_LOCATION},
    Phase.DISPLAYING: {Phase.FETCHING, Phase.TYPING_LOCATION},
    Phase.TYPING_LOCATION: {Phase.TYPING_LOCATION, Phase.FETCHING},
    Phase.FETCHING: {
        Phase.FETCHING,
        Phase.DISPLAYING,
        Phase.ERROR,
        Phase.TYPING_LOCATION,
    },
    Phase.ERROR: {Phase.FETCHING, Phase.TYPING_LOCATION},
}


@dataclass(frozen=True)
class Transition:
    """Result of reducing one event."""

    state: ApplicationState
    requests: Tuple[Request, ...] = ()
    changed: bool = True


def _unchanged(state: ApplicationState) -> Transition:
    return Transition(state=state, changed=False)


def _move(state: ApplicationState, phase: Phase, **changes) -> ApplicationState:
    if phase not in TRANSITIONS[state.phase]:
        raise InvalidTransition(f"{state.phase.value} -> {phase.value}")
    logger.debug(f"Transition {state.phase.value} -> {phase.value}")
    return state.evolve(phase=phase, **changes)


def _fail(state: ApplicationState, message: str) -> Transition:
    logger.error(message)
    new_state = _move(
        state, Phase.ERROR, last_error=message, is_fetching=False, draft_input=None
    )
    return Transition(state=new_state)


def _start_fetch(state: ApplicationState, hint: Optional[str]) -> Transition:
    generation = state.generation + 1
    request = location.next_resolution_request(hint, generation)
    new_state = _move(
        state,
        Phase.FETCHING,
        requested_location_hint=hint,
        last_error=None,
        draft_input=None,
        is_fetching=True,
        generation=generation,
    )
    return Transition(state=new_state, requests=(request,))


# ---------- key presses ----------


def _on_key(state: ApplicationState, event: KeyEvent) -> Transition:
    typing = state.phase is Phase.TYPING_LOCATION

    if event.key is Key.CONFIRM:
        if state.phase is Phase.FETCHING:
            logger.debug("Fetch already running, ignoring confirm")
            return _unchanged(state)
        if typing:
            hint = state.draft_input.strip() or None
            return _start_fetch(state, hint)
        return _start_fetch(state, state.requested_location_hint)

    if event.key is Key.NEW_LOCATION:
        # Entering a new location abandons any fetch in flight.
        generation = state.generation + (1 if state.phase is Phase.FETCHING else 0)
        new_state = _move(
            state,
            Phase.TYPING_LOCATION,
            draft_input="",
            last_error=None,
            is_fetching=False,
            generation=generation,
        )
        return Transition(state=new_state)

    if not typing:
        return _unchanged(state)

    if event.key is Key.DELETE_CHAR:
        if not state.draft_input:
            return _unchanged(state)
        return Transition(state=state.evolve(draft_input=state.draft_input[:-1]))

    if event.key is Key.APPEND_CHAR and event.char:
        return Transition(state=state.evolve(draft_input=state.draft_input + event.char))

    return _unchanged(state)


# ---------- completions ----------


def _is_current(state: ApplicationState, context: dict) -> bool:
    if state.phase is not Phase.FETCHING:
        return False
    generation = context.get("generation")
    return generation is None or generation == str(state.generation)


def _on_command(state: ApplicationState, event: CommandResult) -> Transition:
    if RequestTag.from_context(event.context) is not RequestTag.TIMEZONE_DISCOVERY:
        return _unchanged(state)
    if not _is_current(state, event.context):
        logger.debug("Dropping stale timezone result")
        return _unchanged(state)

    if event.stderr:
        detail = event.stderr.decode("utf-8", errors="replace").strip()
        return _fail(state, f"Error fetching timezone: {detail}")
    if event.exit_code != 0:
        return _fail(state, f"Error fetching timezone: exit status {event.exit_code}")

    try:
        hint = location.parse_timezone_output(event.stdout)
    except HourcastError as e:
        return _fail(state, f"Error fetching timezone: {e}")

    logger.info(f"Local timezone: {hint}")
    request = location.build_geocode_request(hint, state.generation)
    new_state = _move(state, Phase.FETCHING, requested_location_hint=hint)
    return Transition(state=new_state, requests=(request,))


def _on_geocode(state: ApplicationState, event: HttpResult) -> Transition:
    try:
        geolocation, label = parse_geocode(event.body)
    except NoResultsFound:
        return _fail(
            state, f"Could not resolve location: {state.requested_location_hint}"
        )
    except HourcastError as e:
        return _fail(state, f"Failed to parse geocode: {e}")

    logger.info(f"Resolved {label} ({geolocation.latitude}, {geolocation.longitude})")
    request = location.build_weather_request(geolocation, state.generation)
    new_state = _move(
        state, Phase.FETCHING, geolocation=geolocation, resolved_label=label
    )
    return Transition(state=new_state, requests=(request,))


def _on_weather(state: ApplicationState, event: HttpResult) -> Transition:
    try:
        forecast = parse_weather_data(event.body)
    except HourcastError as e:
        return _fail(state, f"Failed to parse data: {e}")

    logger.info(f"Forecast updated: {len(forecast)} hours")
    # forecast_label always names the place the forecast belongs to.
    new_state = _move(
        state,
        Phase.DISPLAYING,
        forecast=forecast,
        forecast_label=state.resolved_label,
        is_fetching=False,
    )
    return Transition(state=new_state)


def _on_http(state: ApplicationState, event: HttpResult) -> Transition:
    tag = RequestTag.from_context(event.context)
    if tag not in (RequestTag.GEOCODE, RequestTag.WEATHER):
        return _unchanged(state)
    if not _is_current(state, event.context):
        logger.debug(f"Dropping stale {tag.value} response")
        return _unchanged(state)

    if not 200 <= event.status < 300:
        reason = f"HTTP {event.status}" if event.status else "no response"
        return _fail(state, f"Failed {tag.value} web request ({reason})")

    if tag is RequestTag.GEOCODE:
        return _on_geocode(state, event)
    return _on_weather(state, event)


def reduce(state: ApplicationState, event: Event) -> Transition:
    """
    Apply one event to the state.

    :param state: Current state snapshot.
    :param event: Key press, command completion or HTTP completion.
    :return: Transition holding the next state and requests to dispatch.
    """
    if isinstance(event, KeyEvent):
        return _on_key(state, event)
    if isinstance(event, CommandResult):
        return _on_command(state, event)
    if isinstance(event, HttpResult):
        return _on_http(state, event)
    logger.debug(f"Ignoring unsupported event {type(event).__name__}")
    return _unchanged(state)
