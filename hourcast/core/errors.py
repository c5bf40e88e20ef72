"""
Error kinds raised by the Hourcast resolution-and-fetch pipeline.

Parsers and the location resolver raise these; the orchestrator catches
``HourcastError`` and folds the message into ``ApplicationState.last_error``.
"""


class HourcastError(Exception):
    """Base class for all widget errors."""


class DecodeError(HourcastError):
    """A response body could not be turned into the expected structure."""


class EncodingError(DecodeError):
    """Bytes are not valid UTF-8 text."""


class MalformedPayload(DecodeError):
    """Text is not valid JSON."""


class MissingField(DecodeError):
    """A required field is absent or has the wrong JSON type."""

    def __init__(self, name: str, index=None):
        self.name = name
        self.index = index
        if index is None:
            message = f"Failed to parse {name}"
        else:
            message = f"Failed to parse {name} at hour {index}"
        super().__init__(message)


class NoResultsFound(DecodeError):
    """The geocode lookup returned zero matches."""

    def __init__(self, message: str = "No matching location found"):
        super().__init__(message)


class RequestFailed(HourcastError):
    """An outbound request completed unsuccessfully."""

    def __init__(self, stage: str, detail: str = ""):
        self.stage = stage
        self.detail = detail
        message = f"{stage} request failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidStateError(HourcastError):
    """An ApplicationState was built that breaks its own invariants."""


class InvalidTransition(HourcastError):
    """The reducer attempted a phase change missing from the transition table."""
