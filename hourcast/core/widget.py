"""
widget.py: Host runtime tying the state machine to the request dispatcher.

``WeatherWidget`` owns the single ApplicationState. Events are handled one at
a time on the caller's thread; outbound requests go to the dispatcher and
their completions come back through ``pump`` or ``run_until_settled``.
"""

import time
from typing import Optional

from hourcast import config as cfg
from hourcast.api.dispatcher import RequestDispatcher
from hourcast.core.orchestrator import Event, reduce
from hourcast.models.state import ApplicationState, Key, KeyEvent, Phase, initial_state
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)


class WeatherWidget:
    def __init__(
        self,
        location_hint: Optional[str] = None,
        dispatcher: Optional[RequestDispatcher] = None,
    ):
        self.state: ApplicationState = initial_state(location_hint)
        self.dispatcher = dispatcher or RequestDispatcher()

    def dispatch(self, event: Event) -> bool:
        """
        Reduce one event and send out the requests it produced.

        :param event: Key press or completion event.
        :return: True when the state changed and should be re-rendered.
        """
        transition = reduce(self.state, event)
        self.state = transition.state
        for request in transition.requests:
            self.dispatcher.submit(request)
        return transition.changed

    def press(self, key: Key, char: Optional[str] = None) -> bool:
        return self.dispatch(KeyEvent(key=key, char=char))

    def type_text(self, text: str) -> None:
        """Replace the draft location with ``text`` and submit it."""
        self.press(Key.NEW_LOCATION)
        for char in text:
            self.press(Key.APPEND_CHAR, char)
        self.press(Key.CONFIRM)

    def pump(self) -> bool:
        """Handle every completion that has already arrived."""
        changed = False
        for completion in self.dispatcher.drain():
            changed = self.dispatch(completion) or changed
        return changed

    def run_until_settled(self, timeout: float = cfg.SETTLE_TIMEOUT_SECONDS) -> ApplicationState:
        """
        Handle completions until the widget stops fetching.

        :param timeout: Upper bound in seconds; the state is returned as-is
            (still fetching) when it elapses.
        :return: The resulting state.
        """
        deadline = time.monotonic() + timeout
        while self.state.phase is Phase.FETCHING:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning(f"Fetch still running after {timeout}s")
                break
            completion = self.dispatcher.next_completion(timeout=remaining)
            if completion is not None:
                self.dispatch(completion)
        return self.state

    def close(self) -> None:
        self.dispatcher.shutdown()
