"""
dispatcher.py: Fire-and-forget execution of the widget's outbound requests.

Requests run on a small thread pool. Each one always produces exactly one
completion event on ``completions``: transport failures become an
``HttpResult`` with status 0, and commands that cannot be launched become a
``CommandResult`` with ``exit_code=None`` and the error text on stderr.

Functions:
- run_http_request: Perform an HttpRequest with requests.
- run_command: Perform a CommandRequest with subprocess.

Classes:
- RequestDispatcher: Thread pool + completion queue.
"""

import queue
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Union

import requests

from hourcast import config as cfg
from hourcast.models.state import CommandRequest, CommandResult, HttpRequest, HttpResult
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)

Completion = Union[CommandResult, HttpResult]


def run_http_request(
    request: HttpRequest, timeout: float = cfg.HTTP_TIMEOUT_SECONDS
) -> HttpResult:
    """
    Perform an HTTP request and wrap the outcome as a completion event.

    :param request: Request built by the location resolver.
    :param timeout: Seconds before the call is abandoned.
    :return: HttpResult echoing the request context.
    """
    try:
        resp = requests.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body or None,
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error(f"Request error for {request.context.get('id')}: {e}")
        return HttpResult(
            status=0, headers={}, body=str(e).encode("utf-8"), context=request.context
        )

    if resp.status_code != 200:
        logger.error(f"{request.context.get('id')} request failed: {resp.status_code}")
    return HttpResult(
        status=resp.status_code,
        headers=dict(resp.headers),
        body=resp.content,
        context=request.context,
    )


def run_command(
    request: CommandRequest, timeout: float = cfg.COMMAND_TIMEOUT_SECONDS
) -> CommandResult:
    """
    Run a local command and wrap its outcome as a completion event.

    :param request: Command built by the location resolver.
    :param timeout: Seconds before the command is killed.
    :return: CommandResult echoing the request context.
    """
    try:
        completed = subprocess.run(request.argv, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {request.argv[0]}")
        return CommandResult(
            exit_code=None,
            stdout=b"",
            stderr=f"timed out after {timeout}s".encode("utf-8"),
            context=request.context,
        )
    except OSError as e:
        logger.error(f"Command could not be started: {e}")
        return CommandResult(
            exit_code=None, stdout=b"", stderr=str(e).encode("utf-8"), context=request.context
        )

    return CommandResult(
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
        context=request.context,
    )


class RequestDispatcher:
    """Executes requests in the background and queues their completions."""

    def __init__(
        self,
        max_workers: int = cfg.MAX_WORKERS,
        http_timeout: float = cfg.HTTP_TIMEOUT_SECONDS,
        command_timeout: float = cfg.COMMAND_TIMEOUT_SECONDS,
    ):
        self.completions: "queue.Queue[Completion]" = queue.Queue()
        self.http_timeout = http_timeout
        self.command_timeout = command_timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="hourcast"
        )

    def submit(self, request: Union[CommandRequest, HttpRequest]) -> None:
        """Start a request without waiting for it."""
        if isinstance(request, HttpRequest):
            future = self._executor.submit(run_http_request, request, self.http_timeout)
        elif isinstance(request, CommandRequest):
            future = self._executor.submit(run_command, request, self.command_timeout)
        else:
            raise TypeError(f"Unsupported request type: {type(request).__name__}")
        future.add_done_callback(lambda f: self._complete(f, request))

    def _complete(self, future, request) -> None:
        error = future.exception()
        if error is None:
            self.completions.put(future.result())
            return

        logger.error(f"Request worker crashed: {error}")
        detail = str(error).encode("utf-8")
        if isinstance(request, HttpRequest):
            failure = HttpResult(status=0, headers={}, body=detail, context=request.context)
        else:
            failure = CommandResult(
                exit_code=None, stdout=b"", stderr=detail, context=request.context
            )
        self.completions.put(failure)

    def next_completion(self, timeout: Optional[float] = None) -> Optional[Completion]:
        """
        Return the next completion, waiting up to ``timeout`` seconds.

        :param timeout: None blocks, 0 polls.
        :return: Completion event or None when none arrived in time.
        """
        try:
            if timeout == 0:
                return self.completions.get_nowait()
            return self.completions.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> List[Completion]:
        """Return every completion already queued."""
        drained = []
        while True:
            completion = self.next_completion(timeout=0)
            if completion is None:
                return drained
            drained.append(completion)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
