"""
log_util.py: Shared logger factory for the Hourcast widget.

Every module obtains its logger with ``logger = app_logger(__name__)``. Console
output is always attached; a file handler is added when ``log_file`` is given
(the CLI uses this for ``--log-file``).
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL = os.environ.get("HOURCAST_LOG_LEVEL", "INFO").upper()


def app_logger(
    name: str, log_file: Optional[str] = None, level: Optional[str] = None
) -> logging.Logger:
    """
    Create or fetch a configured logger.

    Handlers are attached once per logger name so repeated calls (Streamlit
    reruns re-import modules) do not duplicate output.

    :param name: Logger name, usually ``__name__``.
    :param log_file: Optional path of a file to log to in addition to console.
    :param level: Optional level name, defaults to ``HOURCAST_LOG_LEVEL`` or INFO.
    :return: logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or DEFAULT_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        log_path = os.path.abspath(log_file)
        has_file = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not has_file:
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def attach_log_file(log_file: str, prefix: str = "hourcast") -> None:
    """
    Add a file handler to every already-created logger under ``prefix``.

    :param log_file: Path of the log file.
    :param prefix: Logger name prefix to match.
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name == prefix or name.startswith(f"{prefix}."):
            app_logger(name, log_file=log_file)
