"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

Our own modules log at LOG_LEVEL; chatty libraries (HTTP clients, the
Gemini SDK) are held at LOG_LIBRARY_LEVEL. uvicorn's access log keeps its
own handler and is not duplicated into ours.
"""

import logging
import sys

from config import LOG_LEVEL, LOG_LIBRARY_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "startup_launch"
_LIBRARY_LOGGERS = ("httpx", "httpcore", "urllib3", "google", "grpc")
_configured = False


def _level(name: str, default: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def configure_logging(level: str = LOG_LEVEL, library_level: str = LOG_LIBRARY_LEVEL) -> None:
    """
    Apply the logging setup. Calling it again only changes levels;
    the stdout handler is installed once.

    Args:
        level: Level name for the root logger, e.g. "DEBUG".
        library_level: Minimum level name for third-party library loggers.
    """
    global _configured
    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(_level(level, logging.INFO))

    floor = _level(library_level, logging.WARNING)
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, floor))
    logging.getLogger("uvicorn.access").propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
