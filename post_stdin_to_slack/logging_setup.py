"""Level-filtered logging to standard output and an optional log file."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from post_stdin_to_slack.config import Config

LOGGER_NAME = "post_stdin_to_slack"

TRACE = 5
FATAL = logging.CRITICAL

# Ordered from least to most severe
LEVELS: Dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": FATAL,
}
LEVEL_TAGS: Dict[int, str] = {number: name for name, number in LEVELS.items()}

# Above every known level, so nothing gets through
SUPPRESS_ALL = FATAL + 1

# Records logged with this extra pass every level filter
UNFILTERED = {"unfiltered": True}

LOG_FORMAT = "%(asctime)s [%(level_tag)s] %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class LevelTagFormatter(logging.Formatter):
    """Formatter that tags lines with TRACE/DEBUG/INFO/WARN/ERROR/FATAL."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_tag = LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


class MinLevelFilter(logging.Filter):
    """Drop records below a minimum level, except those marked unfiltered."""

    def __init__(self, min_level: int):
        super().__init__()
        self.min_level = min_level

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "unfiltered", False):
            return True
        return record.levelno >= self.min_level


def resolve_level(level_name: str) -> int:
    """Map a configured level name to a logging level.

    Unknown names (including an empty one) suppress all output.
    """
    return LEVELS.get(level_name, SUPPRESS_ALL)


def _add_handler(
    logger: logging.Logger, handler: logging.Handler, min_level: int
) -> None:
    handler.setFormatter(LevelTagFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(MinLevelFilter(min_level))
    logger.addHandler(handler)


def build_logger(
    config: Config,
    log_path: Union[str, Path],
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Build the run's logger.

    The configured level is applied by the handlers, so records logged with
    ``extra=UNFILTERED`` (fatal diagnostics) are written at any level.

    Args:
        config: Loaded configuration (log_enabled and log_level are used)
        log_path: Log file to append to when logging to file is enabled
        stream: Console stream, standard output when omitted

    Returns:
        A non-propagating logger writing to the console and, optionally,
        the log file

    Raises:
        OSError: If the log file cannot be opened
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(TRACE)
    logger.propagate = False

    # Remove any handlers left over from a previous run
    close_logger(logger)

    min_level = resolve_level(config.log_level)

    if config.log_enabled:
        file_handler = logging.FileHandler(
            log_path, mode="a", encoding="utf-8", errors="replace"
        )
        _add_handler(logger, file_handler, min_level)

    _add_handler(
        logger,
        logging.StreamHandler(stream if stream is not None else sys.stdout),
        min_level,
    )

    return logger


def build_bootstrap_logger(stream: Optional[TextIO] = None) -> logging.Logger:
    """Build the logger used before the config is loaded.

    It writes INFO and above to standard error (or ``stream``) in the same
    line format as the run's logger.
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.bootstrap")
    logger.setLevel(TRACE)
    logger.propagate = False
    close_logger(logger)
    _add_handler(
        logger,
        logging.StreamHandler(stream if stream is not None else sys.stderr),
        logging.INFO,
    )
    return logger


def log_fatal(logger: logging.Logger, message: Any) -> None:
    """Log a fatal diagnostic that is written whatever the configured level."""
    logger.log(FATAL, message, extra=UNFILTERED)


def close_logger(logger: logging.Logger) -> None:
    """Flush, close and detach all handlers of the logger."""
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
