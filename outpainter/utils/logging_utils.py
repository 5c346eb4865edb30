"""
Logging utilities for Outpainter

The CLI prints results on stdout, so log records always go to stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Colors the level name by severity"""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        # Other handlers see the same record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def parse_log_level(name: Union[str, int]) -> int:
    """Translate a level name from config (e.g. 'debug') to a logging level"""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(
            f"Invalid log level: {name!r}. "
            "Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return level


def setup_logger(
    name: str,
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure a logger for a CLI run, replacing any handlers from a
    previous call.

    Args:
        name: Logger name
        level: Level number or name ("info", "DEBUG", ...)
        log_file: Also write uncolored records here

    Returns:
        Configured logger
    """
    level = parse_log_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, DATE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger
