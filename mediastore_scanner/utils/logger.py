"""Logging configuration for the media scanner."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

import coloredlogs

PACKAGE_LOGGER = "mediastore_scanner"

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(asctime)s %(levelname)-8s %(short_name)s: %(message)s'

CONSOLE_LEVEL_STYLES = {
    'debug': {'color': 'white', 'faint': True},
    'info': {'color': 'cyan'},
    'warning': {'color': 'yellow'},
    'error': {'color': 'red', 'bold': True},
    'critical': {'color': 'red', 'bold': True, 'background': 'white'},
}
CONSOLE_FIELD_STYLES = {
    'asctime': {'color': 'green', 'faint': True},
    'levelname': {'bold': True},
    'short_name': {'color': 'blue'},
}


class ShortNameFilter(logging.Filter):
    """Add short_name: the logger name without the package prefix."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = PACKAGE_LOGGER + '.'
        name = record.name
        record.short_name = name[len(prefix):] if name.startswith(prefix) else name
        return True


def parse_level(level: Union[str, int]) -> int:
    """Convert a level name or number to a logging level.

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_file: Optional[Path] = None,
    level: Union[str, int] = "INFO",
    max_size_mb: int = 10,
    backup_count: int = 5,
    console: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the package logger.

    Modules log through children of this logger, so configuring it once
    covers the scanner, the database and the serializer. Calling it again
    replaces the handlers installed by the previous call.

    Args:
        name: Logger name
        log_file: Rotating log file (if None, no file logging)
        level: Level name or number
        max_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of rotated files to keep
        console: Whether to log to the console
        stream: Console stream (stderr if None)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(parse_level(level))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    # Scan results go to stdout, so the console log defaults to stderr
    if console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(coloredlogs.ColoredFormatter(
            fmt=CONSOLE_FORMAT,
            datefmt='%H:%M:%S',
            level_styles=CONSOLE_LEVEL_STYLES,
            field_styles=CONSOLE_FIELD_STYLES
        ))
        console_handler.addFilter(ShortNameFilter())
        logger.addHandler(console_handler)

    return logger
