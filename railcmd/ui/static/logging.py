#!/usr/bin/env python3
# railcmd/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from railcmd.ui.utils import ANSI, PRINT_MUTEX, color_enabled, strip_ansi

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUPS = 3


class ColorizingStreamHandler(logging.StreamHandler):
    """Stream handler painting each line by level; plain text when colour is off."""

    LEVEL_STYLES = {
        logging.DEBUG: "bright_black",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "magenta",
    }

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = strip_ansi(self.format(record))
            style = self.LEVEL_STYLES.get(record.levelno)
            if style and color_enabled(self.stream):
                line = f"{ANSI[style]}{line}{ANSI['reset']}"
            # Same lock as print_line
            with PRINT_MUTEX:
                self.stream.write(line + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter for files: escape sequences removed."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _console_handler(level: int) -> ColorizingStreamHandler:
    handler = ColorizingStreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(level)
    return handler


def _file_handler(logfile: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
    handler.setFormatter(PlainFormatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    handler.setLevel(logging.DEBUG)
    return handler


def init_logger(
    name: str = "railcmd",
    level: int | str = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the `name` logger; safe to call more than once.

    One coloured console handler on stderr at `level`, plus a rotating
    UTF-8 file handler when `logfile` is given.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    consoles = [h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)]
    if consoles:
        for handler in consoles:
            handler.setLevel(level)
    else:
        logger.addHandler(_console_handler(level))

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        logger.addHandler(_file_handler(logfile))

    return logger
