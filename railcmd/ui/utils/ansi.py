#!/usr/bin/env python3
# railcmd/ui/utils/ansi.py
from __future__ import annotations

import os
import re
import sys
from typing import Optional

# SGR codes for headers and log levels.
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ESCAPE_SEQUENCE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# Terminals on Windows that understand VT sequences without extra setup
_WINDOWS_VT_MARKERS = ("WT_SESSION", "ANSICON", "TERM_PROGRAM")

# None: decide per stream. True/False: forced by set_color_enabled()
_forced: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Drop escape sequences, e.g. before writing to a log file."""
    return ESCAPE_SEQUENCE.sub("", text)


def enable_windows_vt() -> bool:
    """True when the console renders ANSI: always off Windows, marker-based on it."""
    if os.name != "nt":
        return True
    return any(os.environ.get(marker) for marker in _WINDOWS_VT_MARKERS) or os.environ.get(
        "TERM", "").startswith(("xterm", "vt100"))


def set_color_enabled(enabled: Optional[bool]) -> None:
    """Force colour on or off; None goes back to detection."""
    global _forced
    _forced = enabled


def color_enabled(stream=None) -> bool:
    """Colour is used on terminals only, and never when NO_COLOR is set."""
    if _forced is not None:
        return _forced
    if os.environ.get("NO_COLOR"):
        return False
    stream = sys.stdout if stream is None else stream
    try:
        interactive = stream.isatty()
    except (AttributeError, ValueError):
        return False
    return interactive and enable_windows_vt()


def colorize(text: str, *styles: str) -> str:
    """Wrap `text` in the named ANSI styles when colour is enabled."""
    codes = "".join(ANSI.get(style, "") for style in styles)
    if not codes or not color_enabled():
        return text
    return f"{codes}{text}{ANSI['reset']}"
