#!/usr/bin/env python3
# railcmd/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    strip_ansi,
    enable_windows_vt,
    colorize,
    color_enabled,
    set_color_enabled,
    PRINT_MUTEX,
    print_line,
)
from .static import (
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "color_enabled",
    "set_color_enabled",
    "PRINT_MUTEX",
    "print_line",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
