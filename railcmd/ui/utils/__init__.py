#!/usr/bin/env python3
# railcmd/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    strip_ansi,
    enable_windows_vt,
    colorize,
    color_enabled,
    set_color_enabled,
)
from .console import PRINT_MUTEX, print_line

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "color_enabled",
    "set_color_enabled",
    "PRINT_MUTEX",
    "print_line",
]
