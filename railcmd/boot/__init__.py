#!/usr/bin/env python3
# railcmd/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: configure logging/sys.path and build an Engine.
- build_engine: assemble registry, loader, resolver, suggestions and dispatcher.
- Engine: dataclass bundling those parts with an `invoke` shortcut.
- current_engine: the engine running the current command.
- default_engine / reset_default_engines: process-wide engines per command type.
"""


from .boot import (
    Engine,
    boot_sequence,
    build_engine,
    current_engine,
    default_engine,
    reset_default_engines,
)

__all__ = [
    "Engine",
    "boot_sequence",
    "build_engine",
    "current_engine",
    "default_engine",
    "reset_default_engines",
]
