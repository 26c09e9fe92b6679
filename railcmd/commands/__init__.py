#!/usr/bin/env python3
# railcmd/commands/__init__.py
from __future__ import annotations

"""
Package for command definitions and registration.

Provides:
- Data structures (`CommandDescriptor`, `CommandType`, `LookupPathSpec`, `CommandResult`).
- In-memory registry (`CommandRegistry`, `REGISTRY`, `register_command`, `hide_namespaces`).
- Command base classes and the `command` decorator (`Base`, `Generator`, `command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
- base.py
"""


# Re-export from submodules
from .command_types import (
    CommandDescriptor,
    CommandResult,
    CommandType,
    DEFAULT_LOOKUP_PATHS,
    LookupPathSpec,
)
from .commands import CommandRegistry, REGISTRY, register_command, hide_namespaces
from .base import Base, CommandError, Generator, command

__all__ = [
    "CommandDescriptor",
    "CommandResult",
    "CommandType",
    "DEFAULT_LOOKUP_PATHS",
    "LookupPathSpec",
    "CommandRegistry",
    "REGISTRY",
    "register_command",
    "hide_namespaces",
    "Base",
    "CommandError",
    "Generator",
    "command",
]
