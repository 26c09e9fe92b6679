#!/usr/bin/env python3
# railcmd/commands/command_types.py
from __future__ import annotations

"""
Command data structures.

This module defines:
- CommandType: the category of a command (plain command vs. generator).
- LookupPathSpec: where modules of a given command type are searched.
- CommandDescriptor: a registered command with its namespace and target class.
- CommandResult: a normalized result container for dispatch outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from railcmd.commands.base import Base


class CommandType(str, Enum):
    """Governs the file-name suffix and which lookup paths apply."""

    COMMAND = "command"
    GENERATOR = "generator"

    @property
    def suffix(self) -> str:
        """Module name suffix, e.g. 'migrate_command'."""
        return self.value

    @property
    def package(self) -> str:
        """Package segment commands of this type live under."""
        return "command" if self is CommandType.COMMAND else "generators"

    @property
    def class_suffix(self) -> str:
        """Class name suffix stripped when deriving a command name."""
        return self.value.capitalize()


@dataclass(frozen=True)
class LookupPathSpec:
    """
    Ordered lookup bases for one command type.

    Bases are dotted package prefixes ("railcmd.command"); the loader
    joins them with slash-separated candidate paths.
    """

    command_type: CommandType
    bases: tuple[str, ...]

    @property
    def suffix(self) -> str:
        return self.command_type.suffix

    @property
    def pattern(self) -> str:
        """Glob used for full discovery, e.g. '**/*_command.py'."""
        return f"**/*_{self.suffix}.py"

    @classmethod
    def for_type(cls, command_type: CommandType, bases: Sequence[str] | None = None) -> "LookupPathSpec":
        return cls(command_type, tuple(bases) if bases else DEFAULT_LOOKUP_PATHS[command_type])


DEFAULT_LOOKUP_PATHS: dict[CommandType, tuple[str, ...]] = {
    CommandType.COMMAND: ("railcmd.command", "command"),
    CommandType.GENERATOR: ("railcmd.generators", "generators"),
}


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command dispatch.

    Attributes:
        ok: True if the command was found and completed.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (return value, suggestions).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message if self.message else ("ok" if self.ok else "error")


@dataclass(slots=True)
class CommandDescriptor:
    """
    A registered command.

    Important fields:
        namespace: Canonical colon-delimited identifier, computed once.
        target: Command class exposing dispatch/arguments/command_name.
        command_type: Category governing lookup paths and file suffix.
        hidden: Excluded from listings and suggestions when True.
        module: Python module path where the command is defined.
        description: Short, user-facing description.
    """

    namespace: str
    target: type["Base"]
    command_type: CommandType = CommandType.COMMAND
    hidden: bool = False
    module: str = field(default="", repr=False)
    description: str = ""

    @property
    def command_name(self) -> str:
        return self.target.command_name()

    def required_arguments(self) -> list[str]:
        """Names of required positional arguments declared by the command."""
        from railcmd.interface.parser import POSITIONAL

        return [
            arg.name for arg in self.target.arguments()
            if arg.kind == POSITIONAL and arg.required]

    def perform(self, runnable: str | None, args: list[str], config: Mapping[str, Any]) -> Any:
        """Hand off to the command's dispatch entry point."""
        return self.target.dispatch(runnable, args, config)
