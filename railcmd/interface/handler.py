#!/usr/bin/env python3
# railcmd/interface/handler.py
from __future__ import annotations

"""
Command dispatch.

`Dispatcher.invoke` resolves a namespace, decides once whether the
invocation is a help request, and hands a copy of the arguments to the
command. Unknown namespaces print a "Could not find" message with ranked
suggestions instead of raising. Errors raised by the command itself are
not caught here.
"""

import sys
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from railcmd.commands import CommandDescriptor, CommandResult
from railcmd.interface.parser import HELP_MAPPINGS
from railcmd.interface.resolver import Resolver
from railcmd.interface.suggestions import DEFAULT_SUGGESTION_COUNT, SuggestionEngine
from railcmd.ui import print_line

HELP_FLAG = "--help"


class HelpState(Enum):
    """Decided from the first argument, once per invocation."""

    NORMAL = "normal"
    HELP_REQUESTED = "help_requested"

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "HelpState":
        if args and args[0] in HELP_MAPPINGS:
            return cls.HELP_REQUESTED
        return cls.NORMAL


def to_sentence(words: Sequence[str], *, last_word_connector: str = " or ") -> str:
    """['a'] -> 'a'; ['a', 'b'] -> 'a or b'; ['a', 'b', 'c'] -> 'a, b or c'."""
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return ", ".join(words[:-1]) + last_word_connector + words[-1]


def format_not_found(
    command_type: str, namespace: str, suggestions: Sequence[str], program_name: str
) -> str:
    """Render the unknown-namespace message."""
    message = f"Could not find {command_type} '{namespace}'."
    if suggestions:
        quoted = [f"'{s}'" for s in suggestions]
        message += f" Maybe you meant {to_sentence(quoted)}"
    message += f"\nRun `{program_name} --help` for more options."
    return message


def _normalize(result: Any) -> CommandResult:
    if isinstance(result, CommandResult):
        return result
    return CommandResult(ok=True, message="" if result is None else str(result), data=result)


class Dispatcher:
    """Entry point consumed by the CLI shell."""

    def __init__(
        self,
        resolver: Resolver,
        suggestions: SuggestionEngine,
        *,
        program_name: str = "rails",
        suggestion_count: int = DEFAULT_SUGGESTION_COUNT,
        output: Callable[[str], None] = print_line,
    ) -> None:
        self.resolver = resolver
        self.suggestions = suggestions
        self.program_name = program_name
        self.suggestion_count = suggestion_count
        self._output = output

    @property
    def command_type(self) -> str:
        return self.resolver.loader.command_type

    def invoke(
        self,
        namespace: str,
        args: Optional[Sequence[str]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> CommandResult:
        """
        Resolve `namespace` and run it with `args` (default: process arguments).

        Returns the normalized command result, or a failed result carrying
        the suggestions when nothing matched.
        """
        args = list(sys.argv[1:] if args is None else args)
        config = {} if config is None else config

        descriptor = self.resolver.resolve(str(namespace))
        if descriptor is None:
            suggestions = self.suggestions.suggest(str(namespace), self.suggestion_count)
            message = format_not_found(
                self.command_type, str(namespace), suggestions, self.program_name)
            self._output(message)
            return CommandResult(ok=False, message=message, data=suggestions)

        if not args and descriptor.required_arguments():
            args.append(HELP_FLAG)

        return _normalize(self.perform(descriptor, args, config))

    def perform(
        self,
        descriptor: CommandDescriptor,
        args: Sequence[str],
        config: Mapping[str, Any],
    ) -> Any:
        """Dispatch to the command; a help token leaves the runnable unset."""
        state = HelpState.from_args(args)
        runnable = descriptor.command_name if state is HelpState.NORMAL else None
        return descriptor.perform(runnable, list(args), config)
