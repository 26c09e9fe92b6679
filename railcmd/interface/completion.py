#!/usr/bin/env python3
# railcmd/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities for the interactive shell.

Token-aware suggestions for:
- First token: built-in verbs + every listed namespace.
- 'help <partial>': namespaces.
- Subsequent tokens: `--option=` names declared by the resolved command.
"""

import shlex
from typing import Optional

from railcmd.interface.parser import OPTION, POSITIONAL
from railcmd.interface.resolver import Resolver
from railcmd.interface.suggestions import SuggestionEngine

# Built-in verbs always available in the shell
BUILT_IN_COMMANDS: tuple[str, ...] = ("help", "exit", "quit")


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Behavior:
      - Use shlex.split for shell-like parsing (POSIX).
      - If trailing whitespace exists, append an empty token to signal a new one.
      - On malformed quotes, fall back to whitespace splitting.
    """
    if not raw_input:
        return [], ""

    try:
        parts = shlex.split(raw_input, posix=True)
    except ValueError:
        parts = raw_input.split()
    if raw_input[-1].isspace():
        parts.append("")
    current_prefix = parts[-1] if parts else ""
    return parts, current_prefix


class Completer:
    """Completion source backed by the listing and the resolver."""

    def __init__(self, suggestions: SuggestionEngine, resolver: Optional[Resolver] = None) -> None:
        self.suggestions = suggestions
        self.resolver = resolver
        self._namespaces: Optional[list[str]] = None

    def namespaces(self) -> list[str]:
        # Discovery walks sys.path; do it once per shell session
        if self._namespaces is None:
            self._namespaces = [
                n for names in self.suggestions.grouped_listing().values() for n in names]
        return self._namespaces

    def complete(self, text_before_cursor: str) -> list[str]:
        """Suggestions for the token under the cursor."""
        parts, current_prefix = _split_current_token(text_before_cursor.lstrip())

        if len(parts) <= 1:
            universe = {*BUILT_IN_COMMANDS, *self.namespaces()}
            return sorted(w for w in universe if w.startswith(current_prefix))

        if parts[0] == "help":
            return sorted(w for w in self.namespaces() if w.startswith(current_prefix))

        if self.resolver is None or not current_prefix.startswith("-"):
            return []

        descriptor = self.resolver.resolve(parts[0])
        if descriptor is None:
            return []

        options = []
        for argument in descriptor.target.arguments():
            if argument.kind not in (OPTION, POSITIONAL):
                continue
            option = f"--{argument.name.replace('_', '-')}"
            options.append(option if argument.is_flag else f"{option}=")
        return sorted(o for o in options if o.startswith(current_prefix))
