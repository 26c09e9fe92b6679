#!/usr/bin/env python3
# railcmd/interface/suggestions.py
from __future__ import annotations

"""
Command listings and "did you mean" suggestions.

The grouped listing puts the reserved `rails` group first with its
prefix stripped, then every other group alphabetically. Suggestions rank
the flattened listing by edit distance, so they honour hidden namespaces
exactly like the listing does. Resolution does not: a hidden namespace
still resolves when typed in full.
"""

from typing import Optional

from railcmd.commands import CommandRegistry
from railcmd.helpers import levenshtein_distance
from railcmd.interface.loader import NAMESPACE_DELIMITER, Loader
from railcmd.interface.resolver import RESERVED_NAMESPACE
from railcmd.ui import colorize, print_line

# Reserved entries that never show up in the listing.
UNLISTED_RESERVED_COMMANDS: tuple[str, ...] = ("app", "plugin", "help")

DEFAULT_SUGGESTION_COUNT = 3


class SuggestionEngine:
    """Reads the registry to list commands and rank near misses."""

    def __init__(self, registry: CommandRegistry, loader: Optional[Loader] = None) -> None:
        self.registry = registry
        # With a loader, listings first discover every command on the search path
        self.loader = loader

    def visible_namespaces(self) -> list[str]:
        """Registered namespaces minus hidden ones, sorted."""
        if self.loader is not None:
            self.loader.lookup_all()
        hidden = self.registry.hidden_namespaces
        return sorted(n for n in self.registry.public_namespaces() if n not in hidden)

    def grouped_listing(self) -> dict[str, list[str]]:
        """Ordered mapping of group name -> namespaces, reserved group first."""
        groups: dict[str, list[str]] = {}
        for namespace in self.visible_namespaces():
            group = namespace.split(NAMESPACE_DELIMITER, 1)[0]
            groups.setdefault(group, []).append(namespace)

        reserved_prefix = f"{RESERVED_NAMESPACE}{NAMESPACE_DELIMITER}"
        reserved = [
            n[len(reserved_prefix):] if n.startswith(reserved_prefix) else n
            for n in groups.pop(RESERVED_NAMESPACE, [])
        ]
        hidden_namespaces = self.registry.hidden_namespaces
        # Hiding "console" also hides the stripped rails:console
        reserved = [
            n for n in reserved
            if n not in UNLISTED_RESERVED_COMMANDS and n not in hidden_namespaces]

        # A hidden namespace that names a group hides the whole group
        for hidden in hidden_namespaces:
            groups.pop(hidden, None)

        listing = {RESERVED_NAMESPACE: reserved}
        for group in sorted(groups):
            listing[group] = groups[group]
        return listing

    def suggest(self, query: str, count: int = DEFAULT_SUGGESTION_COUNT) -> list[str]:
        """The `count` listed namespaces closest to `query`; ties keep listing order."""
        options = [n for names in self.grouped_listing().values() for n in names]
        ranked = sorted(options, key=lambda option: levenshtein_distance(query, option))
        return ranked[:count]

    def print_commands(self) -> None:
        """Print each non-empty group as a titled, indented block."""
        for group, namespaces in self.grouped_listing().items():
            if not namespaces:
                continue
            print_line(colorize(f"{group.capitalize()}:", "bold"))
            for namespace in namespaces:
                print_line(f"  {namespace}")
            print_line()
