#!/usr/bin/env python3
# railcmd/interface/resolver.py
from __future__ import annotations

"""
Namespace resolution.

Commands are found the way Thor finds them, with one rule on top:
the bare name is tried before the reserved `rails:` alias, so

    resolve("model")  ->  "model" if registered, else "rails:model"

A plugin command therefore shadows a built-in of the same name while
the built-in stays reachable when nothing shadows it.
"""

from typing import Optional

from railcmd.commands import CommandDescriptor, CommandRegistry
from railcmd.interface.loader import NAMESPACE_DELIMITER, Loader

RESERVED_NAMESPACE = "rails"


def candidate_namespaces(raw_identifier: str) -> list[str]:
    """
    Ordered namespaces tried for `raw_identifier`.

    "model"          -> ["model", "rails:model"]
    "db:migrate"     -> ["migrate", "rails:migrate"]
    "rails:console"  -> ["console", "rails:console"]

    Only the last part names the command; any prefix is dropped.
    """
    name = raw_identifier.split(NAMESPACE_DELIMITER)[-1]
    return [name, f"{RESERVED_NAMESPACE}{NAMESPACE_DELIMITER}{name}"]


class Resolver:
    """Finds the command registered for a user-typed namespace."""

    def __init__(self, registry: CommandRegistry, loader: Loader) -> None:
        self.registry = registry
        self.loader = loader

    def resolve(self, raw_identifier: str) -> Optional[CommandDescriptor]:
        """
        Load candidates on demand, then pick the first candidate present in
        the registry. Returns None when nothing matches.
        """
        candidates = candidate_namespaces(raw_identifier)
        self.loader.lookup(candidates)

        by_namespace = self.registry.index_by_namespace()
        for candidate in candidates:
            if candidate in by_namespace:
                return by_namespace[candidate]
        return None
