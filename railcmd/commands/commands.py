#!/usr/bin/env python3
# railcmd/commands/commands.py
from __future__ import annotations

"""
Command registry.

This module provides:
- CommandRegistry: ordered, in-memory registry of command descriptors.
- REGISTRY: process-wide default registry.
- register_command / hide_namespaces: explicit APIs against REGISTRY.

Namespaces are not unique. Registering a namespace twice keeps both
entries; exact lookups return the one registered last.
"""

import threading
from typing import Dict, Iterable, Iterator, Optional

from railcmd.commands.command_types import CommandDescriptor


class CommandRegistry:
    """Holds all command descriptors and provides lookup utilities."""

    def __init__(self, hidden: Iterable[str] = ()) -> None:
        # Insertion-ordered; duplicates allowed
        self._entries: list[CommandDescriptor] = []
        self._hidden_namespaces: set[str] = set(hidden)
        # Modules whose commands are already in _entries
        self._loaded_modules: set[str] = set()
        # Guards both the append and the iteration
        self._lock = threading.RLock()

    # ---------------- Registration ----------------

    def register(self, descriptor: CommandDescriptor) -> None:
        """Append a descriptor. A later namespace collision shadows the earlier one."""
        with self._lock:
            self._entries.append(descriptor)
            if descriptor.hidden:
                self._hidden_namespaces.add(descriptor.namespace)

    def hide(self, *namespaces: str) -> None:
        """Exclude namespaces from listings and suggestions (exact lookup still works)."""
        with self._lock:
            self._hidden_namespaces.update(namespaces)

    def mark_module_loaded(self, module_name: str) -> bool:
        """Record that `module_name` was registered; False if it already was."""
        with self._lock:
            if module_name in self._loaded_modules:
                return False
            self._loaded_modules.add(module_name)
            return True

    def is_module_loaded(self, module_name: str) -> bool:
        with self._lock:
            return module_name in self._loaded_modules

    def reset(self) -> None:
        """Forget every descriptor, hidden namespace and loaded module."""
        with self._lock:
            self._entries.clear()
            self._hidden_namespaces.clear()
            self._loaded_modules.clear()

    # ---------------- Lookup ----------------

    def index_by_namespace(self) -> Dict[str, CommandDescriptor]:
        """Namespace -> descriptor map; the last registration for a namespace wins."""
        with self._lock:
            return {entry.namespace: entry for entry in self._entries}

    def find_exact(self, namespace: str) -> Optional[CommandDescriptor]:
        """Return the descriptor registered last under `namespace`, or None."""
        with self._lock:
            for entry in reversed(self._entries):
                if entry.namespace == namespace:
                    return entry
        return None

    def public_namespaces(self) -> list[str]:
        """Every registered namespace in first-seen order (hiding is not applied)."""
        with self._lock:
            return list(dict.fromkeys(entry.namespace for entry in self._entries))

    def all(self) -> list[CommandDescriptor]:
        """Snapshot of all entries in registration order."""
        with self._lock:
            return list(self._entries)

    # ---------------- Hidden namespaces ----------------

    @property
    def hidden_namespaces(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._hidden_namespaces)

    def is_hidden(self, namespace: str) -> bool:
        with self._lock:
            return namespace in self._hidden_namespaces

    # ---------------- Container protocol ----------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self.all())

    def __contains__(self, namespace: object) -> bool:
        return isinstance(namespace, str) and self.find_exact(namespace) is not None


# Global registry used across the app
REGISTRY = CommandRegistry()


def register_command(descriptor: CommandDescriptor) -> None:
    """Explicit API for modules that construct descriptors directly."""
    REGISTRY.register(descriptor)


def hide_namespaces(*namespaces: str) -> None:
    """Hide namespaces in the global registry."""
    REGISTRY.hide(*namespaces)
