#!/usr/bin/env python3
# railcmd/interface/loader.py
from __future__ import annotations

"""
Convention-based command loader.

Features:
- Maps namespaces to candidate module paths ("rails:model" ->
  "rails/model/model", "rails/model").
- Imports `<base>/<path>_<type>` for each lookup base, first success wins.
- A missing module is a silent miss; any other import failure is logged
  as a warning and the search goes on.
- Registers every command a module defines (Base subclasses, @command
  functions, COMMAND/COMMANDS exports) once per registry.
- Full discovery over sys.path for listings.
"""

import importlib
import logging
import sys
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Iterable, Optional, Sequence

from railcmd.commands import (
    Base,
    CommandDescriptor,
    CommandRegistry,
    LookupPathSpec,
)

NAMESPACE_DELIMITER = ":"

logger = logging.getLogger("railcmd.loader")


class LoadOutcome(str, Enum):
    """Result of one load attempt."""

    LOADED = "loaded"
    ALREADY_LOADED = "already_loaded"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    @property
    def found(self) -> bool:
        return self in (LoadOutcome.LOADED, LoadOutcome.ALREADY_LOADED)


def namespaces_to_paths(namespaces: Iterable[str]) -> list[str]:
    """
    Convert namespaces to slash paths, adding an extra lookup per namespace.

    "rails:model" is searched as both "rails/model/model" and "rails/model".
    """
    paths: list[str] = []
    for namespace in namespaces:
        pieces = namespace.split(NAMESPACE_DELIMITER)
        paths.append("/".join([*pieces, pieces[-1]]))
        paths.append("/".join(pieces))
    return list(dict.fromkeys(paths))


def _module_name(path: str) -> str:
    return ".".join(part for part in path.split("/") if part)


def _is_missing_target(exc: ModuleNotFoundError, module_name: str) -> bool:
    """True when the missing module is `module_name` itself or one of its parent packages."""
    missing = exc.name or ""
    return missing == module_name or module_name.startswith(missing + ".")


def _commands_in_module(module: ModuleType) -> list[CommandDescriptor]:
    """Collect descriptors for every command defined by `module`, in definition order."""
    descriptors: list[CommandDescriptor] = []
    seen: set[type] = set()

    def _add_class(klass: object) -> None:
        if not (isinstance(klass, type) and issubclass(klass, Base)):
            return
        if klass in seen or klass.abstract or klass.__module__ != module.__name__:
            return
        seen.add(klass)
        descriptors.append(klass.descriptor())

    for value in list(vars(module).values()):
        _add_class(value)
        _add_class(getattr(value, "command_class", None))

    exported = getattr(module, "COMMAND", None)
    if isinstance(exported, CommandDescriptor):
        descriptors.append(exported)
    exported_many = getattr(module, "COMMANDS", None)
    if isinstance(exported_many, Iterable) and not isinstance(exported_many, (str, bytes)):
        descriptors.extend(item for item in exported_many if isinstance(item, CommandDescriptor))

    return descriptors


class Loader:
    """Loads command modules on demand into one registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        spec: LookupPathSpec,
        *,
        search_path: Optional[Sequence[str]] = None,
    ) -> None:
        self.registry = registry
        self.spec = spec
        # None -> live sys.path
        self._search_path = search_path

    @property
    def command_type(self) -> str:
        return self.spec.command_type.value

    def candidate_paths(self, namespaces: Iterable[str]) -> list[str]:
        """Every `{base}/{path}_{type}` target for `namespaces`, in attempt order."""
        return [
            f"{base.replace('.', '/')}/{path}_{self.spec.suffix}"
            for path in namespaces_to_paths(namespaces)
            for base in self.spec.bases
        ]

    def register_module(self, module: ModuleType) -> int:
        """Register the commands `module` defines; once per registry until it is reset."""
        if not self.registry.mark_module_loaded(module.__name__):
            return 0
        descriptors = _commands_in_module(module)
        for descriptor in descriptors:
            self.registry.register(descriptor)
        logger.debug("Registered %d command(s) from %s",
                     len(descriptors), module.__name__)
        return len(descriptors)

    def load(self, path: str) -> LoadOutcome:
        """
        Import the module at slash `path` and register its commands.

        Only ModuleNotFoundError for the target (or a parent package) is a
        miss. Everything else, including SystemExit raised at import time,
        is logged and reported as FAILED.
        """
        module_name = _module_name(path)
        if self.registry.is_module_loaded(module_name):
            return LoadOutcome.ALREADY_LOADED

        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if _is_missing_target(exc, module_name):
                return LoadOutcome.NOT_FOUND
            logger.warning(
                "Could not load %s %r. Error: %s.", self.command_type, path, exc, exc_info=True)
            return LoadOutcome.FAILED
        except (Exception, SystemExit) as exc:
            logger.warning(
                "Could not load %s %r. Error: %s.", self.command_type, path, exc, exc_info=True)
            return LoadOutcome.FAILED

        self.register_module(module)
        return LoadOutcome.LOADED

    def lookup(self, namespaces: Iterable[str]) -> Optional[str]:
        """
        Try candidate modules for `namespaces` in priority order.

        Stops at the first module that loads and returns its path; returns
        None when every candidate was missing or failed.
        """
        for path in self.candidate_paths(namespaces):
            if self.load(path).found:
                return path
        return None

    def _search_roots(self) -> list[Path]:
        roots = self._search_path if self._search_path is not None else sys.path
        return [Path(root or ".") for root in roots]

    def lookup_all(self) -> int:
        """
        Load every `*_<type>.py` module under the lookup bases of every
        search root. Failures are ignored; this only feeds listings.
        """
        loaded_count = 0
        seen_paths: set[str] = set()

        for root in self._search_roots():
            for base in self.spec.bases:
                base_dir = root.joinpath(*base.split("."))
                if not base_dir.is_dir():
                    continue
                for file_path in sorted(base_dir.glob(self.spec.pattern)):
                    relative = file_path.relative_to(root).with_suffix("")
                    path = "/".join(relative.parts)
                    if path in seen_paths:
                        continue
                    seen_paths.add(path)
                    try:
                        module = importlib.import_module(_module_name(path))
                    except (Exception, SystemExit) as exc:
                        logger.debug("Skipped %s during discovery: %s", path, exc)
                        continue
                    self.register_module(module)
                    loaded_count += 1

        return loaded_count
