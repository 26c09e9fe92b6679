"""Shared test fixtures for the railcmd test suite."""
from __future__ import annotations

import importlib
import logging
import sys
import textwrap
import uuid
from pathlib import Path
from typing import Any, Iterator

import pytest

from railcmd.boot import Engine, build_engine, reset_default_engines
from railcmd.commands import REGISTRY, CommandRegistry
from railcmd.settings import config_from_mapping
from railcmd.ui import set_color_enabled


class PluginTree:
    """A throwaway top-level package on sys.path holding command modules."""

    def __init__(self, root: Path, package: str) -> None:
        self.root = root
        self.package = package
        (root / package).mkdir()
        (root / package / "__init__.py").write_text("")

    @property
    def command_base(self) -> str:
        return f"{self.package}.command"

    @property
    def generator_base(self) -> str:
        return f"{self.package}.generators"

    def write(self, relative: str, source: str = "") -> Path:
        """Write `relative` (slash path inside the package), creating packages on the way."""
        path = self.root / self.package / relative
        directory = self.root / self.package
        for part in Path(relative).parent.parts:
            directory = directory / part
            directory.mkdir(exist_ok=True)
            init_file = directory / "__init__.py"
            if not init_file.exists():
                init_file.write_text("")
        path.write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        return path

    def config(self, **overrides: Any):
        values = {
            "LOOKUP_PATHS": self.command_base,
            "GENERATOR_LOOKUP_PATHS": self.generator_base,
            "PLUGIN_PATH": "",
        }
        values.update(overrides)
        return config_from_mapping(values)

    def engine(self, **overrides: Any) -> Engine:
        """Command engine searching only this tree."""
        return build_engine(self.config(**overrides), search_path=[str(self.root)])


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Undo logger, colour and default-engine changes made by a test."""
    logger = logging.getLogger("railcmd")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    logger.handlers.clear()
    logger.propagate = True
    set_color_enabled(False)
    yield
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
    logger.propagate = True
    set_color_enabled(None)
    reset_default_engines()
    REGISTRY.reset()


@pytest.fixture
def registry() -> CommandRegistry:
    """Return an empty registry."""
    return CommandRegistry()


@pytest.fixture
def plugin_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[PluginTree]:
    """Return a uniquely named plugin package importable from tmp_path."""
    package = f"railcmd_fixture_{uuid.uuid4().hex[:8]}"
    monkeypatch.syspath_prepend(str(tmp_path))
    tree = PluginTree(tmp_path, package)
    yield tree
    for name in [m for m in sys.modules if m == package or m.startswith(package + ".")]:
        del sys.modules[name]
