#!/usr/bin/env python3
# railcmd/boot/boot.py
from __future__ import annotations
"""
Boot sequence for railcmd.

Goals:
- Load configuration and initialize logging once per process.
- Make PLUGIN_PATH importable so user command packages are found.
- Wire registry, loader, resolver, suggestions and dispatcher per command type.
"""

import logging
import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

from railcmd.commands import (
    REGISTRY,
    CommandRegistry,
    CommandResult,
    CommandType,
    LookupPathSpec,
)
from railcmd.interface.handler import Dispatcher
from railcmd.interface.loader import Loader
from railcmd.interface.resolver import Resolver
from railcmd.interface.suggestions import SuggestionEngine
from railcmd.settings import AppConfig, load_config
from railcmd.ui import init_logger, set_color_enabled

LOGGER_NAME = "railcmd"


@dataclass(slots=True)
class Engine:
    """Everything needed to resolve and run commands of one type."""

    config: AppConfig
    command_type: CommandType
    registry: CommandRegistry
    loader: Loader
    resolver: Resolver
    suggestions: SuggestionEngine
    dispatcher: Dispatcher

    def invoke(
        self,
        namespace: str,
        args: Optional[Sequence[str]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> CommandResult:
        """
        Dispatcher.invoke with this engine as `current_engine()` while the
        command runs. `config` reaches the command unchanged.
        """
        token = _CURRENT_ENGINE.set(self)
        try:
            return self.dispatcher.invoke(namespace, args, config)
        finally:
            _CURRENT_ENGINE.reset(token)


# Engine whose invoke() is running in this context, if any
_CURRENT_ENGINE: ContextVar[Optional[Engine]] = ContextVar("railcmd_current_engine", default=None)


def current_engine() -> Optional[Engine]:
    """The engine running the current command, or None outside a command."""
    return _CURRENT_ENGINE.get()


def _step(label: str, fn: Callable[[], Any], logger: logging.Logger) -> Any:
    """Run a boot step and log its status."""
    try:
        out = fn()
    except Exception as exc:
        logger.error("[FAILED] %s (%s: %s)", label, type(exc).__name__, exc)
        raise
    logger.debug("[  OK  ] %s", label)
    return out


def _lookup_bases(config: AppConfig, command_type: CommandType) -> tuple[str, ...]:
    if command_type is CommandType.GENERATOR:
        return config.generator_lookup_paths
    return config.lookup_paths


def build_engine(
    config: AppConfig,
    command_type: CommandType = CommandType.COMMAND,
    *,
    registry: Optional[CommandRegistry] = None,
    search_path: Optional[Sequence[str]] = None,
) -> Engine:
    """Assemble an engine; a fresh registry is created unless one is given."""
    registry = registry if registry is not None else CommandRegistry()
    registry.hide(*config.hidden_namespaces)

    spec = LookupPathSpec.for_type(command_type, _lookup_bases(config, command_type))
    loader = Loader(registry, spec, search_path=search_path)
    resolver = Resolver(registry, loader)
    suggestions = SuggestionEngine(registry, loader)
    dispatcher = Dispatcher(
        resolver,
        suggestions,
        program_name=config.program_name,
        suggestion_count=config.suggestion_count,
    )
    return Engine(
        config=config,
        command_type=command_type,
        registry=registry,
        loader=loader,
        resolver=resolver,
        suggestions=suggestions,
        dispatcher=dispatcher,
    )


def _add_plugin_path(config: AppConfig) -> None:
    if config.plugin_path is None:
        return
    plugin_root = str(config.plugin_path)
    if plugin_root not in sys.path:
        sys.path.insert(0, plugin_root)


def boot_sequence(
    config: Optional[AppConfig] = None,
    command_type: CommandType = CommandType.COMMAND,
    registry: Optional[CommandRegistry] = None,
) -> Engine:
    """Configure the process (logging, colour, sys.path) and build an engine."""
    config = config if config is not None else load_config()

    logger = init_logger(
        LOGGER_NAME,
        level=config.log_level,
        logfile=str(config.log_file_path) if config.log_file_path else None,
    )
    if config.no_color:
        set_color_enabled(False)

    _step(f"Add plugin path {config.plugin_path}", lambda: _add_plugin_path(config), logger)
    engine = _step(
        f"Build {command_type.value} engine",
        lambda: build_engine(config, command_type, registry=registry),
        logger,
    )
    _step("Boot complete", lambda: None, logger)
    return engine


# Process-wide engines, one per command type, built on first use
_ENGINES: dict[CommandType, Engine] = {}


def default_engine(command_type: CommandType = CommandType.COMMAND) -> Engine:
    """Return the process-wide engine for `command_type`, booting it on first use."""
    engine = _ENGINES.get(command_type)
    if engine is None:
        config = next(iter(_ENGINES.values())).config if _ENGINES else None
        # Commands registered through register_command() live in REGISTRY
        registry = REGISTRY if command_type is CommandType.COMMAND else None
        engine = boot_sequence(config, command_type, registry)
        _ENGINES[command_type] = engine
    return engine


def reset_default_engines() -> None:
    """Drop the process-wide engines (tests)."""
    _ENGINES.clear()
