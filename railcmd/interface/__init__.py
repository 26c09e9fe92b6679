#!/usr/bin/env python3
# railcmd/interface/__init__.py
from __future__ import annotations

"""
Package for command discovery, resolution and dispatch.

Provides:
- Parser utilities for binding arguments to command signatures.
- Convention-based loader for command modules.
- Namespace resolver with the reserved-namespace fallback.
- Suggestion engine for listings and "did you mean" hints.
- Dispatcher with help interception.
- Completion and CLI frontends for the interactive shell.
"""


# Parser FIRST (everything else depends on it)
from .parser import HELP_MAPPINGS, Argument, tokenize, bind_args, build_usage, describe_arguments

# Discovery / resolution
from .loader import LoadOutcome, Loader, namespaces_to_paths
from .resolver import RESERVED_NAMESPACE, Resolver, candidate_namespaces
from .suggestions import SuggestionEngine, UNLISTED_RESERVED_COMMANDS

# Dispatch
from .handler import Dispatcher, HelpState, format_not_found

# Shell
from .completion import BUILT_IN_COMMANDS, Completer
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli, HISTORY_FILE_PATH

__all__ = [
    # parser
    "HELP_MAPPINGS",
    "Argument",
    "tokenize",
    "bind_args",
    "build_usage",
    "describe_arguments",
    # loader / resolver / suggestions
    "LoadOutcome",
    "Loader",
    "namespaces_to_paths",
    "RESERVED_NAMESPACE",
    "Resolver",
    "candidate_namespaces",
    "SuggestionEngine",
    "UNLISTED_RESERVED_COMMANDS",
    # handler
    "Dispatcher",
    "HelpState",
    "format_not_found",
    # shell
    "BUILT_IN_COMMANDS",
    "Completer",
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "HISTORY_FILE_PATH",
]
