#!/usr/bin/env python3
# railcmd/__main__.py
from __future__ import annotations
"""
Command line entry point.

    railcmd                      -> help
    railcmd -h | --help          -> help
    railcmd -i | --interactive   -> interactive shell
    railcmd console --sandbox
"""

import logging
import sys
from typing import Optional, Sequence

from railcmd.boot import Engine, default_engine
from railcmd.interface import HELP_MAPPINGS, Completer, make_cli, tokenize

INTERACTIVE_FLAGS = ("-i", "--interactive")
EXIT_COMMANDS = ("exit", "quit")

logger = logging.getLogger("railcmd")


def run_line(engine: Engine, line: str) -> bool:
    """Run one shell line; returns False when the shell should stop."""
    try:
        tokens = tokenize(line)
    except ValueError as exc:
        logger.error("Could not parse input: %s", exc)
        return True
    if not tokens:
        return True
    if tokens[0] in EXIT_COMMANDS:
        return False

    try:
        engine.invoke(tokens[0], tokens[1:])
    except Exception as exc:
        # The shell outlives failing commands
        logger.error("%s failed: %s", tokens[0], exc, exc_info=logger.isEnabledFor(logging.DEBUG))
    return True


def interactive(engine: Engine) -> int:
    completer = Completer(engine.suggestions, engine.resolver) if engine.config.enable_completion else None
    with make_cli(completer) as cli:
        while True:
            try:
                line = cli.get_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not run_line(engine, line):
                break
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    engine = default_engine()

    if args and args[0] in INTERACTIVE_FLAGS:
        return interactive(engine)

    if not args or args[0] in HELP_MAPPINGS:
        namespace, rest = "help", []
    else:
        namespace, rest = args[0], args[1:]

    result = engine.invoke(namespace, rest)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
