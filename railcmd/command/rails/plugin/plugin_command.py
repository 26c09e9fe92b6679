#!/usr/bin/env python3
# railcmd/command/rails/plugin/plugin_command.py
from __future__ import annotations
"""
`plugin new`: forwards to the `plugin` generator.

Extra arguments are read from a railsrc file (whitespace separated, one
or more per line) and inserted right after the plugin path, unless
`--no-rc` is given.
"""

from pathlib import Path
from typing import Any

from railcmd.commands import Base, CommandResult, CommandType
from railcmd.commands.base import DEFAULT_PROGRAM_NAME
from railcmd.ui import print_line

DEFAULT_RAILSRC = "~/.railsrc"


def read_railsrc(path: str) -> tuple[Path, list[str]]:
    """Expanded path and the arguments it holds (empty when the file is absent)."""
    railsrc = Path(path).expanduser().resolve()
    if not railsrc.is_file():
        return railsrc, []
    return railsrc, railsrc.read_text(encoding="utf-8").split()


class PluginCommand(Base):
    description = "Create a new plugin skeleton."

    @classmethod
    def banner(cls, program_name: str = DEFAULT_PROGRAM_NAME) -> str:
        return f"{program_name} plugin new [options]"

    def help(self, *_: Any) -> CommandResult:
        return self.run_plugin_generator(["--help"])

    def perform(
        self,
        type: str | None = None,
        *plugin_args: str,
        rc: str = DEFAULT_RAILSRC,
        no_rc: bool = False,
    ) -> CommandResult:
        generator_args = list(plugin_args)
        if type != "new":
            generator_args.append("--help")

        if not no_rc:
            railsrc, extra_args = read_railsrc(rc)
            if extra_args:
                print_line(f"Using {' '.join(extra_args)} from {railsrc}")
                generator_args[1:1] = extra_args

        return self.run_plugin_generator(generator_args)

    def run_plugin_generator(self, generator_args: list[str]) -> CommandResult:
        generators = self.config.get("generators")
        if generators is None:
            from railcmd.boot import default_engine

            generators = default_engine(CommandType.GENERATOR)
        return generators.invoke("plugin", generator_args, {"program_name": self.program_name})
