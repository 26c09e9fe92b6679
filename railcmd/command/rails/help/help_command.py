#!/usr/bin/env python3
# railcmd/command/rails/help/help_command.py
from __future__ import annotations
"""`help`: the general usage text followed by every listed command."""

from typing import Any

from railcmd.commands import Base
from railcmd.interface.suggestions import SuggestionEngine
from railcmd.ui import print_line


class HelpCommand(Base):
    description = "Show the general usage and list the available commands."

    def _suggestions(self) -> SuggestionEngine:
        from railcmd.boot import current_engine, default_engine

        engine = current_engine() or default_engine()
        return engine.suggestions

    def help(self, *_: Any) -> str:
        text = self.desc(self.program_name)
        print_line(text)
        print_line()
        self._suggestions().print_commands()
        return text
