#!/usr/bin/env python3
# railcmd/interface/cli.py
from __future__ import annotations

"""
Line editors for the interactive shell.

`make_cli` picks the richest one available: prompt_toolkit, then
readline, then bare `input()`. All of them are context managers so
history is saved on the way out.
"""

from pathlib import Path
from typing import Iterable, Optional

from railcmd.interface.completion import Completer, _split_current_token

HISTORY_FILE_PATH = Path.home() / ".railcmd_history"

PROMPT = "railcmd> "


class BaseCLI:
    """`input()` with no history or completion; parent of the richer editors."""

    def setup(self) -> None:
        """Called on enter."""

    def get_line(self) -> str:
        return input(PROMPT)

    def teardown(self) -> None:
        """Called on exit, even after an error."""

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError:
            # Unwritable history is not worth a traceback on exit
            pass


class PromptToolkitCLI(BaseCLI):
    """prompt_toolkit session with file history and completion as you type."""

    def __init__(self, completer: Optional[Completer] = None) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer as ToolkitCompleter, Completion
        from prompt_toolkit.history import FileHistory

        class _NamespaceCompleter(ToolkitCompleter):
            def get_completions(self, document, complete_event) -> Iterable[Completion]:
                line = document.text_before_cursor
                _, token = _split_current_token(line)
                for word in completer.complete(line):
                    yield Completion(word, start_position=-len(token))

        HISTORY_FILE_PATH.touch(exist_ok=True)
        self._session = PromptSession(
            history=FileHistory(str(HISTORY_FILE_PATH)),
            completer=_NamespaceCompleter() if completer is not None else None,
            complete_while_typing=completer is not None,
        )

    def get_line(self) -> str:
        return self._session.prompt(PROMPT)


class ReadlineCLI(BaseCLI):
    """GNU readline (or pyreadline3) with tab completion and history."""

    def __init__(self, completer: Optional[Completer] = None) -> None:
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self.completer = completer

    def _complete(self, fragment: str, state: int) -> Optional[str]:
        words = [
            word for word in self.completer.complete(self.readline.get_line_buffer())
            if word.startswith(fragment)]
        return words[state] if state < len(words) else None

    def setup(self) -> None:
        HISTORY_FILE_PATH.touch(exist_ok=True)
        try:
            self.readline.read_history_file(str(HISTORY_FILE_PATH))
        except OSError:
            pass

        if self.completer is not None:
            # ':' and '=' belong to the token being completed
            self.readline.set_completer_delims(" \t\n")
            self.readline.set_completer(self._complete)
            self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        self.readline.write_history_file(str(HISTORY_FILE_PATH))


def make_cli(completer: Optional[Completer] = None) -> BaseCLI:
    """Best editor this environment supports."""
    try:
        return PromptToolkitCLI(completer)
    except Exception:
        # No prompt_toolkit, or no real console (output redirected, Windows without a screen buffer)
        pass
    try:
        return ReadlineCLI(completer)
    except ImportError:
        return BaseCLI()
