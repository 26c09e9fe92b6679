"""Tests for shell completion and frontend selection."""
from __future__ import annotations

import pytest

from railcmd.commands import Base, CommandDescriptor, CommandRegistry, CommandType, LookupPathSpec, command
from railcmd.interface import BaseCLI, Completer, Loader, Resolver, SuggestionEngine, cli


class GreetCommand(Base):
    namespace = "greet"

    def perform(self, name: str = "", *, shout: bool = False, times: int = 1) -> str:
        return name


@command()
def noop() -> None:
    """Does nothing."""


@pytest.fixture
def completer(registry: CommandRegistry) -> Completer:
    """Completer over a small hand-made registry."""
    for namespace in ("rails:console", "rails:test", "db:migrate", "db:seed"):
        registry.register(CommandDescriptor(namespace=namespace, target=noop.command_class))
    registry.register(GreetCommand.descriptor())
    spec = LookupPathSpec.for_type(CommandType.COMMAND, ["railcmd_no_such_lookup_base"])
    resolver = Resolver(registry, Loader(registry, spec, search_path=[]))
    return Completer(SuggestionEngine(registry), resolver)


def test_first_token_offers_builtins_and_namespaces(completer: Completer) -> None:
    """An empty line offers every verb and listed namespace."""
    assert completer.complete("") == [
        "console", "db:migrate", "db:seed", "exit", "greet", "help", "quit", "test"]


def test_first_token_prefix(completer: Completer) -> None:
    """Completion filters on the typed prefix."""
    assert completer.complete("db:") == ["db:migrate", "db:seed"]


def test_help_argument_completes_namespaces(completer: Completer) -> None:
    """After help, namespaces are offered."""
    assert completer.complete("help con") == ["console"]


def test_options_come_from_the_command_signature(completer: Completer) -> None:
    """Flags complete bare; valued options end with '='."""
    assert completer.complete("greet --") == ["--name=", "--shout", "--times="]
    assert completer.complete("greet --s") == ["--shout"]


def test_positional_token_has_no_completion(completer: Completer) -> None:
    """Plain arguments are not completed."""
    assert completer.complete("greet a") == []


def test_make_cli_falls_back(mocker) -> None:
    """Without prompt_toolkit or readline the plain frontend is used."""
    prompt_toolkit_cli = mocker.patch.object(cli, "PromptToolkitCLI", side_effect=ImportError("prompt_toolkit"))
    readline_cli = mocker.patch.object(cli, "ReadlineCLI", side_effect=ImportError("readline"))

    assert type(cli.make_cli(None)) is BaseCLI
    prompt_toolkit_cli.assert_called_once_with(None)
    readline_cli.assert_called_once_with(None)


def test_base_cli_reads_input(monkeypatch) -> None:
    """The plain frontend reads a line with the shell prompt."""
    prompts: list[str] = []
    monkeypatch.setattr("builtins.input", lambda prompt: prompts.append(prompt) or "db:migrate")

    with BaseCLI() as frontend:
        assert frontend.get_line() == "db:migrate"

    assert prompts == [cli.PROMPT]
