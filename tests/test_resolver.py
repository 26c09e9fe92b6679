"""Tests for namespace resolution."""
from __future__ import annotations

import pytest

from railcmd.commands import CommandDescriptor, CommandRegistry, CommandType, LookupPathSpec, command
from railcmd.interface import Loader, Resolver, candidate_namespaces


def _register(registry: CommandRegistry, namespace: str) -> CommandDescriptor:
    @command(namespace=namespace)
    def run() -> str:
        return namespace

    descriptor = run.command_class.descriptor()
    registry.register(descriptor)
    return descriptor


@pytest.fixture
def resolver(registry: CommandRegistry) -> Resolver:
    """Resolver whose loader finds nothing on disk."""
    spec = LookupPathSpec.for_type(CommandType.COMMAND, ["railcmd_no_such_lookup_base"])
    return Resolver(registry, Loader(registry, spec, search_path=[]))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("model", ["model", "rails:model"]),
        ("rails:console", ["console", "rails:console"]),
        ("db:migrate", ["migrate", "rails:migrate"]),
        ("db:schema:load", ["load", "rails:load"]),
    ],
)
def test_candidate_namespaces(raw: str, expected: list[str]) -> None:
    """The bare name comes first, then the reserved alias; a prefix is dropped."""
    assert candidate_namespaces(raw) == expected


def test_falls_back_to_reserved_namespace(registry: CommandRegistry, resolver: Resolver) -> None:
    """'model' resolves to rails:model when no bare model exists."""
    reserved = _register(registry, "rails:model")

    assert resolver.resolve("model") is reserved


def test_bare_name_takes_precedence(registry: CommandRegistry, resolver: Resolver) -> None:
    """A bare 'model' wins over rails:model, whatever the registration order."""
    bare = _register(registry, "model")
    _register(registry, "rails:model")

    assert resolver.resolve("model") is bare


def test_prefix_is_not_a_candidate(registry: CommandRegistry, resolver: Resolver) -> None:
    """'db:migrate' is looked up as migrate or rails:migrate, never by its full name."""
    _register(registry, "db:migrate")

    assert resolver.resolve("db:migrate") is None


def test_prefixed_identifier_resolves_by_last_part(registry: CommandRegistry, resolver: Resolver) -> None:
    """The prefix is ignored, so 'db:migrate' finds a bare migrate command."""
    migrate = _register(registry, "migrate")

    assert resolver.resolve("db:migrate") is migrate


def test_unknown_namespace_resolves_to_none(registry: CommandRegistry, resolver: Resolver) -> None:
    """Nothing registered under any candidate means no match."""
    _register(registry, "rails:console")

    assert resolver.resolve("totally:unknown:thing") is None


def test_hidden_namespace_still_resolves(registry: CommandRegistry, resolver: Resolver) -> None:
    """Hiding affects listings only; typing the namespace in full still works."""
    secret = _register(registry, "secret")
    registry.hide("secret")

    assert resolver.resolve("secret") is secret


def test_resolve_loads_commands_on_demand(registry: CommandRegistry, plugin_tree) -> None:
    """Resolution imports the module following the naming convention."""
    plugin_tree.write(
        "command/rails/console/console_command.py",
        """
        from railcmd.commands import Base


        class ConsoleCommand(Base):
            def perform(self) -> str:
                return "console"
        """,
    )
    spec = LookupPathSpec.for_type(CommandType.COMMAND, [plugin_tree.command_base])
    resolver = Resolver(registry, Loader(registry, spec, search_path=[str(plugin_tree.root)]))

    descriptor = resolver.resolve("console")

    assert descriptor is not None
    assert descriptor.namespace == "rails:console"
    assert descriptor.target.__name__ == "ConsoleCommand"


def test_resolve_after_registry_reset(registry: CommandRegistry, plugin_tree) -> None:
    """A reset registry is repopulated on the next resolution."""
    plugin_tree.write(
        "command/hello/hello_command.py",
        """
        from railcmd.commands import Base


        class HelloCommand(Base):
            def perform(self) -> str:
                return "hello"
        """,
    )
    spec = LookupPathSpec.for_type(CommandType.COMMAND, [plugin_tree.command_base])
    resolver = Resolver(registry, Loader(registry, spec, search_path=[str(plugin_tree.root)]))

    assert resolver.resolve("hello").namespace == "hello"

    registry.reset()

    descriptor = resolver.resolve("hello")
    assert descriptor is not None
    assert descriptor.namespace == "hello"
