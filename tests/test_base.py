"""Tests for the Base command class and the @command decorator."""
from __future__ import annotations

import importlib

import pytest

from railcmd.commands import Base, CommandError, CommandRegistry, CommandType, command


def _import(plugin_tree, relative: str, source: str):
    plugin_tree.write(relative, source)
    module_name = ".".join([plugin_tree.package, *relative[: -len(".py")].split("/")])
    return importlib.import_module(module_name)


@pytest.mark.parametrize(
    ("relative", "class_name", "expected"),
    [
        ("command/rails/test/test_command.py", "TestCommand", "rails:test"),
        ("command/db/migrate_command.py", "MigrateCommand", "db:migrate"),
        ("command/console_command.py", "ConsoleCommand", "console"),
        ("command/db/db_command.py", "DbCommand", "db"),
        ("command/db/system_change_command.py", "SystemChangeCommand", "db:system_change"),
    ],
)
def test_namespace_follows_module_path(plugin_tree, relative: str, class_name: str, expected: str) -> None:
    """The package after 'command' and the class name make the namespace."""
    module = _import(
        plugin_tree,
        relative,
        f"""
        from railcmd.commands import Base


        class {class_name}(Base):
            def perform(self) -> None:
                pass
        """,
    )

    assert getattr(module, class_name).namespace_name() == expected


def test_generator_namespace(plugin_tree) -> None:
    """Generators strip their own suffix and look after the 'generators' package."""
    module = _import(
        plugin_tree,
        "generators/rails/model/model_generator.py",
        """
        from railcmd.commands import Generator


        class ModelGenerator(Generator):
            def perform(self, name: str) -> str:
                return name
        """,
    )

    descriptor = module.ModelGenerator.descriptor()
    assert descriptor.namespace == "rails:model"
    assert descriptor.command_type is CommandType.GENERATOR


def test_explicit_namespace_wins() -> None:
    """A namespace attribute overrides the derived one."""
    class ExplicitCommand(Base):
        namespace = "tools:explicit"

        def perform(self) -> None:
            pass

    assert ExplicitCommand.namespace_name() == "tools:explicit"
    assert ExplicitCommand.command_name() == "explicit"


def test_abstract_is_not_inherited() -> None:
    """Only classes that say so are abstract."""
    class SharedCommand(Base):
        abstract = True

    class ConcreteCommand(SharedCommand):
        def perform(self) -> None:
            pass

    assert SharedCommand.abstract
    assert not ConcreteCommand.abstract


def test_usage_file_is_rendered(plugin_tree, monkeypatch) -> None:
    """USAGE next to the command is a Jinja2 template."""
    monkeypatch.setenv("RAILS_ENV", "staging")
    monkeypatch.delenv("RACK_ENV", raising=False)
    plugin_tree.write(
        "command/rails/greet/USAGE",
        "Run {{ program_name }} {{ command_name }} ({{ namespace }}) in {{ environment }}.\n",
    )
    module = _import(
        plugin_tree,
        "command/rails/greet/greet_command.py",
        """
        from railcmd.commands import Base


        class GreetCommand(Base):
            def perform(self, name: str) -> str:
                return name
        """,
    )

    assert module.GreetCommand.desc("bin/rails") == "Run bin/rails greet (rails:greet) in staging.\n"


def test_usage_with_unknown_variable_raises(plugin_tree) -> None:
    """Undefined template variables are reported as a CommandError."""
    plugin_tree.write("command/rails/oops/USAGE", "{{ no_such_variable }}\n")
    module = _import(
        plugin_tree,
        "command/rails/oops/oops_command.py",
        """
        from railcmd.commands import Base


        class OopsCommand(Base):
            def perform(self) -> None:
                pass
        """,
    )

    with pytest.raises(CommandError, match="Could not render"):
        module.OopsCommand.desc()


def test_desc_falls_back_to_description_then_docstring() -> None:
    """Without USAGE, description wins over the perform docstring."""
    class DescribedCommand(Base):
        description = "Described."

        def perform(self) -> None:
            """Docstring."""

    class DocumentedCommand(Base):
        def perform(self) -> None:
            """Docstring."""

    assert DescribedCommand.desc() == "Described."
    assert DocumentedCommand.desc() == "Docstring."


def test_help_uses_program_name(capsys) -> None:
    """help() prints the banner with the configured program name."""
    class RoutesCommand(Base):
        description = "Print routes."

        def perform(self, *, controller: str = "") -> None:
            pass

    text = RoutesCommand({"program_name": "bin/rails"}).help()

    assert text == "Usage:\n  bin/rails routes [--controller=...] [options]\n\nPrint routes."
    assert capsys.readouterr().out == text + "\n"


def test_dispatch_runs_named_method() -> None:
    """A runnable naming a method of the command calls that method."""
    class ServerCommand(Base):
        def perform(self) -> str:
            return "perform"

        def server(self, port: int = 3000) -> int:
            return port

        def _secret(self) -> str:
            return "secret"

    assert ServerCommand.dispatch("server", ["4000"]) == 4000
    assert ServerCommand.dispatch("other", []) == "perform"
    assert ServerCommand.dispatch("_secret", []) == "perform"


def test_dispatch_without_runnable_prints_help(capsys) -> None:
    """None as runnable renders help."""
    class PingCommand(Base):
        description = "Ping."

        def perform(self) -> str:
            return "pong"

    assert PingCommand.dispatch(None, ["--help"]).startswith("Usage:")
    assert "rails ping" in capsys.readouterr().out


def test_hide_marks_command_and_registry(registry: CommandRegistry) -> None:
    """hide() flags the class and hides its namespace in the given registry."""
    class InternalCommand(Base):
        def perform(self) -> None:
            pass

    InternalCommand.hide(registry)

    assert InternalCommand.hidden
    assert InternalCommand.descriptor().hidden
    assert registry.is_hidden("internal")


def test_command_decorator_builds_class() -> None:
    """@command wraps a function into a Base subclass."""
    @command(namespace="db:seed", description="Load seeds.")
    def db_seed(file: str = "seeds.py") -> str:
        return file

    klass = db_seed.command_class
    assert issubclass(klass, Base)
    assert klass.__name__ == "DbSeedCommand"
    assert klass.namespace_name() == "db:seed"
    assert klass.descriptor().description == "Load seeds."
    assert klass.dispatch("db_seed", ["other.py"]) == "other.py"
    # The function itself is untouched
    assert db_seed() == "seeds.py"
