#!/usr/bin/env python3
# railcmd/commands/base.py
from __future__ import annotations

"""
Base class for loadable commands.

A command module lives under a lookup base following the
`<base>/<namespace-as-path>_command.py` convention and defines one or
more `Base` subclasses (or `@command` functions). The loader registers
every such class when it imports the module.

    # railcmd/command/rails/console/console_command.py
    class ConsoleCommand(Base):
        def perform(self, environment: str | None = None, *, sandbox: bool = False):
            ...

The class above answers to the namespace `rails:console`.
"""

import re
import sys
from pathlib import Path
from typing import Any, Callable, ClassVar, Mapping, Optional

from jinja2 import Environment, StrictUndefined, TemplateError

from railcmd.commands.command_types import CommandDescriptor, CommandType
from railcmd.helpers import environment
from railcmd.ui import print_line

DEFAULT_PROGRAM_NAME = "rails"

_jinja = Environment(undefined=StrictUndefined, keep_trailing_newline=True)


class CommandError(Exception):
    """Raised by commands for user-facing failures; never swallowed by dispatch."""


def underscore(camel_cased: str) -> str:
    """'DbMigrate' -> 'db_migrate'."""
    word = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", camel_cased)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()


class Base:
    """
    Class-style command.

    Class attributes:
        namespace: Explicit namespace; derived from module and class name when None.
        description: Short description (the USAGE file wins for long help).
        hidden: Keep out of listings and suggestions.
        abstract: Never registered (shared parents).
        command_type: Governs lookup paths and the class-name suffix.
    """

    namespace: ClassVar[Optional[str]] = None
    description: ClassVar[str] = ""
    hidden: ClassVar[bool] = False
    abstract: ClassVar[bool] = True
    command_type: ClassVar[CommandType] = CommandType.COMMAND

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # abstract is opt-in per class, never inherited
        if "abstract" not in cls.__dict__:
            cls.abstract = False

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config: dict[str, Any] = dict(config or {})

    # ---------------- Naming ----------------

    @classmethod
    def command_name(cls) -> str:
        """Class name without its type suffix, snake_cased: DbMigrateCommand -> db_migrate."""
        cached = cls.__dict__.get("_command_name")
        if cached is None:
            name = cls.__name__
            suffix = cls.command_type.class_suffix
            if name.endswith(suffix) and name != suffix:
                name = name[: -len(suffix)]
            cached = underscore(name)
            cls._command_name = cached
        return cached

    @classmethod
    def base_name(cls) -> Optional[str]:
        """
        Package segment following the lookup package in the module path.

        railcmd.command.rails.test.test_command -> 'rails'
        command.db.migrate_command              -> 'db'
        command.console_command                 -> None
        """
        parts = cls.__module__.split(".")
        marker = cls.command_type.package
        packages = parts[:-1]
        for index in range(len(packages) - 1, -1, -1):
            if packages[index] == marker:
                if index + 1 < len(packages):
                    return packages[index + 1]
                return None
        return None

    @classmethod
    def namespace_name(cls) -> str:
        """Canonical namespace, computed once per class."""
        cached = cls.__dict__.get("_namespace")
        if cached is None:
            if cls.__dict__.get("namespace"):
                cached = cls.__dict__["namespace"]
            else:
                base = cls.base_name()
                name = cls.command_name()
                cached = f"{base}:{name}" if base and base != name else name
            cls._namespace = cached
        return cached

    # ---------------- Arguments / help ----------------

    @classmethod
    def _bound(cls, method_name: str = "perform") -> Callable[..., Any]:
        # Bound method on a bare instance so `self` drops out of the signature.
        return getattr(cls.__new__(cls), method_name)

    @classmethod
    def arguments(cls):
        """Arguments declared by `perform`, described by the option parser."""
        from railcmd.interface.parser import describe_arguments

        return describe_arguments(cls._bound())

    @classmethod
    def banner(cls, program_name: str = DEFAULT_PROGRAM_NAME) -> str:
        usage = " ".join(argument.usage for argument in cls.arguments())
        return " ".join(filter(None, [program_name, cls.command_name(), usage, "[options]"]))

    @classmethod
    def usage_path(cls) -> Optional[Path]:
        """USAGE file next to the command module, or one directory above it."""
        module = sys.modules.get(cls.__module__)
        module_file = getattr(module, "__file__", None)
        if not module_file:
            return None
        command_root = Path(module_file).resolve().parent
        for directory in (command_root, command_root.parent):
            candidate = directory / "USAGE"
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def desc(cls, program_name: str = DEFAULT_PROGRAM_NAME) -> str:
        """Long description: rendered USAGE file, else `description`, else perform docstring."""
        if "_desc" not in cls.__dict__:
            cls._desc = {}
        cached = cls._desc.get(program_name)
        if cached is not None:
            return cached

        path = cls.usage_path()
        if path is not None:
            try:
                template = _jinja.from_string(path.read_text(encoding="utf-8"))
                cached = template.render(
                    command=cls,
                    namespace=cls.namespace_name(),
                    command_name=cls.command_name(),
                    program_name=program_name,
                    environment=environment(),
                )
            except TemplateError as exc:
                raise CommandError(f"Could not render {path}: {exc}") from exc
        else:
            cached = (cls.description or cls._bound().__doc__ or "").strip()
        cls._desc[program_name] = cached
        return cached

    @classmethod
    def hide(cls, registry=None) -> None:
        """Keep this command out of listings and suggestions; typing it in full still works."""
        cls.hidden = True
        if registry is not None:
            registry.hide(cls.namespace_name())

    @classmethod
    def descriptor(cls) -> CommandDescriptor:
        summary = (cls.description or "").strip().splitlines()
        return CommandDescriptor(
            namespace=cls.namespace_name(),
            target=cls,
            command_type=cls.command_type,
            hidden=cls.hidden,
            module=cls.__module__,
            description=summary[0] if summary else "",
        )

    # ---------------- Dispatch ----------------

    @classmethod
    def _defines(cls, method_name: str) -> bool:
        """True when a Base subclass (not Base itself) defines `method_name`."""
        for klass in cls.__mro__:
            if klass is Base or not (isinstance(klass, type) and issubclass(klass, Base)):
                continue
            if method_name in klass.__dict__:
                return True
        return False

    @classmethod
    def dispatch(cls, runnable: Optional[str], args: list[str], config: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Execution entry point.

        `runnable` None renders help. Otherwise the method named `runnable`
        runs when the command defines one, else `perform`.
        """
        from railcmd.interface.parser import bind_args

        instance = cls(config)
        if runnable is None:
            return instance.help()

        method_name = runnable if not runnable.startswith("_") and cls._defines(runnable) else "perform"
        method = getattr(instance, method_name)
        positional, keywords = bind_args(method, args)
        return method(*positional, **keywords)

    @property
    def program_name(self) -> str:
        """`program_name` from config, else PROGRAM_NAME of the running engine."""
        if self.config.get("program_name"):
            return self.config["program_name"]
        from railcmd.boot import current_engine

        engine = current_engine()
        return engine.config.program_name if engine is not None else DEFAULT_PROGRAM_NAME

    @property
    def environment(self) -> str:
        return environment()

    def help(self, *_: Any) -> str:
        """Print and return usage plus the long description."""
        lines = ["Usage:", f"  {self.banner(self.program_name)}"]
        description = self.desc(self.program_name)
        if description:
            lines += ["", description.rstrip()]
        text = "\n".join(lines)
        print_line(text)
        return text

    def perform(self, *args: Any, **kwargs: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement perform()")


class Generator(Base):
    """Parent for generator-type commands (`*_generator.py` modules)."""

    abstract = True
    command_type = CommandType.GENERATOR


def command(
    *,
    namespace: str | None = None,
    description: str | None = None,
    hidden: bool = False,
    command_type: CommandType = CommandType.COMMAND,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator turning a function into a command.

    The function becomes `perform` of a generated class named after it
    (`db_migrate` -> `DbMigrateCommand`), exposed as `func.command_class`
    for the loader to pick up.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        class_name = "".join(part.capitalize() for part in func.__name__.split("_") if part)
        attrs = {
            "__module__": func.__module__,
            "__doc__": func.__doc__,
            "__qualname__": class_name + command_type.class_suffix,
            "namespace": namespace,
            "description": (description or func.__doc__ or "").strip(),
            "hidden": hidden,
            "command_type": command_type,
            "perform": staticmethod(func),
        }
        func.command_class = type(class_name + command_type.class_suffix, (Base,), attrs)  # type: ignore[attr-defined]
        return func

    return wrapper
