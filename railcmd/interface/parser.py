#!/usr/bin/env python3
# railcmd/interface/parser.py
from __future__ import annotations

"""
Argument parsing helpers for commands.

Responsibilities:
- Tokenize a command line into shell-like tokens.
- Describe the arguments a command's `perform` signature declares.
- Bind tokens to that signature with type coercion based on annotations.
- Render compact usage strings.

Accepted option forms: `--name=value`, `--name value` (non-bool),
`--flag` (bool), and the legacy `name=value`. A bare `--` ends option
parsing.
"""

import inspect
import shlex
import types
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

# Tokens that request help instead of running a command.
HELP_MAPPINGS: tuple[str, ...] = ("-h", "-?", "--help", "-D")

POSITIONAL = "positional"
VARIADIC = "variadic"
OPTION = "option"


@dataclass(frozen=True)
class Argument:
    """One parameter of a command's `perform` method."""

    name: str
    kind: str
    required: bool
    annotation: Any = inspect.Parameter.empty
    default: Any = inspect.Parameter.empty

    @property
    def is_flag(self) -> bool:
        return self.kind == OPTION and _unwrap_optional(self.annotation) is bool

    @property
    def usage(self) -> str:
        if self.kind == VARIADIC:
            return f"[{self.name}...]"
        if self.kind == OPTION:
            option = self.name.replace("_", "-")
            return f"[--{option}]" if self.is_flag else f"[--{option}=...]"
        return f"<{self.name}>" if self.required else f"[{self.name}]"


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into tokens using POSIX rules."""
    return shlex.split(command_line, posix=True)


def _signature(func: Any) -> inspect.Signature:
    # Resolve string annotations from `from __future__ import annotations`.
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, TypeError, SyntaxError):
        return inspect.signature(func)


def _unwrap_optional(annotation: Any) -> Any:
    """Optional[T] / T | None -> T."""
    origin = get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _coerce_value(text_value: str, annotation: Any) -> Any:
    """
    Convert a string to the annotated type when reasonable.

    Supported coercions:
        - str/Any/empty -> original text
        - bool -> accepts '1,true,yes,y,on' (case-insensitive)
        - int/float -> cast via constructor
    """
    annotation = _unwrap_optional(annotation)
    if annotation in (inspect.Parameter.empty, str, Any):
        return text_value
    if annotation is bool:
        return text_value.lower() in ("1", "true", "yes", "y", "on")
    if annotation in (int, float):
        return annotation(text_value)
    return text_value


def describe_arguments(func: Any) -> list[Argument]:
    """Return the arguments declared by `func`, in signature order (self excluded)."""
    described: list[Argument] = []
    for parameter in _signature(func).parameters.values():
        if parameter.kind is parameter.VAR_KEYWORD:
            continue
        if parameter.kind is parameter.VAR_POSITIONAL:
            described.append(Argument(parameter.name, VARIADIC, False, parameter.annotation))
        elif parameter.kind is parameter.KEYWORD_ONLY:
            described.append(Argument(
                parameter.name, OPTION, parameter.default is parameter.empty,
                parameter.annotation, parameter.default))
        else:
            described.append(Argument(
                parameter.name, POSITIONAL, parameter.default is parameter.empty,
                parameter.annotation, parameter.default))
    return described


def _split_tokens(
    tokens: list[str], parameters: dict[str, inspect.Parameter]
) -> tuple[list[str], dict[str, str], list[str]]:
    """Separate positionals, known options and unknown option tokens."""
    positional_tokens: list[str] = []
    option_tokens: dict[str, str] = {}
    unknown_tokens: list[str] = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            positional_tokens.extend(tokens[index:])
            break

        if token.startswith("--") and len(token) > 2:
            raw_key, has_value, value = token[2:].partition("=")
            key = raw_key.replace("-", "_")
            parameter = parameters.get(key)
            if parameter is None:
                unknown_tokens.append(token)
                continue
            if not has_value:
                annotation = _unwrap_optional(parameter.annotation)
                if annotation is bool or (annotation is parameter.empty and isinstance(parameter.default, bool)):
                    value = "true"
                elif index < len(tokens) and not tokens[index].startswith("--"):
                    value = tokens[index]
                    index += 1
                else:
                    value = "true"
            option_tokens[key] = value
            continue

        key, sep, value = token.partition("=")
        if sep and key.isidentifier() and key in parameters:
            option_tokens[key] = value
            continue

        positional_tokens.append(token)

    return positional_tokens, option_tokens, unknown_tokens


def bind_args(func: Any, tokens: list[str]) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """
    Bind a flat token list to the signature of `func`.

    Supports:
        - positional tokens
        - --key=value / --flag / key=value tokens for keyword-only or normal parameters
        - *args (VAR_POSITIONAL) with optional element annotation via typing.Tuple[T, ...]

    Unknown options are forwarded to *args when present, otherwise ignored.
    """
    signature = _signature(func)
    parameters = [
        p for p in signature.parameters.values() if p.kind is not p.VAR_KEYWORD]
    by_name = {p.name: p for p in parameters if p.kind is not p.VAR_POSITIONAL}

    positional_tokens, option_tokens, unknown_tokens = _split_tokens(tokens, by_name)

    bound_positional: list[Any] = []
    bound_keywords: dict[str, Any] = {}
    positional_index = 0
    var_positional: inspect.Parameter | None = None
    # Once a positional parameter is named as an option, later ones bind by keyword.
    keyword_mode = False

    for parameter in parameters:
        if parameter.kind is parameter.VAR_POSITIONAL:
            var_positional = parameter
            continue

        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            if parameter.name in option_tokens and parameter.kind is parameter.POSITIONAL_OR_KEYWORD:
                keyword_mode = True
                bound_keywords[parameter.name] = _coerce_value(
                    option_tokens[parameter.name], parameter.annotation)
                continue
            if positional_index < len(positional_tokens):
                value = _coerce_value(
                    positional_tokens[positional_index], parameter.annotation)
                positional_index += 1
                if keyword_mode:
                    bound_keywords[parameter.name] = value
                else:
                    bound_positional.append(value)
            elif parameter.default is not parameter.empty:
                if not keyword_mode:
                    bound_positional.append(parameter.default)
            else:
                raise TypeError(f"Missing required argument: {parameter.name}")
        elif parameter.kind is parameter.KEYWORD_ONLY:
            if parameter.name in option_tokens:
                bound_keywords[parameter.name] = _coerce_value(
                    option_tokens[parameter.name], parameter.annotation)
            elif parameter.default is parameter.empty:
                raise TypeError(
                    f"Missing required option: --{parameter.name.replace('_', '-')}")

    remaining = positional_tokens[positional_index:]
    if var_positional is not None and keyword_mode and (remaining or unknown_tokens):
        raise TypeError("Extra arguments cannot follow a named positional argument.")
    if var_positional is not None:
        element_annotation: Any = str
        annotation_args = get_args(var_positional.annotation) or ()
        if get_origin(var_positional.annotation) is tuple and annotation_args:
            element_annotation = annotation_args[0]
        elif var_positional.annotation not in (var_positional.empty, Any):
            element_annotation = var_positional.annotation
        bound_positional.extend(
            _coerce_value(item, element_annotation) for item in remaining)
        bound_positional.extend(unknown_tokens)
    elif remaining:
        raise TypeError("Too many positional arguments.")

    return tuple(bound_positional), bound_keywords


def build_usage(command_name: str, func: Any) -> str:
    """
    Render a compact usage string based on `func` signature.

    Examples:
        'migrate <version> [step] [--dry-run] [args...]'
    """
    usage_parts = [argument.usage for argument in describe_arguments(func)]
    return f"{command_name} " + " ".join(usage_parts) if usage_parts else command_name
