#!/usr/bin/env python3
# railcmd/settings/config.py
from __future__ import annotations

"""
Layered configuration for the command engine.

Sources, later ones override earlier ones:
  1) DEFAULTS below
  2) Files in the base directory (CWD by default), in this order:
     .env, railcmd.ini, railcmd.json, railcmd.toml
  3) Environment variables prefixed RAILCMD_ (prefix stripped)

Nested JSON/TOML tables are flattened, so `[log] level = "debug"` sets
LOG_LEVEL. INI section names are ignored.

Keys:
  - PLUGIN_PATH: directory prepended to sys.path at boot ("none" disables)
  - LOOKUP_PATHS / GENERATOR_LOOKUP_PATHS: comma lists of dotted packages
  - HIDDEN_NAMESPACES: comma list of namespaces kept out of listings
  - SUGGESTION_COUNT: int >= 1
  - PROGRAM_NAME: name shown in usage and "Run ... --help" hints
  - LOG_LEVEL / LOG_FILE_PATH: logging setup
  - NO_COLOR / ENABLE_COMPLETION: booleans
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

ENV_PREFIX = "RAILCMD_"

DEFAULTS: dict[str, Any] = {
    "PLUGIN_PATH": ".",
    "LOOKUP_PATHS": "railcmd.command,command",
    "GENERATOR_LOOKUP_PATHS": "railcmd.generators,generators",
    "HIDDEN_NAMESPACES": "",
    "SUGGESTION_COUNT": 3,
    "PROGRAM_NAME": "rails",
    "LOG_LEVEL": "WARNING",
    "LOG_FILE_PATH": None,
    "NO_COLOR": False,
    "ENABLE_COMPLETION": True,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    plugin_path: Path | None
    lookup_paths: tuple[str, ...]
    generator_lookup_paths: tuple[str, ...]
    hidden_namespaces: tuple[str, ...]
    suggestion_count: int
    program_name: str
    log_level: str
    log_file_path: Path | None
    no_color: bool
    enable_completion: bool
    # Keys nobody reads, kept for debugging
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- readers ----------

_DOTENV_LINE = re.compile(r"^(?:export\s+)?([A-Za-z_]\w*)\s*=\s*(.*)$")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def _read_dotenv(path: Path) -> dict[str, Any]:
    """KEY=VALUE lines; blank lines and # comments skipped, surrounding quotes dropped."""
    values: dict[str, Any] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        match = _DOTENV_LINE.match(line.strip())
        if match and not line.lstrip().startswith("#"):
            values[match.group(1)] = _unquote(match.group(2).strip())
    return values


def _read_ini(path: Path) -> dict[str, Any]:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return {}
    return _flatten(data) if isinstance(data, dict) else {}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return _flatten(tomllib.loads(path.read_text(encoding="utf-8")))
    except tomllib.TOMLDecodeError:
        return {}


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """{'log': {'level': 'debug'}} -> {'log_level': 'debug'}."""
    flat: dict[str, Any] = {}
    for key, value in table.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


# File name -> reader, in override order
CONFIG_FILES: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _read_dotenv),
    ("railcmd.ini", _read_ini),
    ("railcmd.json", _read_json),
    ("railcmd.toml", _read_toml),
)


# ---------- coercion ----------

def _text(value: Any) -> str | None:
    """None for None, '' and 'none' (any case)."""
    if value is None:
        return None
    text = str(value).strip()
    return None if text.lower() in ("", "none") else text


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"{key}: expected boolean, got {value!r}")


def _to_count(key: str, value: Any) -> int:
    try:
        count = value if isinstance(value, int) and not isinstance(value, bool) else int(str(value).strip())
    except ValueError:
        raise ValueError(f"{key}: expected integer, got {value!r}") from None
    if count < 1:
        raise ValueError(f"{key} must be >= 1, got {count}")
    return count


def _to_list(key: str, value: Any) -> tuple[str, ...]:
    items = value if isinstance(value, (list, tuple)) else str(value or "").split(",")
    return tuple(item for item in (str(raw).strip() for raw in items) if item)


_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")


def _to_packages(key: str, value: Any) -> tuple[str, ...]:
    packages = _to_list(key, value)
    if not packages:
        raise ValueError(f"{key} must name at least one package")
    for package in packages:
        if not _DOTTED_NAME.fullmatch(package):
            raise ValueError(f"{key} entries must be dotted package names, got {package!r}")
    return packages


def _to_name(key: str, value: Any) -> str:
    text = _text(value)
    if text is None:
        raise ValueError(f"{key} must not be empty")
    return text


def _to_log_level(key: str, value: Any) -> str:
    level = (_text(value) or "WARNING").upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{key} must be one of {list(LOG_LEVELS)}, got {value!r}")
    return level


def _to_path(key: str, value: Any) -> Path | None:
    text = _text(value)
    if text is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(text))).resolve()


# Config key -> (AppConfig field, coercer)
FIELDS: dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "PLUGIN_PATH": ("plugin_path", _to_path),
    "LOOKUP_PATHS": ("lookup_paths", _to_packages),
    "GENERATOR_LOOKUP_PATHS": ("generator_lookup_paths", _to_packages),
    "HIDDEN_NAMESPACES": ("hidden_namespaces", _to_list),
    "SUGGESTION_COUNT": ("suggestion_count", _to_count),
    "PROGRAM_NAME": ("program_name", _to_name),
    "LOG_LEVEL": ("log_level", _to_log_level),
    "LOG_FILE_PATH": ("log_file_path", _to_path),
    "NO_COLOR": ("no_color", _to_bool),
    "ENABLE_COMPLETION": ("enable_completion", _to_bool),
}


# ---------- assembly ----------

def _upper_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).upper(): value for key, value in values.items()}


def _build(raw: Mapping[str, Any]) -> AppConfig:
    values = {**DEFAULTS, **_upper_keys(raw)}
    kwargs = {name: coerce(key, values[key]) for key, (name, coerce) in FIELDS.items()}
    extra = {key: value for key, value in values.items() if key not in FIELDS}
    return AppConfig(**kwargs, extra=extra)


def load_config(
    base: Path | None = None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """
    Read every source, merge them and validate the result.

    Never writes anything. Raises ValueError naming the offending key.
    """
    directory = base or Path.cwd()
    merged: dict[str, Any] = {}
    for file_name, reader in CONFIG_FILES:
        path = directory / file_name
        if path.is_file():
            merged.update(_upper_keys(reader(path)))

    env = os.environ if environ is None else environ
    merged.update(
        (key[len(ENV_PREFIX):], value)
        for key, value in env.items()
        if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)
    )
    return _build(merged)


def config_from_mapping(values: Mapping[str, Any]) -> AppConfig:
    """Defaults plus `values`; no files, no environment."""
    return _build(values)
