"""Tests for configuration loading."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from railcmd.settings import AppConfig, config_from_mapping, load_config


def test_defaults(tmp_path: Path) -> None:
    """With no files and no environment the built-in defaults apply."""
    config = load_config(base=tmp_path, environ={})

    assert isinstance(config, AppConfig)
    assert config.lookup_paths == ("railcmd.command", "command")
    assert config.generator_lookup_paths == ("railcmd.generators", "generators")
    assert config.hidden_namespaces == ()
    assert config.suggestion_count == 3
    assert config.program_name == "rails"
    assert config.log_level == "WARNING"
    assert config.log_file_path is None
    assert config.no_color is False
    assert config.enable_completion is True
    assert config.plugin_path == Path(".").resolve()


def test_files_merge_in_order(tmp_path: Path) -> None:
    """.env, ini, json and toml all contribute; later files win."""
    (tmp_path / ".env").write_text('SUGGESTION_COUNT=5\nPROGRAM_NAME="from-env-file"\n')
    (tmp_path / "railcmd.ini").write_text("[railcmd]\nlookup_paths = app.command, command\n")
    (tmp_path / "railcmd.json").write_text(json.dumps({"hidden_namespaces": ["db", "secret"]}))
    (tmp_path / "railcmd.toml").write_text('program_name = "bin/rails"\n\n[log]\nlevel = "debug"\n')

    config = load_config(base=tmp_path, environ={})

    assert config.suggestion_count == 5
    assert config.lookup_paths == ("app.command", "command")
    assert config.hidden_namespaces == ("db", "secret")
    assert config.program_name == "bin/rails"
    assert config.log_level == "DEBUG"


def test_environment_overrides_files(tmp_path: Path) -> None:
    """RAILCMD_ variables beat every file."""
    (tmp_path / "railcmd.toml").write_text('program_name = "bin/rails"\n')

    config = load_config(
        base=tmp_path,
        environ={"RAILCMD_PROGRAM_NAME": "./rails", "RAILCMD_NO_COLOR": "yes", "PROGRAM_NAME": "ignored"},
    )

    assert config.program_name == "./rails"
    assert config.no_color is True


def test_unknown_keys_are_kept(tmp_path: Path) -> None:
    """Keys the loader does not know end up in `extra`."""
    config = load_config(base=tmp_path, environ={"RAILCMD_FAVOURITE_COLOR": "green"})

    assert config.extra == {"FAVOURITE_COLOR": "green"}


@pytest.mark.parametrize(
    ("values", "message"),
    [
        ({"SUGGESTION_COUNT": "0"}, "SUGGESTION_COUNT"),
        ({"SUGGESTION_COUNT": "many"}, "integer"),
        ({"PROGRAM_NAME": ""}, "PROGRAM_NAME"),
        ({"LOG_LEVEL": "loud"}, "LOG_LEVEL"),
        ({"NO_COLOR": "maybe"}, "boolean"),
        ({"LOOKUP_PATHS": ""}, "LOOKUP_PATHS"),
        ({"LOOKUP_PATHS": "app/command"}, "dotted package"),
    ],
)
def test_invalid_values_raise(values: dict, message: str) -> None:
    """Bad values are rejected with a message naming the problem."""
    with pytest.raises(ValueError, match=message):
        config_from_mapping(values)


def test_config_from_mapping_accepts_lowercase_keys() -> None:
    """Keys are normalized to upper case."""
    config = config_from_mapping({"log_level": "info", "plugin_path": "none"})

    assert config.log_level == "INFO"
    assert config.plugin_path is None
    assert logging.getLevelName(config.log_level) == logging.INFO
