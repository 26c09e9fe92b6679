#!/usr/bin/env python3
# railcmd/settings/__init__.py
from __future__ import annotations

"""
Package for configuration.

Provides:
- Layered configuration loader with RAILCMD_ environment overrides (`config`).
"""


from .config import AppConfig, DEFAULTS, ENV_PREFIX, load_config, config_from_mapping

__all__ = [
    "AppConfig",
    "DEFAULTS",
    "ENV_PREFIX",
    "load_config",
    "config_from_mapping",
]
