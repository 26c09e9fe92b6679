#!/usr/bin/env python3
# railcmd/command/__init__.py
from __future__ import annotations
"""
Built-in commands, found by the loader under the `railcmd.command` base.
"""
