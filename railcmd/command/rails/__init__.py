#!/usr/bin/env python3
# railcmd/command/rails/__init__.py
from __future__ import annotations
"""Commands in the reserved `rails` namespace."""
