#!/usr/bin/env python3
# railcmd/helpers/__init__.py
from __future__ import annotations

from .distance import levenshtein_distance
from .environment import DEFAULT_ENVIRONMENT, environment

__all__ = [
    "levenshtein_distance",
    "environment",
    "DEFAULT_ENVIRONMENT",
]
