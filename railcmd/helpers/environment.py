#!/usr/bin/env python3
# railcmd/helpers/environment.py
from __future__ import annotations

import os

DEFAULT_ENVIRONMENT = "development"


def environment() -> str:
    """Return the active application environment (RAILS_ENV, then RACK_ENV)."""
    return (
        os.environ.get("RAILS_ENV")
        or os.environ.get("RACK_ENV")
        or DEFAULT_ENVIRONMENT
    )
