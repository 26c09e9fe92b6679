#!/usr/bin/env python3
# railcmd/__init__.py
from __future__ import annotations
"""
railcmd: command discovery and dispatch.

    import railcmd
    railcmd.invoke("console", ["--sandbox"])

Avoid eager imports here; `railcmd.commands` and `railcmd.interface`
expose their APIs via their own __init__.py files.
"""

from typing import Any, Mapping, Optional, Sequence

__version__ = "0.1.0"


def invoke(
    namespace: str,
    args: Optional[Sequence[str]] = None,
    config: Optional[Mapping[str, Any]] = None,
):
    """Resolve and run `namespace` on the process-wide command engine."""
    from railcmd.boot import default_engine

    return default_engine().invoke(namespace, args, config)


__all__ = ["invoke", "__version__"]
