#!/usr/bin/env python3
# railcmd/command/rails/plugin/__init__.py
