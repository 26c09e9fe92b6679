#!/usr/bin/env python3
# railcmd/command/rails/help/__init__.py
