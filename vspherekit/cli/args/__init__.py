# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/args/__init__.py
"""
Argument parser modules for the vspherekit CLI.
"""
from __future__ import annotations

from .builder import HelpFormatter
from .groups import COMMANDS
from .parser import build_parser, parse_args_with_config
from .validators import validate_args

__all__ = [
    "COMMANDS",
    "HelpFormatter",
    "build_parser",
    "parse_args_with_config",
    "validate_args",
]
