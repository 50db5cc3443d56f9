# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/core/__init__.py
"""Shared plumbing: errors, logging, small helpers."""

from .exceptions import ApiFault, Fatal, FetchError, ValidationError, VsphereKitError
from .logger import Log

__all__ = [
    "ApiFault",
    "Fatal",
    "FetchError",
    "Log",
    "ValidationError",
    "VsphereKitError",
]
