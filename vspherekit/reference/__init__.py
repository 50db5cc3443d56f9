# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/reference/__init__.py
"""
virten.net reference databases: fetching, ESXi build resolution, SCSI code decoding.
"""

from .fetcher import ReferenceFetcher
from .models import UNKNOWN, BuildRecord, DecodedEntry, HostUpdate, HostVersion, LatencyRecord, UpdateCheck
from .scsi import ScsiCodeTables, ScsiCodes, normalize_code, parse_sense_line
from .versions import BuildTable, LatestPolicy, host_updates, host_versions

__all__ = [
    "UNKNOWN",
    "BuildRecord",
    "BuildTable",
    "DecodedEntry",
    "HostUpdate",
    "HostVersion",
    "LatencyRecord",
    "LatestPolicy",
    "ReferenceFetcher",
    "ScsiCodeTables",
    "ScsiCodes",
    "UpdateCheck",
    "host_updates",
    "host_versions",
    "normalize_code",
    "parse_sense_line",
]
