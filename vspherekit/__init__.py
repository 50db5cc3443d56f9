# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/__init__.py
"""
vspherekit - small vSphere operations toolkit

  * ESXi build -> release name / date / patch level, and newest build of the
    same minor release (virten.net release database)
  * SCSI host/device/plugin status and sense code decoding
  * VM latency sensitivity read and write

Usage as a library:

    from vspherekit import BuildTable, ReferenceFetcher, VMwareClient, host_updates

    with ReferenceFetcher(logger) as f:
        table = BuildTable.from_document(f.fetch_json(VERSION_DB_URL))
    with VMwareClient(logger, "vcsa.example.com", user, password) as vc:
        hosts = vc.fetch_all(ObjectKind.HOST)
    for row in host_updates(hosts, table):
        print(row.host, row.current_build, row.latest_build, row.update_available)
"""

__version__ = "0.1.0"

from .core import ApiFault, Fatal, FetchError, Log, ValidationError, VsphereKitError
from .core.policy import ErrorPolicy
from .latency import LatencyLevel, get_latency, set_latency, validate_level
from .reference import (
    UNKNOWN,
    BuildRecord,
    BuildTable,
    DecodedEntry,
    HostUpdate,
    HostVersion,
    LatencyRecord,
    LatestPolicy,
    ReferenceFetcher,
    ScsiCodes,
    ScsiCodeTables,
    UpdateCheck,
    host_updates,
    host_versions,
    normalize_code,
    parse_sense_line,
)
from .reference.fetcher import SCSI_DB_URL, UPDATE_DB_URL, VERSION_DB_URL
from .vmware import ConfigChange, HostDescriptor, InventoryAccessor, ObjectKind, VmDescriptor
from .vmware.clients import VMwareClient

__all__ = [
    "__version__",
    # Errors / logging
    "ApiFault",
    "Fatal",
    "FetchError",
    "Log",
    "ValidationError",
    "VsphereKitError",
    "ErrorPolicy",
    # Reference data
    "UNKNOWN",
    "BuildRecord",
    "BuildTable",
    "DecodedEntry",
    "HostUpdate",
    "HostVersion",
    "LatencyRecord",
    "LatestPolicy",
    "ReferenceFetcher",
    "ScsiCodes",
    "ScsiCodeTables",
    "UpdateCheck",
    "host_updates",
    "host_versions",
    "normalize_code",
    "parse_sense_line",
    "SCSI_DB_URL",
    "UPDATE_DB_URL",
    "VERSION_DB_URL",
    # Inventory
    "ConfigChange",
    "HostDescriptor",
    "InventoryAccessor",
    "ObjectKind",
    "VmDescriptor",
    "VMwareClient",
    # Latency
    "LatencyLevel",
    "get_latency",
    "set_latency",
    "validate_level",
]
