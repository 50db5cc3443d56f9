# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/vmware/__init__.py
"""vSphere integration: inventory accessor interface and its pyVmomi client."""

from .inventory import ConfigChange, HostDescriptor, InventoryAccessor, ObjectKind, VmDescriptor

__all__ = [
    "ConfigChange",
    "HostDescriptor",
    "InventoryAccessor",
    "ObjectKind",
    "VmDescriptor",
]
