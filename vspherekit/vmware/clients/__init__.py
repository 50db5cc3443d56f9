# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/vmware/clients/__init__.py
"""
vSphere API client modules.

- client: pyVmomi-backed InventoryAccessor
"""

from .client import VMwareClient

__all__ = ["VMwareClient"]
