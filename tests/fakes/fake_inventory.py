# SPDX-License-Identifier: GPL-2.0-or-later
from vspherekit.core.exceptions import ApiFault
from vspherekit.vmware.inventory import HostDescriptor, InventoryAccessor, ObjectKind, VmDescriptor


class FakeInventory(InventoryAccessor):
    """In-memory inventory that records every call."""

    def __init__(self, hosts=None, vms=None, faults=None):
        # hosts: {name: build}, vms: {name: level}, faults: {name: message}
        self.hosts = dict(hosts or {})
        self.vms = dict(vms or {})
        self.faults = dict(faults or {})
        self.calls = []

    def fetch_all(self, kind):
        self.calls.append(("fetch_all", kind))
        if kind is ObjectKind.HOST:
            return [HostDescriptor(name=n, build=b) for n, b in self.hosts.items()]
        return [VmDescriptor(name=n, latency_level=lvl) for n, lvl in self.vms.items()]

    def fetch_by_name(self, kind, name):
        self.calls.append(("fetch_by_name", kind, name))
        if name in self.faults:
            raise ApiFault(30, self.faults[name])
        table = self.hosts if kind is ObjectKind.HOST else self.vms
        if name not in table:
            raise ApiFault(11, f"{kind.value} not found: {name}")
        if kind is ObjectKind.HOST:
            return HostDescriptor(name=name, build=table[name])
        return VmDescriptor(name=name, latency_level=table[name])

    def reconfigure(self, vm, change):
        self.calls.append(("reconfigure", vm.name, change.latency_level))
        self.vms[vm.name] = change.latency_level

    def reconfigures(self):
        return [c for c in self.calls if c[0] == "reconfigure"]
