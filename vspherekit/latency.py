# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/latency.py
"""
VM latency sensitivity: read (bulk or per VM) and set (per VM).
"""
from __future__ import annotations

import enum
import logging
from typing import Any, List, Optional, Sequence

from .core.exceptions import ApiFault, ValidationError
from .core.logger import Log
from .core.policy import ErrorPolicy
from .reference.models import LatencyRecord
from .vmware.inventory import ConfigChange, InventoryAccessor, ObjectKind, VmDescriptor


class LatencyLevel(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    MEDIUM = "medium"
    HIGH = "high"


def validate_level(value: Any) -> LatencyLevel:
    if isinstance(value, LatencyLevel):
        return value
    s = str(value or "").strip().lower()
    try:
        return LatencyLevel(s)
    except ValueError:
        raise ValidationError(
            3,
            f"invalid latency sensitivity level {value!r} (expected one of: {', '.join(l.value for l in LatencyLevel)})",
        ) from None


def _record(vm: VmDescriptor) -> LatencyRecord:
    return LatencyRecord(vm_name=vm.name, level=vm.latency_level)


def get_latency(
    inventory: InventoryAccessor,
    names: Sequence[str] = (),
    *,
    policy: ErrorPolicy = ErrorPolicy.LENIENT,
    logger: Optional[logging.Logger] = None,
) -> List[LatencyRecord]:
    """
    No names: one batched inventory-wide query.
    With names: one lookup per VM, results in input order.
    """
    log = logger or logging.getLogger("vspherekit")

    if not names:
        vms = inventory.fetch_all(ObjectKind.VM)
        log.debug("Read latency sensitivity for %d VMs in one query", len(vms))
        return [_record(vm) for vm in vms]  # type: ignore[arg-type]

    out: List[LatencyRecord] = []
    for name in names:
        try:
            vm = inventory.fetch_by_name(ObjectKind.VM, name)
        except ApiFault as e:
            if policy is ErrorPolicy.STRICT:
                raise
            Log.warn(log, f"Could not read latency sensitivity: {e}", vm=name)
            out.append(LatencyRecord(vm_name=name, level=None, error=str(e)))
            continue
        out.append(_record(vm))  # type: ignore[arg-type]
    return out


def set_latency(
    inventory: InventoryAccessor,
    name: str,
    level: Any,
    *,
    logger: Optional[logging.Logger] = None,
) -> LatencyRecord:
    """
    Validate `level`, then issue exactly one reconfiguration for VM `name`.
    ApiFault propagates unchanged; nothing is retried or rolled back.
    """
    lvl = validate_level(level)
    log = Log.bind(logger or logging.getLogger("vspherekit"), vm=name, level=lvl.value)

    vm = inventory.fetch_by_name(ObjectKind.VM, name)
    if not isinstance(vm, VmDescriptor):
        raise ApiFault(30, f"{name} is not a virtual machine")

    log.info("Setting latency sensitivity (was %s)", vm.latency_level or "unset")
    inventory.reconfigure(vm, ConfigChange(latency_level=lvl.value))
    Log.ok(log, "Latency sensitivity updated")
    return LatencyRecord(vm_name=vm.name, level=lvl.value)
