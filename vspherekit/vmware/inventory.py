# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/vmware/inventory.py
"""
Inventory accessor interface.

Callers only see descriptors (name + the properties they asked for) and pass
them back for reconfiguration; the SDK object rides along in `ref`.
"""
from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


class ObjectKind(str, enum.Enum):
    HOST = "host"
    VM = "vm"


@dataclass(frozen=True)
class HostDescriptor:
    name: str
    build: Optional[int]
    ref: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class VmDescriptor:
    name: str
    latency_level: Optional[str]
    ref: Any = field(default=None, compare=False, repr=False)


Descriptor = Union[HostDescriptor, VmDescriptor]


@dataclass(frozen=True)
class ConfigChange:
    latency_level: Optional[str] = None

    def is_empty(self) -> bool:
        return self.latency_level is None


class InventoryAccessor(ABC):
    @abstractmethod
    def fetch_all(self, kind: ObjectKind) -> List[Descriptor]:
        """Every object of `kind`, in one batched query."""

    @abstractmethod
    def fetch_by_name(self, kind: ObjectKind, name: str) -> Descriptor:
        """A single object by exact name; ApiFault when it does not exist."""

    @abstractmethod
    def reconfigure(self, vm: VmDescriptor, change: ConfigChange) -> None:
        """Apply `change` with one reconfiguration request; ApiFault on failure."""
