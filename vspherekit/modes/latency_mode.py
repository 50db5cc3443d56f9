# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/modes/latency_mode.py
from __future__ import annotations

from typing import List

from ..core.exceptions import ApiFault
from ..latency import get_latency, set_latency, validate_level
from ..reference.models import LatencyRecord
from ..vmware.vsphere.errors import classify_exit_code
from .base import BaseMode


class LatencyGetMode(BaseMode):
    title = "VM latency sensitivity"

    def run(self) -> int:
        with self.inventory() as inv:
            records = get_latency(inv, self.names("vm"), policy=self.policy, logger=self.logger)
        self.emit(records)
        # lenient: failed lookups are rows with `error` set
        for r in records:
            if r.error:
                self.failures.append(classify_exit_code(ApiFault(msg=r.error)))
        return self.exit_code()


class LatencySetMode(BaseMode):
    title = "VM latency sensitivity"

    def run(self) -> int:
        # Bad level: fail before a session is opened.
        level = validate_level(getattr(self.args, "level", None))
        records: List[LatencyRecord] = []
        with self.inventory() as inv:
            for name in self.names("vm"):
                try:
                    records.append(set_latency(inv, name, level, logger=self.logger))
                except ApiFault as e:
                    self.target_failed(e, vm=name)
                    records.append(LatencyRecord(vm_name=name, level=None, error=str(e)))
        self.emit(records)
        return self.exit_code()
