# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/modes/version_mode.py
from __future__ import annotations

from typing import List

from ..core.exceptions import ApiFault
from ..reference.fetcher import UPDATE_DB_URL, VERSION_DB_URL
from ..reference.versions import BuildTable, LatestPolicy, host_updates, host_versions
from ..vmware.inventory import HostDescriptor, InventoryAccessor, ObjectKind
from .base import BaseMode


class _HostMode(BaseMode):
    db_url_key = "version_db_url"
    default_db_url = VERSION_DB_URL

    def load_table(self) -> BuildTable:
        url = getattr(self.args, self.db_url_key, None) or self.default_db_url
        with self.fetcher() as f:
            doc = f.fetch_json(url)
        table = BuildTable.from_document(doc, self.logger)
        self.logger.debug("Build table: %d records from %s", len(table), url)
        return table

    def collect_hosts(self, inv: InventoryAccessor) -> List[HostDescriptor]:
        names = self.names("host")
        if not names:
            return [h for h in inv.fetch_all(ObjectKind.HOST) if isinstance(h, HostDescriptor)]
        out: List[HostDescriptor] = []
        for name in names:
            try:
                h = inv.fetch_by_name(ObjectKind.HOST, name)
            except ApiFault as e:
                self.target_failed(e, host=name)
                continue
            if isinstance(h, HostDescriptor):
                out.append(h)
        return out


class HostVersionMode(_HostMode):
    """ESXi build number -> release details, one row per host."""

    title = "ESXi host versions"

    def run(self) -> int:
        # Reference data first: a fetch failure means no vCenter session and no output.
        table = self.load_table()
        with self.inventory() as inv:
            hosts = self.collect_hosts(inv)
        self.emit(host_versions(hosts, table, self.logger))
        return self.exit_code()


class HostUpdateMode(_HostMode):
    """Current build vs newest build of the same minor release."""

    title = "ESXi host updates"
    db_url_key = "update_db_url"
    default_db_url = UPDATE_DB_URL

    def run(self) -> int:
        policy = LatestPolicy.parse(getattr(self.args, "latest_policy", None) or LatestPolicy.FIRST_IN_TABLE)
        table = self.load_table()
        with self.inventory() as inv:
            hosts = self.collect_hosts(inv)
        self.emit(host_updates(hosts, table, policy, self.logger))
        return self.exit_code()
