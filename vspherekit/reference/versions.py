# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/reference/versions.py
"""
ESXi build resolution against the virten release database.

The "latest build of a minor release" is picked in two explicit steps:
group records by minor release, then apply a LatestPolicy to the group.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.exceptions import FetchError, ValidationError
from ..vmware.inventory import HostDescriptor
from .models import BuildRecord, HostUpdate, HostVersion, UpdateCheck


class LatestPolicy(str, enum.Enum):
    """
    FIRST_IN_TABLE: first record of the group in document order. The release
    database lists newest builds first, so this is the top-down scan answer.
    HIGHEST_BUILD: numerically highest build number in the group.
    """

    FIRST_IN_TABLE = "first-in-table"
    HIGHEST_BUILD = "highest-build"

    @classmethod
    def parse(cls, value: Any) -> "LatestPolicy":
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().lower().replace("_", "-")
        try:
            return cls(s)
        except ValueError:
            raise ValidationError(
                3, f"invalid latest policy {value!r} (expected one of: {', '.join(p.value for p in cls)})"
            ) from None


def _release_entries(doc: Any) -> List[Any]:
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict):
        if isinstance(doc.get("esxiReleases"), list):
            return doc["esxiReleases"]
        data = doc.get("data")
        if isinstance(data, dict) and isinstance(data.get("esxiReleases"), list):
            return data["esxiReleases"]
    raise FetchError(13, "release database has no esxiReleases list")


class BuildTable:
    def __init__(self, records: Iterable[BuildRecord], logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("vspherekit")
        self._records: List[BuildRecord] = []
        self._by_build: Dict[int, BuildRecord] = {}
        for rec in records:
            if rec.build in self._by_build:
                self.logger.warning("Duplicate build %s in release database; keeping first entry", rec.build)
                continue
            self._by_build[rec.build] = rec
            self._records.append(rec)

    @classmethod
    def from_document(cls, doc: Any, logger: Optional[logging.Logger] = None) -> "BuildTable":
        records: List[BuildRecord] = []
        for entry in _release_entries(doc):
            if not isinstance(entry, dict):
                continue
            rec = BuildRecord.from_json(entry)
            if rec is None:
                if logger:
                    logger.debug("Skipping release entry without numeric build: %r", entry.get("build"))
                continue
            records.append(rec)
        return cls(records, logger)

    @property
    def records(self) -> Sequence[BuildRecord]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, build: int) -> Optional[BuildRecord]:
        """Exact lookup; None means the build is not in the database."""
        return self._by_build.get(int(build))

    def groups(self) -> Dict[str, List[BuildRecord]]:
        """minor release -> records, both in document order."""
        out: Dict[str, List[BuildRecord]] = {}
        for rec in self._records:
            out.setdefault(rec.minor_release, []).append(rec)
        return out

    def latest_in_group(self, minor_release: str, policy: LatestPolicy = LatestPolicy.FIRST_IN_TABLE) -> Optional[BuildRecord]:
        group = self.groups().get(minor_release) or []
        if not group:
            return None
        if policy is LatestPolicy.HIGHEST_BUILD:
            return max(group, key=lambda r: r.build)
        return group[0]

    def resolve_latest(self, build: int, policy: LatestPolicy = LatestPolicy.FIRST_IN_TABLE) -> UpdateCheck:
        current = self.resolve(build)
        if current is None:
            return UpdateCheck(current=None, latest=None, update_available=None)
        latest = self.latest_in_group(current.minor_release, policy) or current
        return UpdateCheck(current=current, latest=latest, update_available=latest.build != current.build)


def host_versions(hosts: Iterable[HostDescriptor], table: BuildTable, logger: Optional[logging.Logger] = None) -> List[HostVersion]:
    out: List[HostVersion] = []
    for h in hosts:
        if h.build is None:
            if logger:
                logger.debug("Host %s reports no build number; skipped", h.name)
            continue
        out.append(HostVersion.from_record(h.name, h.build, table.resolve(h.build)))
    return out


def host_updates(
    hosts: Iterable[HostDescriptor],
    table: BuildTable,
    policy: LatestPolicy = LatestPolicy.FIRST_IN_TABLE,
    logger: Optional[logging.Logger] = None,
) -> List[HostUpdate]:
    out: List[HostUpdate] = []
    for h in hosts:
        if h.build is None:
            if logger:
                logger.debug("Host %s reports no build number; skipped", h.name)
            continue
        out.append(HostUpdate.from_check(h.name, h.build, table.resolve_latest(h.build, policy)))
    return out
