# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/reference/models.py
"""
Typed records for the reference databases and the reports built from them.

Every record is a frozen dataclass; a lookup that finds nothing is expressed
either as None (resolver level) or as the UNKNOWN sentinel (report level).
"""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.utils import U

UNKNOWN = "Unknown"

log = logging.getLogger("vspherekit")


def _parse_date(v: Any) -> Optional[_dt.date]:
    s = U.to_text(v).strip()
    if not s:
        return None
    try:
        return _dt.date.fromisoformat(s[:10])
    except ValueError:
        log.debug("Unparseable releaseDate %r", s)
        return None


@dataclass(frozen=True)
class BuildRecord:
    build: int
    friendly_name: str
    release_date: Optional[_dt.date]
    minor_release: str
    update_release: str
    image_profile: str

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> Optional["BuildRecord"]:
        """Build from a virten release entry; None when `build` is not numeric."""
        build = U.as_int(d.get("build"))
        if build is None:
            return None
        return cls(
            build=build,
            friendly_name=U.to_text(d.get("friendlyName")).strip(),
            release_date=_parse_date(d.get("releaseDate")),
            minor_release=U.to_text(d.get("minorRelease")).strip(),
            update_release=U.to_text(d.get("updateRelease")).strip(),
            image_profile=U.to_text(d.get("imageProfile")).strip(),
        )


@dataclass(frozen=True)
class UpdateCheck:
    """
    Result of resolving a build against its minor-release group.

    update_available is tri-state: None when the current build is unknown.
    """
    current: Optional[BuildRecord]
    latest: Optional[BuildRecord]
    update_available: Optional[bool]


@dataclass(frozen=True)
class HostVersion:
    host: str
    build: int
    friendly_name: str = UNKNOWN
    release_date: str = UNKNOWN
    minor_release: str = UNKNOWN
    update_release: str = UNKNOWN
    image_profile: str = UNKNOWN

    @classmethod
    def from_record(cls, host: str, build: int, rec: Optional[BuildRecord]) -> "HostVersion":
        if rec is None:
            return cls(host=host, build=build)
        return cls(
            host=host,
            build=build,
            friendly_name=rec.friendly_name or UNKNOWN,
            release_date=rec.release_date.isoformat() if rec.release_date else UNKNOWN,
            minor_release=rec.minor_release or UNKNOWN,
            update_release=rec.update_release or UNKNOWN,
            image_profile=rec.image_profile or UNKNOWN,
        )


@dataclass(frozen=True)
class HostUpdate:
    host: str
    current_build: int
    current_name: str = UNKNOWN
    latest_build: Optional[int] = None
    latest_name: str = UNKNOWN
    latest_release_date: str = UNKNOWN
    latest_image_profile: str = UNKNOWN
    update_available: Optional[bool] = None

    @classmethod
    def from_check(cls, host: str, build: int, chk: UpdateCheck) -> "HostUpdate":
        if chk.current is None or chk.latest is None:
            return cls(host=host, current_build=build)
        latest = chk.latest
        return cls(
            host=host,
            current_build=build,
            current_name=chk.current.friendly_name or UNKNOWN,
            latest_build=latest.build,
            latest_name=latest.friendly_name or UNKNOWN,
            latest_release_date=latest.release_date.isoformat() if latest.release_date else UNKNOWN,
            latest_image_profile=latest.image_profile or UNKNOWN,
            update_available=chk.update_available,
        )


@dataclass(frozen=True)
class StatusCodeEntry:
    code: str
    name: str
    description: str


@dataclass(frozen=True)
class DecodedEntry:
    category: str
    code: str
    name: str
    description: str


@dataclass(frozen=True)
class LatencyRecord:
    vm_name: str
    level: Optional[str]
    error: Optional[str] = None
