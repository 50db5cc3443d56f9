# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/reference/scsi.py
"""
SCSI status / sense code decoding.

vmkernel reports failed commands as e.g.

    Cmd 0x2a ... Failed: H:0x0 D:0x2 P:0x0 Valid sense data: 0x5 0x24 0x0

H/D/P are host, device and plugin status, the sense triple is
sense key / ASC / ASCQ and Cmd is the SCSI operation code.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from ..core.exceptions import FetchError, ValidationError
from .models import DecodedEntry, StatusCodeEntry

UNKNOWN_NAME = "UNKNOWN"

HOST_STATUS = "Host Status"
DEVICE_STATUS = "Device Status"
PLUGIN_STATUS = "Plugin Status"
SENSE_KEY = "Sense Key"
ADDITIONAL_SENSE = "Additional Sense Data"
OP_CODE = "Operation Code"

_HEX_RE = r"(?:0x)?([0-9a-f]+)"
_LINE_PATTERNS = {
    "host_status": re.compile(r"\bH:" + _HEX_RE, re.I),
    "device_status": re.compile(r"\bD:" + _HEX_RE, re.I),
    "plugin_status": re.compile(r"\bP:" + _HEX_RE, re.I),
    # "Cmd 0x2a" (NMP) and "Cmd(0x45a2c0d3c0c0) 0x2a" (ScsiDeviceIO)
    "op_code": re.compile(r"\bcmd(?:\(0x[0-9a-f]+\))?\s+" + _HEX_RE, re.I),
}
_SENSE_RE = re.compile(r"sense data:\s*" + _HEX_RE + r"\s+" + _HEX_RE + r"\s+" + _HEX_RE, re.I)


def normalize_code(value: Any) -> Optional[str]:
    """'5', '05', '0x5' -> '05'; blank -> None."""
    if value is None:
        return None
    s = str(value).strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    if not s:
        return None
    return s.zfill(2)


@dataclass(frozen=True)
class ScsiCodes:
    host_status: Optional[str] = None
    device_status: Optional[str] = None
    plugin_status: Optional[str] = None
    sense_key: Optional[str] = None
    asc: Optional[str] = None
    ascq: Optional[str] = None
    op_code: Optional[str] = None

    def is_empty(self) -> bool:
        return all(normalize_code(getattr(self, f.name)) is None for f in fields(self))


def parse_sense_line(text: str) -> ScsiCodes:
    """Pull every recognizable code out of a vmkernel log line."""
    found: Dict[str, str] = {}
    for key, rx in _LINE_PATTERNS.items():
        m = rx.search(text or "")
        if m:
            found[key] = m.group(1)
    m = _SENSE_RE.search(text or "")
    if m:
        found["sense_key"], found["asc"], found["ascq"] = m.group(1), m.group(2), m.group(3)
    if not found:
        raise ValidationError(3, "no SCSI status or sense codes found in log line", context={"line": text})
    return ScsiCodes(**found)


def _entry(code: str, raw: Any) -> StatusCodeEntry:
    if isinstance(raw, dict):
        return StatusCodeEntry(
            code=code,
            name=str(raw.get("name") or "").strip(),
            description=str(raw.get("description") or "").strip(),
        )
    # bare string values are a name with no description
    return StatusCodeEntry(code=code, name=str(raw).strip(), description="")


def _flat_table(raw: Any, section: str) -> Dict[str, StatusCodeEntry]:
    out: Dict[str, StatusCodeEntry] = {}
    if raw is None:
        return out
    if isinstance(raw, dict):
        items = list(raw.items())
    elif isinstance(raw, list):
        items = [(e.get("code"), e) for e in raw if isinstance(e, dict)]
    else:
        raise FetchError(13, f"SCSI database section {section!r} has unexpected type {type(raw).__name__}")
    for k, v in items:
        code = normalize_code(k)
        if code is not None:
            out[code] = _entry(code, v)
    return out


def _pair_table(raw: Any) -> Dict[str, Dict[str, StatusCodeEntry]]:
    out: Dict[str, Dict[str, StatusCodeEntry]] = {}
    if raw is None:
        return out
    if isinstance(raw, dict):
        for asc_k, inner in raw.items():
            asc = normalize_code(asc_k)
            if asc is None or not isinstance(inner, dict):
                continue
            for ascq_k, v in inner.items():
                ascq = normalize_code(ascq_k)
                if ascq is not None:
                    out.setdefault(asc, {})[ascq] = _entry(f"{asc}/{ascq}", v)
        return out
    if isinstance(raw, list):
        for e in raw:
            if not isinstance(e, dict):
                continue
            asc, ascq = normalize_code(e.get("asc")), normalize_code(e.get("ascq"))
            if asc is not None and ascq is not None:
                out.setdefault(asc, {})[ascq] = _entry(f"{asc}/{ascq}", e)
        return out
    raise FetchError(13, f"SCSI database section 'additionalSenseData' has unexpected type {type(raw).__name__}")


class ScsiCodeTables:
    def __init__(
        self,
        *,
        host_status: Optional[Dict[str, StatusCodeEntry]] = None,
        device_status: Optional[Dict[str, StatusCodeEntry]] = None,
        plugin_status: Optional[Dict[str, StatusCodeEntry]] = None,
        sense_key: Optional[Dict[str, StatusCodeEntry]] = None,
        additional_sense: Optional[Dict[str, Dict[str, StatusCodeEntry]]] = None,
        op_code: Optional[Dict[str, StatusCodeEntry]] = None,
    ) -> None:
        self.host_status = host_status or {}
        self.device_status = device_status or {}
        self.plugin_status = plugin_status or {}
        self.sense_key = sense_key or {}
        self.additional_sense = additional_sense or {}
        self.op_code = op_code or {}

    @classmethod
    def from_document(cls, doc: Any) -> "ScsiCodeTables":
        if not isinstance(doc, dict):
            raise FetchError(13, "SCSI database is not a JSON object")
        data = doc.get("data") if isinstance(doc.get("data"), dict) else doc
        return cls(
            host_status=_flat_table(data.get("hostStatus"), "hostStatus"),
            device_status=_flat_table(data.get("deviceStatus"), "deviceStatus"),
            plugin_status=_flat_table(data.get("pluginStatus"), "pluginStatus"),
            sense_key=_flat_table(data.get("senseKey"), "senseKey"),
            additional_sense=_pair_table(data.get("additionalSenseData")),
            op_code=_flat_table(data.get("opCode"), "opCode"),
        )

    @staticmethod
    def _lookup(category: str, code: str, hit: Optional[StatusCodeEntry]) -> DecodedEntry:
        if hit is None:
            return DecodedEntry(
                category=category,
                code=code,
                name=UNKNOWN_NAME,
                description=f"No description available for this {category} code",
            )
        return DecodedEntry(category=category, code=code, name=hit.name or UNKNOWN_NAME, description=hit.description)

    def decode(self, codes: ScsiCodes) -> List[DecodedEntry]:
        """
        One entry per supplied code, always in the order
        host, device, plugin, sense key, asc/ascq, op code.
        """
        out: List[DecodedEntry] = []
        singles = (
            (HOST_STATUS, codes.host_status, self.host_status),
            (DEVICE_STATUS, codes.device_status, self.device_status),
            (PLUGIN_STATUS, codes.plugin_status, self.plugin_status),
            (SENSE_KEY, codes.sense_key, self.sense_key),
        )
        for category, raw, table in singles:
            code = normalize_code(raw)
            if code is not None:
                out.append(self._lookup(category, code, table.get(code)))

        asc, ascq = normalize_code(codes.asc), normalize_code(codes.ascq)
        if asc is not None and ascq is not None:
            hit = self.additional_sense.get(asc, {}).get(ascq)
            out.append(self._lookup(ADDITIONAL_SENSE, f"{asc}/{ascq}", hit))

        code = normalize_code(codes.op_code)
        if code is not None:
            out.append(self._lookup(OP_CODE, code, self.op_code.get(code)))
        return out
