# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/modes/__init__.py
from __future__ import annotations

from typing import Any, Dict, Type

from ..core.exceptions import Fatal
from .base import BaseMode
from .latency_mode import LatencyGetMode, LatencySetMode
from .scsi_mode import ScsiDecodeMode
from .version_mode import HostUpdateMode, HostVersionMode

MODES: Dict[str, Type[BaseMode]] = {
    "host-version": HostVersionMode,
    "host-update": HostUpdateMode,
    "scsi-decode": ScsiDecodeMode,
    "latency-get": LatencyGetMode,
    "latency-set": LatencySetMode,
}


def mode_for(cmd: str) -> Type[BaseMode]:
    try:
        return MODES[cmd]
    except KeyError:
        raise Fatal(2, f"unknown command {cmd!r}") from None


def run_mode(logger: Any, args: Any, **kw: Any) -> int:
    return mode_for(getattr(args, "cmd", None) or "")(logger, args, **kw).run()


__all__ = [
    "MODES",
    "BaseMode",
    "HostUpdateMode",
    "HostVersionMode",
    "LatencyGetMode",
    "LatencySetMode",
    "ScsiDecodeMode",
    "mode_for",
    "run_mode",
]
