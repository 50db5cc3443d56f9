# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/args/validators.py
from __future__ import annotations

import argparse
from typing import Any, Dict

from ...core.exceptions import Fatal
from ...core.utils import U
from .groups import COMMANDS
from .helpers import _as_list, _merged_get, _merged_secret, _require


def _validate_vsphere_identity(args: argparse.Namespace, conf: Dict[str, Any], cmd: str) -> None:
    if not _require(_merged_get(args, conf, "vcenter")):
        raise Fatal(2, f"cmd={cmd}: missing required `vcenter:` (YAML) or CLI --vcenter")
    if not _require(_merged_get(args, conf, "vc_user")):
        raise Fatal(2, f"cmd={cmd}: missing required `vc_user:` (YAML) or CLI --vc-user")
    if not _require(_merged_secret(args, conf, "vc_password", "vc_password_env")):
        raise Fatal(2, f"cmd={cmd}: missing vCenter password. Set `vc_password:` or `vc_password_env:` (or CLI equivalents).")


def _validate_cmd_scsi_decode(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    keys = ("host_status", "device_status", "plugin_status", "sense_key", "asc", "ascq", "op_code", "sense_line")
    if not any(_require(_merged_get(args, conf, k)) for k in keys):
        raise Fatal(2, "cmd=scsi-decode: give at least one code flag (--host-status ... --op-code) or --sense-line")


def _validate_cmd_latency_set(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    vms = U.non_empty(_as_list(_merged_get(args, conf, "vm")))
    if not vms:
        raise Fatal(2, "cmd=latency-set: at least one --vm is required")
    if not _require(_merged_get(args, conf, "level")):
        raise Fatal(2, "cmd=latency-set: missing required `level:` (YAML) or CLI --level")


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    Usage checks only. Value checks (latency level, sense line) happen in the
    operations themselves so library callers get the same errors.
    """
    cmd = _merged_get(args, conf, "cmd")
    if not _require(cmd):
        raise Fatal(2, "missing --cmd (or YAML `cmd:`); one of: " + ", ".join(COMMANDS))
    cmd = str(cmd).strip()
    if cmd not in COMMANDS:
        raise Fatal(2, f"unknown command {cmd!r}; one of: " + ", ".join(COMMANDS))
    args.cmd = cmd

    if cmd == "scsi-decode":
        _validate_cmd_scsi_decode(args, conf)
        return

    _validate_vsphere_identity(args, conf, cmd)
    if cmd == "latency-set":
        _validate_cmd_latency_set(args, conf)
