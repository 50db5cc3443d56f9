# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/args/groups.py
from __future__ import annotations

import argparse

from ...core.policy import ErrorPolicy
from ...reference.fetcher import DEFAULT_TIMEOUT_S, SCSI_DB_URL, UPDATE_DB_URL, VERSION_DB_URL
from ...reference.versions import LatestPolicy

COMMANDS = ("host-version", "host-update", "scsi-decode", "latency-get", "latency-set")


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file, glob or directory (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged normalized config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv (debug), -vvv (trace)")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Only warnings (-q) or errors (-qq).")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")


def _add_project_control(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Project control: YAML-driven operation (no subcommands)
    # ------------------------------------------------------------------
    p.add_argument(
        "--cmd",
        dest="cmd",
        default=None,
        help="Operation (normally from YAML `cmd:`): " + ", ".join(COMMANDS),
    )
    p.add_argument(
        "--error-policy",
        dest="error_policy",
        default=ErrorPolicy.LENIENT.value,
        choices=[e.value for e in ErrorPolicy],
        help="strict: first per-target failure aborts; lenient: record it and continue.",
    )
    p.add_argument("--json", dest="json", action="store_true", help="Print results as JSON instead of a table.")


def _add_vsphere_core_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # vSphere / vCenter knobs
    # ------------------------------------------------------------------
    p.add_argument("--vcenter", default=None, help="vCenter/ESXi hostname or IP")
    p.add_argument("--vc-user", dest="vc_user", default=None, help="vCenter username")
    p.add_argument("--vc-password", dest="vc_password", default=None, help="vCenter password (or use --vc-password-env)")
    p.add_argument("--vc-password-env", dest="vc_password_env", default=None, help="Env var containing vCenter password")
    p.add_argument("--vc-port", dest="vc_port", type=int, default=443, help="vCenter HTTPS port")
    p.add_argument("--vc-insecure", dest="vc_insecure", action="store_true", help="Disable TLS verification")
    p.add_argument("--vc-timeout", dest="vc_timeout", type=float, default=None, help="Socket timeout for the SDK session (seconds)")


def _add_reference_knobs(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Reference databases
    # ------------------------------------------------------------------
    p.add_argument("--version-db-url", dest="version_db_url", default=VERSION_DB_URL, help="ESXi release database (host-version)")
    p.add_argument("--update-db-url", dest="update_db_url", default=UPDATE_DB_URL, help="ESXi release database (host-update)")
    p.add_argument("--scsi-db-url", dest="scsi_db_url", default=SCSI_DB_URL, help="SCSI code database (scsi-decode)")
    p.add_argument("--http-timeout", dest="http_timeout", type=float, default=DEFAULT_TIMEOUT_S, help="Download timeout (seconds)")


def _add_host_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--host",
        dest="host",
        action="append",
        default=None,
        help="ESXi host name as known to vCenter (repeatable; default: every host).",
    )
    p.add_argument(
        "--latest-policy",
        dest="latest_policy",
        default=LatestPolicy.FIRST_IN_TABLE.value,
        choices=[e.value for e in LatestPolicy],
        help="How host-update picks the newest build of a minor release.",
    )


def _add_scsi_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host-status", dest="host_status", default=None, help="H: value, e.g. 0x0")
    p.add_argument("--device-status", dest="device_status", default=None, help="D: value, e.g. 0x2")
    p.add_argument("--plugin-status", dest="plugin_status", default=None, help="P: value, e.g. 0x0")
    p.add_argument("--sense-key", dest="sense_key", default=None, help="Sense key, e.g. 0x5")
    p.add_argument("--asc", dest="asc", default=None, help="Additional sense code (needs --ascq)")
    p.add_argument("--ascq", dest="ascq", default=None, help="Additional sense code qualifier (needs --asc)")
    p.add_argument("--op-code", dest="op_code", default=None, help="SCSI operation code, e.g. 0x2a")
    p.add_argument(
        "--sense-line",
        dest="sense_line",
        default=None,
        help="vmkernel log line to pull codes from; explicit code flags override it.",
    )


def _add_latency_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--vm",
        dest="vm",
        action="append",
        default=None,
        help="VM name (repeatable; latency-get default: every VM).",
    )
    p.add_argument("--level", dest="level", default=None, help="Latency sensitivity for latency-set: low|normal|medium|high")
