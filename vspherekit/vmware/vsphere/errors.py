# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/vmware/vsphere/errors.py
# -*- coding: utf-8 -*-
"""Error classification and exit code handling"""
from __future__ import annotations

import errno
import socket
from enum import IntEnum

from ...core.exceptions import ApiFault, FetchError, ValidationError, VsphereKitError


class ExitCode(IntEnum):
    OK = 0
    UNKNOWN = 1
    USAGE = 2
    VALIDATION = 3

    AUTH = 10
    NOT_FOUND = 11
    NETWORK = 12
    FETCH = 13

    VSPHERE_API = 30

    INTERRUPTED = 130


def _is_usage_error(e: BaseException) -> bool:
    msg = str(e).lower()
    return (
        "unknown command" in msg
        or "missing --cmd" in msg
        or "are required" in msg
        or "argparse" in msg
        or "usage:" in msg
    )


def _is_auth_error(e: BaseException) -> bool:
    msg = str(e).lower()
    needles = [
        "not authenticated",
        "authentication",
        "unauthorized",
        "forbidden",
        "invalid login",
        "incorrect user name or password",
        "no permission",
        "access denied",
        "permission denied",
    ]
    return any(n in msg for n in needles)


def _is_not_found_error(e: BaseException) -> bool:
    msg = str(e).lower()
    return "not found" in msg or "does not exist" in msg


def _is_network_error(e: BaseException) -> bool:
    if isinstance(e, (socket.timeout, TimeoutError, ConnectionError)):
        return True
    if isinstance(e, OSError) and e.errno in (
        errno.ECONNREFUSED,
        errno.ETIMEDOUT,
        errno.EHOSTUNREACH,
        errno.ENETUNREACH,
        errno.ECONNRESET,
    ):
        return True
    msg = str(e).lower()
    needles = [
        "timed out",
        "timeout",
        "connection refused",
        "connection reset",
        "name or service not known",
        "temporary failure in name resolution",
        "handshake",
        "certificate verify failed",
    ]
    return any(n in msg for n in needles)


def classify_exit_code(e: BaseException) -> ExitCode:
    if isinstance(e, KeyboardInterrupt):
        return ExitCode.INTERRUPTED

    if isinstance(e, ValidationError):
        return ExitCode.VALIDATION
    if isinstance(e, FetchError):
        return ExitCode.FETCH

    # SDK faults land in operational buckets by message.
    if isinstance(e, ApiFault):
        if _is_auth_error(e):
            return ExitCode.AUTH
        if _is_not_found_error(e):
            return ExitCode.NOT_FOUND
        if _is_network_error(e) or _is_network_error(e.cause or e):
            return ExitCode.NETWORK
        return ExitCode.VSPHERE_API

    # Fatal and friends already carry the code they want.
    if isinstance(e, VsphereKitError):
        return ExitCode(e.code) if e.code in ExitCode._value2member_map_ else ExitCode.UNKNOWN

    if _is_usage_error(e):
        return ExitCode.USAGE
    if _is_network_error(e):
        return ExitCode.NETWORK
    return ExitCode.UNKNOWN
