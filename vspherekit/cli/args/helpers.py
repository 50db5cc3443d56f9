# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/args/helpers.py
from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional


def _require(v: Any) -> bool:
    """True if v is meaningfully present (treats empty/whitespace-only strings as missing)."""
    if v is None:
        return False
    if isinstance(v, str):
        return v.strip() != ""
    return True


def _merged_get(args: argparse.Namespace, conf: Dict[str, Any], key: str) -> Any:
    """
    Prefer CLI override if present (non-empty), else config.
    """
    v = getattr(args, key, None)
    if _require(v):
        return v
    return conf.get(key)


def _merged_secret(args: argparse.Namespace, conf: Dict[str, Any], value_key: str, env_key: str) -> Optional[str]:
    """
    Resolve a secret from (value) or (name of env var holding it).
    Example: (vc_password, vc_password_env)
    """
    direct = _merged_get(args, conf, value_key)
    if _require(direct):
        return str(direct)

    envname = _merged_get(args, conf, env_key)
    if _require(envname):
        return os.environ.get(str(envname), None)

    return None


def _as_list(v: Any) -> List[str]:
    """YAML may give a scalar or a list for repeatable flags."""
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return [str(x) for x in v]
    return [str(v)]
