# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/args/parser.py
from __future__ import annotations

import argparse
from typing import Any, Dict, Optional, Sequence, Tuple

from ...config.config_loader import Config
from ...core.exceptions import redact_context
from ...core.logger import c
from ...core.utils import U
from .builder import HelpFormatter, _build_epilog
from .groups import (
    _add_global_config_logging,
    _add_host_knobs,
    _add_latency_knobs,
    _add_project_control,
    _add_reference_knobs,
    _add_scsi_knobs,
    _add_vsphere_core_knobs,
)
from .validators import validate_args


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vspherekit",
        description=c("vspherekit: ESXi build reports, SCSI code decoding, VM latency sensitivity", "green", ["bold"]),
        formatter_class=HelpFormatter,
        epilog=_build_epilog(),
    )

    _add_global_config_logging(p)
    _add_project_control(p)

    _add_vsphere_core_knobs(p)
    _add_reference_knobs(p)

    _add_host_knobs(p)
    _add_scsi_knobs(p)
    _add_latency_knobs(p)

    return p


def _build_preparser() -> argparse.ArgumentParser:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    pre.add_argument("--dump-args", action="store_true")
    return pre


def _load_merged_config(logger: Any, cfgs: Sequence[str]) -> Dict[str, Any]:
    if not cfgs:
        return {}
    expanded = Config.expand_configs(logger, list(cfgs))
    return Config.load_many(logger, expanded)


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
    logger: Any = None,
) -> Tuple[argparse.Namespace, Dict[str, Any], Any]:
    """
    Flow:
      Phase 0: parse ONLY global flags needed to locate config/logging
      Phase 1: load+merge config files
      Phase 2: apply config as defaults onto the parser
      Phase 3: full parse to get final args
      Phase 4: validate using merged config + args
    """
    import sys

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()

    pre = _build_preparser()
    args0, _rest = pre.parse_known_args(argv)

    if logger is None:
        from ...core.logger import Log  # local import to avoid cycles

        logger = Log.setup(
            getattr(args0, "verbose", 0),
            getattr(args0, "log_file", None),
            quiet=getattr(args0, "quiet", 0),
            json_logs=bool(getattr(args0, "json_logs", False)),
        )

    conf = _load_merged_config(logger, getattr(args0, "config", None) or [])

    if getattr(args0, "dump_config", False):
        print(U.json_dump(redact_context(conf)))
        raise SystemExit(0)

    # Apply config as defaults so CLI can override.
    repeatable = Config.apply_as_defaults(logger, parser, conf)

    args = parser.parse_args(argv)
    Config.fill_repeatable(args, repeatable)

    if getattr(args0, "dump_args", False):
        print(U.json_dump(redact_context(vars(args))))
        raise SystemExit(0)

    validate_args(args, conf)

    return args, conf, logger
