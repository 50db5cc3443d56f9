# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/__main__.py
from __future__ import annotations

import sys
import traceback
from typing import Optional, Sequence

from .cli.args import parse_args_with_config
from .core.exceptions import Fatal, VsphereKitError, format_exception_for_cli
from .modes import run_mode
from .vmware.vsphere.errors import ExitCode, classify_exit_code


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Best-effort logging without assuming logger exists or has a given method.
    """
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def main(argv: Optional[Sequence[str]] = None) -> None:
    logger: Optional[object] = None

    # Phase 1: parse (Fatal can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        _safe_log(logger, "error", f"💥 ERROR    {e}")
        raise SystemExit(getattr(e, "code", 1))
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        raise SystemExit(int(ExitCode.INTERRUPTED))

    verbose = int(getattr(args, "verbose", 0) or 0)

    # Phase 2: run the selected mode
    try:
        rc = run_mode(logger, args)
    except VsphereKitError as e:
        code = classify_exit_code(e)
        _safe_log(logger, "error", f"{args.cmd} failed ({code.name}): {format_exception_for_cli(e, verbose=verbose)}")
        rc = int(code)
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        rc = int(ExitCode.INTERRUPTED)
    except Exception as e:
        # Unexpected exceptions should not fail silently.
        code = classify_exit_code(e)
        _safe_log(logger, "error", f"💥 UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        rc = int(code)

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
