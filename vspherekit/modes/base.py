# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/modes/base.py
from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, List, Optional, Sequence, TextIO

from ..cli.args.helpers import _as_list
from ..cli.output import render
from ..core.exceptions import ApiFault
from ..core.logger import Log
from ..core.policy import ErrorPolicy
from ..core.utils import U
from ..reference.fetcher import DEFAULT_TIMEOUT_S, ReferenceFetcher
from ..vmware.clients.client import VMwareClient
from ..vmware.inventory import InventoryAccessor
from ..vmware.vsphere.errors import ExitCode, classify_exit_code


class BaseMode:
    """
    Shared plumbing for the --cmd modes.

    `inventory` and `fetcher` are injection points; when absent a vCenter
    session / HTTP fetcher is built from args.
    """

    title: str = ""

    def __init__(
        self,
        logger: logging.Logger,
        args: Any,
        *,
        inventory: Optional[InventoryAccessor] = None,
        fetcher: Optional[ReferenceFetcher] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.logger = logger
        self.args = args
        self._inventory_override = inventory
        self._fetcher_override = fetcher
        self.stream = stream
        self.policy = ErrorPolicy.parse(getattr(args, "error_policy", None) or ErrorPolicy.LENIENT)
        self.failures: List[ExitCode] = []

    def names(self, key: str) -> List[str]:
        return U.non_empty(_as_list(getattr(self.args, key, None)))

    @contextlib.contextmanager
    def fetcher(self) -> Iterator[ReferenceFetcher]:
        if self._fetcher_override is not None:
            yield self._fetcher_override
            return
        timeout = getattr(self.args, "http_timeout", None) or DEFAULT_TIMEOUT_S
        with ReferenceFetcher(self.logger, timeout=float(timeout)) as f:
            yield f

    @contextlib.contextmanager
    def inventory(self) -> Iterator[InventoryAccessor]:
        if self._inventory_override is not None:
            yield self._inventory_override
            return
        with VMwareClient.from_config(self.logger, vars(self.args)) as client:
            yield client

    def target_failed(self, e: ApiFault, **ctx: Any) -> None:
        """Strict: propagate. Lenient: log, remember the exit code, carry on."""
        if self.policy is ErrorPolicy.STRICT:
            raise e
        Log.warn(self.logger, str(e), **ctx)
        self.failures.append(classify_exit_code(e))

    def emit(self, records: Sequence[Any]) -> None:
        render(records, as_json=bool(getattr(self.args, "json", False)), title=self.title or None, stream=self.stream)

    def exit_code(self) -> int:
        return int(self.failures[-1]) if self.failures else int(ExitCode.OK)

    def run(self) -> int:
        raise NotImplementedError
