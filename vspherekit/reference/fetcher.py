# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/reference/fetcher.py
"""
Reference document fetcher.

One whole-document HTTP GET per call. Nothing is cached or retried: a failed
request or an unparsable body raises FetchError and the invocation ends.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests
import requests.adapters
import urllib3

from ..core.exceptions import FetchError, wrap_fetch
from ..core.logger import Log

VERSION_DB_URL = "https://www.virten.net/repo/esxiReleases.json"
UPDATE_DB_URL = "https://www.virten.net/repo/esxiReleases.json"
SCSI_DB_URL = "https://www.virten.net/repo/scsiCodes.json"

DEFAULT_TIMEOUT_S = 30.0


class ReferenceFetcher:
    """
    Thin requests wrapper for the JSON reference databases.

    http_client lets tests hand in a fake `requests`-shaped module.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT_S,
        insecure: bool = False,
        http_client: Optional[Any] = None,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"Invalid timeout: {timeout}")
        self.logger = logger
        self.timeout = timeout
        self.insecure = bool(insecure)
        self._http_client = http_client or requests
        self._session: Optional[Any] = None

        if self.insecure:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def session(self) -> Any:
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> Any:
        session = self._http_client.Session()
        session.verify = not self.insecure
        session.headers.update({"Accept": "application/json"})

        adapter = self._http_client.adapters.HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "ReferenceFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def fetch_json(self, url: str) -> Any:
        if not (url or "").strip():
            raise FetchError(2, "reference URL is empty")

        Log.step(self.logger, "Fetching reference data", url=url)
        t0 = time.monotonic()
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise wrap_fetch(f"Failed to fetch reference data from {url}: {e}", e, url=url)

        try:
            doc = response.json()
        except ValueError as e:
            raise wrap_fetch(f"Reference data from {url} is not valid JSON: {e}", e, url=url)

        self.logger.debug(
            "Fetched %s (status=%s, %.2fs)", url, getattr(response, "status_code", "?"), time.monotonic() - t0
        )
        return doc
