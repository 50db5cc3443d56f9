#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: ESXi update report using the vspherekit library.

This example demonstrates:
- Downloading the ESXi release database once
- Reading every host's build number in one vCenter query
- Picking the newest build of each host's minor release

Usage:
    export VCENTER_PASSWORD='your-password'
    python library_host_updates.py vcenter.example.com [highest-build]
"""

import logging
import os
import sys

from vspherekit import (
    VERSION_DB_URL,
    BuildTable,
    LatestPolicy,
    ObjectKind,
    ReferenceFetcher,
    VMwareClient,
    host_updates,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def report(vcenter_host: str, policy: LatestPolicy, user: str = 'administrator@vsphere.local') -> int:
    password = os.environ.get('VCENTER_PASSWORD')
    if not password:
        raise ValueError("VCENTER_PASSWORD environment variable not set")

    with ReferenceFetcher(logger) as fetcher:
        table = BuildTable.from_document(fetcher.fetch_json(VERSION_DB_URL), logger)
    logger.info(f"Release database: {len(table)} builds")

    with VMwareClient(logger, vcenter_host, user, password) as client:
        hosts = client.fetch_all(ObjectKind.HOST)

    outdated = 0
    for row in host_updates(hosts, table, policy, logger):
        state = {True: "UPDATE", False: "current", None: "unknown build"}[row.update_available]
        print(f"{row.host:30} {row.current_build:>10} -> {str(row.latest_build or '-'):>10}  {state}")
        outdated += bool(row.update_available)
    return outdated


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    chosen = LatestPolicy.parse(sys.argv[2]) if len(sys.argv) > 2 else LatestPolicy.FIRST_IN_TABLE
    n = report(sys.argv[1], chosen)
    print(f"\n{n} host(s) have a newer build available")
    sys.exit(0)
