#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: decode a vmkernel SCSI failure line.

Usage:
    python library_scsi_decode.py "Cmd 0x2a ... H:0x0 D:0x2 P:0x0 Valid sense data: 0x5 0x24 0x0"
"""

import logging
import sys

from vspherekit import SCSI_DB_URL, ReferenceFetcher, ScsiCodeTables, parse_sense_line

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    codes = parse_sense_line(sys.argv[1])
    with ReferenceFetcher(logger) as fetcher:
        tables = ScsiCodeTables.from_document(fetcher.fetch_json(SCSI_DB_URL))

    for e in tables.decode(codes):
        print(f"{e.category:22} {e.code:8} {e.name}")
        if e.description:
            print(f"{'':31} {e.description}")
