# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/modes/scsi_mode.py
from __future__ import annotations

import dataclasses

from ..reference.fetcher import SCSI_DB_URL
from ..reference.scsi import ScsiCodeTables, ScsiCodes, parse_sense_line
from .base import BaseMode


class ScsiDecodeMode(BaseMode):
    """
    Decode SCSI status/sense codes. Needs no vCenter.

    Codes come from --sense-line and/or the individual flags; a flag wins
    over the same field parsed from the line.
    """

    title = "SCSI codes"

    def codes(self) -> ScsiCodes:
        line = getattr(self.args, "sense_line", None)
        codes = parse_sense_line(line) if line else ScsiCodes()
        overrides = {
            f.name: getattr(self.args, f.name)
            for f in dataclasses.fields(ScsiCodes)
            if getattr(self.args, f.name, None) not in (None, "")
        }
        return dataclasses.replace(codes, **overrides) if overrides else codes

    def run(self) -> int:
        codes = self.codes()
        url = getattr(self.args, "scsi_db_url", None) or SCSI_DB_URL
        with self.fetcher() as f:
            tables = ScsiCodeTables.from_document(f.fetch_json(url))
        self.emit(tables.decode(codes))
        return self.exit_code()
