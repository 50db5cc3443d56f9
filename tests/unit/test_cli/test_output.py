# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for table/JSON result rendering."""
from __future__ import annotations

import io
import json

import pytest
from vspherekit.cli.output import render
from vspherekit.reference.models import DecodedEntry, HostUpdate, LatencyRecord


@pytest.mark.unit
class TestRender:
    def test_json_keeps_input_order_and_nulls(self):
        out = io.StringIO()
        rows = [HostUpdate(host="esx2", current_build=2), HostUpdate(host="esx1", current_build=1)]

        render(rows, as_json=True, stream=out)

        data = json.loads(out.getvalue())
        assert [r["host"] for r in data] == ["esx2", "esx1"]
        assert data[0]["update_available"] is None

    def test_table_has_headers_and_values(self):
        out = io.StringIO()

        render([DecodedEntry("Sense Key", "05", "ILLEGAL REQUEST", "")], title="SCSI codes", stream=out)

        text = out.getvalue()
        assert "Category" in text
        assert "ILLEGAL REQUEST" in text
        assert "SCSI codes" in text

    def test_table_does_not_interpret_markup(self):
        out = io.StringIO()

        render([LatencyRecord("vm[bold]1", None, "[red]boom")], stream=out)

        text = out.getvalue()
        assert "vm[bold]1" in text
        assert "[red]boom" in text

    def test_empty(self):
        out = io.StringIO()
        render([], stream=out)
        assert "no results" in out.getvalue()

        out = io.StringIO()
        render([], as_json=True, stream=out)
        assert json.loads(out.getvalue()) == []
