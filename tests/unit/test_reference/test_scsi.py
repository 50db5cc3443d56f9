# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for SCSI status and sense code decoding."""
from __future__ import annotations

import pytest
from vspherekit.core.exceptions import FetchError, ValidationError
from vspherekit.reference.scsi import (
    ADDITIONAL_SENSE,
    DEVICE_STATUS,
    HOST_STATUS,
    OP_CODE,
    PLUGIN_STATUS,
    SENSE_KEY,
    ScsiCodes,
    ScsiCodeTables,
    normalize_code,
    parse_sense_line,
)

SCSI_DB = {
    "hostStatus": {
        "0x0": {"name": "OK", "description": "No error"},
        "0x5": {"name": "ABORT", "description": "Command aborted"},
    },
    "deviceStatus": {"02": {"name": "CHECK CONDITION", "description": "Sense data follows"}},
    "pluginStatus": [{"code": "0", "name": "GOOD", "description": "No error"}],
    "senseKey": {"5": {"name": "ILLEGAL REQUEST", "description": "Bad parameter"}},
    "additionalSenseData": {
        "24": {"00": {"name": "INVALID FIELD IN CDB", "description": ""}},
    },
    "opCode": {"2A": {"name": "WRITE(10)", "description": "Write 10-byte CDB"}},
}


@pytest.fixture
def tables():
    return ScsiCodeTables.from_document(SCSI_DB)


@pytest.mark.unit
class TestNormalizeCode:
    @pytest.mark.parametrize("raw", ["5", "05", "0x5", "0X05", " 5 "])
    def test_equivalent_spellings(self, raw):
        assert normalize_code(raw) == "05"

    @pytest.mark.parametrize("raw", [None, "", "  ", "0x"])
    def test_blank_is_absent(self, raw):
        assert normalize_code(raw) is None

    def test_lowercases_hex(self):
        assert normalize_code("2A") == "2a"


@pytest.mark.unit
class TestDecode:
    def test_padding_does_not_matter(self, tables):
        assert tables.decode(ScsiCodes(host_status="5")) == tables.decode(ScsiCodes(host_status="05"))

    def test_hit(self, tables):
        (entry,) = tables.decode(ScsiCodes(host_status="0x5"))

        assert entry.category == HOST_STATUS
        assert entry.code == "05"
        assert entry.name == "ABORT"
        assert entry.description == "Command aborted"

    def test_miss_is_unknown_not_error(self, tables):
        (entry,) = tables.decode(ScsiCodes(device_status="0x7f"))

        assert entry.name == "UNKNOWN"
        assert entry.description == "No description available for this Device Status code"

    def test_asc_without_ascq_is_skipped(self, tables):
        assert tables.decode(ScsiCodes(asc="24")) == []
        assert tables.decode(ScsiCodes(ascq="00")) == []

    def test_asc_pair(self, tables):
        (entry,) = tables.decode(ScsiCodes(asc="0x24", ascq="0x0"))

        assert entry.category == ADDITIONAL_SENSE
        assert entry.code == "24/00"
        assert entry.name == "INVALID FIELD IN CDB"

    def test_fixed_output_order(self, tables):
        codes = ScsiCodes(
            op_code="2a",
            ascq="0",
            asc="24",
            sense_key="5",
            plugin_status="0",
            device_status="2",
            host_status="0",
        )

        cats = [e.category for e in tables.decode(codes)]

        assert cats == [HOST_STATUS, DEVICE_STATUS, PLUGIN_STATUS, SENSE_KEY, ADDITIONAL_SENSE, OP_CODE]

    def test_list_shaped_section(self, tables):
        (entry,) = tables.decode(ScsiCodes(plugin_status="0x0"))
        assert entry.name == "GOOD"

    def test_empty_input(self, tables):
        assert ScsiCodes().is_empty()
        assert tables.decode(ScsiCodes()) == []


@pytest.mark.unit
class TestTablesFromDocument:
    def test_data_envelope(self):
        t = ScsiCodeTables.from_document({"data": SCSI_DB})
        assert t.op_code["2a"].name == "WRITE(10)"

    def test_pair_list_format(self):
        t = ScsiCodeTables.from_document(
            {"additionalSenseData": [{"asc": "0x4", "ascq": "0x1", "name": "LUN BECOMING READY", "description": ""}]}
        )
        assert t.additional_sense["04"]["01"].name == "LUN BECOMING READY"

    def test_not_an_object(self):
        with pytest.raises(FetchError):
            ScsiCodeTables.from_document(["nope"])

    def test_bad_section_type(self):
        with pytest.raises(FetchError):
            ScsiCodeTables.from_document({"hostStatus": "nope"})


@pytest.mark.unit
class TestParseSenseLine:
    def test_nmp_line(self):
        line = (
            "NMP: nmp_ThrottleLogForDevice:3546: Cmd 0x2a (0x45a2c0d3c0c0, 0) to dev "
            '"naa.600" on path "vmhba2:C0:T0:L1" Failed: H:0x0 D:0x2 P:0x0 '
            "Valid sense data: 0x5 0x24 0x0. Act:NONE"
        )

        codes = parse_sense_line(line)

        assert codes == ScsiCodes(
            host_status="0",
            device_status="2",
            plugin_status="0",
            sense_key="5",
            asc="24",
            ascq="0",
            op_code="2a",
        )

    def test_scsi_device_io_line(self):
        line = "ScsiDeviceIO: 3463: Cmd(0x45a2c0d3c0c0) 0x28, CmdSN 0x1 from world 0 to dev failed H:0x8 D:0x0 P:0x0"

        codes = parse_sense_line(line)

        assert codes.op_code == "28"
        assert codes.host_status == "8"
        assert codes.sense_key is None

    def test_partial_line(self):
        assert parse_sense_line("status H:0x7").host_status == "7"

    def test_nothing_recognizable(self):
        with pytest.raises(ValidationError) as ei:
            parse_sense_line("all quiet on vmhba0")
        assert ei.value.code == 3

    def test_parsed_line_decodes(self, tables):
        out = tables.decode(parse_sense_line("Cmd 0x2a Failed: H:0x0 D:0x2 P:0x0 Valid sense data: 0x5 0x24 0x0"))

        assert [e.name for e in out] == [
            "OK",
            "CHECK CONDITION",
            "GOOD",
            "ILLEGAL REQUEST",
            "INVALID FIELD IN CDB",
            "WRITE(10)",
        ]
