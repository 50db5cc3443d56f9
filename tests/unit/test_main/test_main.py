# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the console entry point."""
from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from vspherekit.__main__ import main
from vspherekit.core.exceptions import ApiFault, ValidationError


def _parsed(cmd="latency-get"):
    import argparse

    return argparse.Namespace(cmd=cmd, verbose=0), {}, logging.getLogger("vspherekit.tests.main")


@pytest.mark.unit
class TestMain:
    def test_usage_error_exit_code(self):
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 2

    @patch("vspherekit.__main__.run_mode", return_value=0)
    @patch("vspherekit.__main__.parse_args_with_config")
    def test_success(self, parse, _run):
        parse.return_value = _parsed()
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 0

    @patch("vspherekit.__main__.run_mode", side_effect=ValidationError(3, "invalid latency sensitivity level 'x'"))
    @patch("vspherekit.__main__.parse_args_with_config")
    def test_validation_error(self, parse, _run):
        parse.return_value = _parsed("latency-set")
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 3

    @patch("vspherekit.__main__.run_mode", side_effect=ApiFault(11, "vm not found: db01"))
    @patch("vspherekit.__main__.parse_args_with_config")
    def test_api_fault(self, parse, _run):
        parse.return_value = _parsed()
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 11

    @patch("vspherekit.__main__.run_mode", side_effect=KeyboardInterrupt)
    @patch("vspherekit.__main__.parse_args_with_config")
    def test_interrupted(self, parse, _run):
        parse.return_value = _parsed()
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 130

    @patch("vspherekit.__main__.run_mode", side_effect=RuntimeError("boom"))
    @patch("vspherekit.__main__.parse_args_with_config")
    def test_unexpected_exception(self, parse, _run):
        parse.return_value = _parsed()
        with pytest.raises(SystemExit) as ei:
            main([])
        assert ei.value.code == 1
