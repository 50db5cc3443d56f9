# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/help_texts.py
from __future__ import annotations

# Pure help text for the argparse epilog; no imports beyond stdlib.

YAML_EXAMPLE = r"""# vspherekit configuration examples (YAML)
#
# Run:
#   vspherekit --config vcenter.yaml --cmd host-version
#
# Merge multiple configs (later overrides earlier):
#   vspherekit --config base.yaml --config lab.yaml --cmd latency-get
#
# Common keys:
# vcenter: vcsa.example.com
# vc_user: administrator@vsphere.local
# vc_password_env: VC_PASSWORD       # or vc_password: ... (not recommended)
# vc_insecure: false
# error_policy: lenient              # strict | lenient
# http_timeout: 30
# json: false
#
# Reference databases (override for mirrors / air-gapped copies):
# version_db_url: https://www.virten.net/repo/esxiReleases.json
# update_db_url: https://www.virten.net/repo/esxiReleases.json
# scsi_db_url: https://www.virten.net/repo/scsiCodes.json
#
# Host build report:
# cmd: host-update
# host: [esx01.example.com, esx02.example.com]   # omit for every host
# latest_policy: first-in-table                  # or highest-build
#
# SCSI sense decoding (no vCenter needed):
# cmd: scsi-decode
# sense_line: "H:0x0 D:0x2 P:0x0 Valid sense data: 0x5 0x24 0x0"
#
# Latency sensitivity:
# cmd: latency-set
# vm: [db01]
# level: high
"""

FEATURE_SUMMARY = r"""  host-version   ESXi build -> release name, date, patch level, image profile
  host-update    newest build of the same minor release and whether it differs
  scsi-decode    host/device/plugin status, sense key, ASC/ASCQ, op code
  latency-get    VM latency sensitivity (bulk when no --vm given)
  latency-set    set VM latency sensitivity (low|normal|medium|high)
"""
