# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/vmware/vsphere/__init__.py
from .errors import ExitCode, classify_exit_code

__all__ = ["ExitCode", "classify_exit_code"]
