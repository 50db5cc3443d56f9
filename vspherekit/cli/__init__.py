# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/cli/__init__.py
