# SPDX-License-Identifier: LGPL-3.0-or-later
# vspherekit/core/policy.py
from __future__ import annotations

import enum
from typing import Any

from .exceptions import ValidationError


class ErrorPolicy(str, enum.Enum):
    """
    Per-call handling of per-target API faults.

    STRICT: the first fault propagates to the caller.
    LENIENT: the fault is logged and recorded on the target's result row,
             remaining targets are still processed.

    Fetch failures are fatal under both policies.
    """

    STRICT = "strict"
    LENIENT = "lenient"

    @classmethod
    def parse(cls, value: Any) -> "ErrorPolicy":
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().lower()
        try:
            return cls(s)
        except ValueError:
            raise ValidationError(
                3, f"invalid error policy {value!r} (expected one of: {', '.join(p.value for p in cls)})"
            ) from None
