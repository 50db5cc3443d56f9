# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/core/utils.py
from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
import json
import logging
from typing import Any, List, Optional

from .exceptions import Fatal


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def to_jsonable(obj: Any) -> Any:
        """Dataclasses/enums/dates -> plain JSON types."""
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {f.name: U.to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj) if f.repr}
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, (_dt.date, _dt.datetime)):
            return obj.isoformat()
        if isinstance(obj, dict):
            return {str(k): U.to_jsonable(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [U.to_jsonable(x) for x in obj]
        return obj

    @staticmethod
    def json_dump(obj: Any) -> str:
        return json.dumps(U.to_jsonable(obj), indent=2, sort_keys=False, default=str)

    @staticmethod
    def to_text(x: Any) -> str:
        if x is None:
            return ""
        if isinstance(x, bytes):
            return x.decode("utf-8", errors="replace")
        return str(x)

    @staticmethod
    def as_int(x: Any) -> Optional[int]:
        """int(x) for ints and digit strings, else None."""
        if isinstance(x, bool):
            return None
        if isinstance(x, int):
            return x
        s = U.to_text(x).strip()
        return int(s) if s.isdigit() else None

    @staticmethod
    def non_empty(items: Optional[List[Any]]) -> List[str]:
        """Stripped, non-blank strings in input order."""
        return [s for s in (U.to_text(x).strip() for x in (items or [])) if s]
