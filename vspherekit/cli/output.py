# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/cli/output.py
"""
Structured command output on stdout: a rich table, or JSON with --json.
Logs never go here.
"""
from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.utils import U


def _cell(v: Any) -> str:
    if v is None:
        return "-"
    if v is True:
        return "[green]yes[/green]"
    if v is False:
        return "no"
    return escape(str(v))


def _title_case(key: str) -> str:
    return key.replace("_", " ").title()


def rows_of(records: Sequence[Any]) -> List[Dict[str, Any]]:
    return [U.to_jsonable(r) for r in records]


def render(
    records: Sequence[Any],
    *,
    as_json: bool = False,
    title: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    out = stream or sys.stdout
    rows = rows_of(records)

    if as_json:
        out.write(U.json_dump(rows) + "\n")
        out.flush()
        return

    console = Console(file=out, soft_wrap=False)
    if not rows:
        console.print("[dim]no results[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    columns = list(rows[0].keys())
    for col in columns:
        table.add_column(_title_case(col), overflow="fold")
    for row in rows:
        table.add_row(*[_cell(row.get(col)) for col in columns])
    console.print(table)
