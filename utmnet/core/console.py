# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/core/console.py
"""
Console output for humans (Rich).

Status lines go to stdout so they stay separate from the logger's stderr
stream. Off a TTY Rich drops styling on its own.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ConsoleUI:
    def __init__(self, console: Optional[Console] = None, *, quiet: bool = False):
        self.console = console or Console(stderr=False, highlight=False)
        self.quiet = quiet

    def output(self, msg: str) -> None:
        if not self.quiet:
            self.console.print(Text(msg, style="bold"))

    def detail(self, msg: str) -> None:
        if not self.quiet:
            self.console.print(Text(f"  {msg}", style="dim"))

    def panel(self, title: str, body: str = "") -> None:
        if not self.quiet:
            self.console.print(Panel(body, title=title, expand=True))

    def table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        t = Table(title=title, show_lines=False)
        for col in columns:
            t.add_column(col)
        for row in rows:
            t.add_row(*("" if v is None else str(v) for v in row))
        self.console.print(t)
