"""
Pescope Console Interface
==========================

Rich-powered console abstraction used by every pescope command.

Reports go to stdout and diagnostics to stderr.  Markup, emoji codes and
automatic highlighting are disabled so that text derived from the input
file is never interpreted as styling, and a report piped to another program
contains no escape sequences.  Rich still drops control characters, so
callers escape them before printing.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.theme import Theme

_PESCOPE_THEME = Theme(
    {
        "pescope.error": "bold red",
    }
)


class ReportConsole:
    """Paired stdout / stderr console for report and error output.

    Usage::

        con = ReportConsole()
        con.line("File Header:")
        con.error("Invalid PE signature.")
    """

    def __init__(self) -> None:
        options: dict[str, Any] = {
            "theme": _PESCOPE_THEME,
            "highlight": False,
            "markup": False,
            "emoji": False,
            "soft_wrap": True,
        }
        self._out = Console(**options)
        self._err = Console(stderr=True, **options)

    # ------------------------------------------------------------------ #
    #  Report output
    # ------------------------------------------------------------------ #

    def line(self, text: str = "") -> None:
        """Write one report line to stdout."""
        self._out.print(text)

    def lines(self, texts: list[str]) -> None:
        for text in texts:
            self.line(text)

    def json(self, payload: str, *, indent: int = 2) -> None:
        """Pretty-print a JSON document on stdout."""
        self._out.print_json(payload, indent=indent, highlight=False)

    # ------------------------------------------------------------------ #
    #  Diagnostics
    # ------------------------------------------------------------------ #

    def error(self, message: str) -> None:
        """Write a single ``Error: <message>`` line to stderr."""
        self._err.print(f"Error: {message}", style="pescope.error")
