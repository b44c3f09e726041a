"""
Pescope Console Output
=======================

Text rendering of parsed PE metadata: header fields in upper-case hex with
symbolic machine / subsystem names, a UTC link timestamp, and a fixed-width
section table.

Rendering is split from printing: :func:`render_metadata` returns the lines
and :class:`PescopeConsoleOutput` writes them through the shared
:class:`~shared.console.ReportConsole`.
"""

from __future__ import annotations

from datetime import datetime, timezone

from shared.console import ReportConsole

from pescope.core.models import FileHeader, OptionalHeader, PeMetadata, SectionHeader
from pescope.parsers.lookup import machine_name, subsystem_name

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
_NOT_AVAILABLE = "n/a"

_SECTION_TABLE_HEADER = (
    "  Index  Name      VirtSize    VirtAddr    RawSize     RawPtr"
)


# ---------------------------------------------------------------------------
# Field formatting helpers
# ---------------------------------------------------------------------------

def format_hex(value: int, width: int = 0) -> str:
    """Format *value* as ``0x`` followed by upper-case hex digits,
    zero-padded to *width* digits."""
    return f"0x{value:0{width}X}" if width > 0 else f"0x{value:X}"


def format_timestamp(timestamp: int) -> str:
    """Format a COFF time stamp as ``YYYY-MM-DD HH:MM:SS UTC``.

    Returns ``"n/a"`` for values the platform's time functions can not
    represent.
    """
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OSError, ValueError, OverflowError):
        return _NOT_AVAILABLE
    return moment.strftime(_TIMESTAMP_FORMAT)


def timestamp_iso(timestamp: int) -> str | None:
    """ISO-8601 form of a COFF time stamp, or ``None`` if unrepresentable."""
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
    except (OSError, ValueError, OverflowError):
        return None


def escape_name(name: str) -> str:
    """Replace non-printable characters in a section name with ``\\xNN``."""
    return "".join(ch if ch.isprintable() else f"\\x{ord(ch):02x}" for ch in name)


# ---------------------------------------------------------------------------
# Block renderers
# ---------------------------------------------------------------------------

def render_file_header(header: FileHeader) -> list[str]:
    return [
        "File Header:",
        f"  Machine: {format_hex(header.machine, 4)} ({machine_name(header.machine)})",
        f"  Number of Sections: {header.number_of_sections}",
        f"  Time Date Stamp: {format_hex(header.time_date_stamp, 8)}"
        f" ({format_timestamp(header.time_date_stamp)})",
        f"  Characteristics: {format_hex(header.characteristics, 4)}",
    ]


def render_optional_header(header: OptionalHeader) -> list[str]:
    image_base_width = 16 if header.is_pe32_plus else 8
    return [
        "Optional Header:",
        f"  Magic: {format_hex(header.magic, 4)} ({header.format_name})",
        f"  Entry Point: {format_hex(header.address_of_entry_point, 8)}",
        f"  Image Base: {format_hex(header.image_base, image_base_width)}",
        f"  Subsystem: {format_hex(header.subsystem, 4)}"
        f" ({subsystem_name(header.subsystem)})",
    ]


def render_sections(sections: tuple[SectionHeader, ...]) -> list[str]:
    """Render the section table, or a ``(none)`` marker when it is empty."""
    lines = ["Sections:"]
    if not sections:
        lines.append("  (none)")
        return lines

    lines.append(_SECTION_TABLE_HEADER)
    for index, sec in enumerate(sections):
        lines.append(
            f"  {index:>5}  {escape_name(sec.name):<8}"
            f"  {format_hex(sec.virtual_size, 8):>10}"
            f"  {format_hex(sec.virtual_address, 8):>10}"
            f"  {format_hex(sec.size_of_raw_data, 8):>10}"
            f"  {format_hex(sec.pointer_to_raw_data, 8):>10}"
        )
    return lines


def render_metadata(metadata: PeMetadata) -> list[str]:
    """Render the full text report as a list of lines."""
    return [
        *render_file_header(metadata.file_header),
        "",
        *render_optional_header(metadata.optional_header),
        "",
        *render_sections(metadata.sections),
    ]


# ---------------------------------------------------------------------------
# PescopeConsoleOutput
# ---------------------------------------------------------------------------

class PescopeConsoleOutput:
    """Terminal display for parsed PE metadata.

    Usage::

        output = PescopeConsoleOutput()
        output.display(metadata)
    """

    def __init__(self, console: ReportConsole | None = None) -> None:
        self._console: ReportConsole = console or ReportConsole()

    def display(self, metadata: PeMetadata) -> None:
        """Write the text report to stdout."""
        self._console.lines(render_metadata(metadata))
