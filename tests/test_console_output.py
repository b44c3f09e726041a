"""Tests for the text report renderer."""

import pytest
from pescope.output.console import (
    escape_name,
    format_hex,
    format_timestamp,
    render_metadata,
    render_optional_header,
    render_sections,
    timestamp_iso,
)
from pescope.parsers.pe_parser import PEParser

from .pe_builder import SAMPLE_SECTIONS, Section, build_pe


@pytest.mark.parametrize(
    "value, width, expected",
    [
        (0x14C, 4, "0x014C"),
        (0x8664, 4, "0x8664"),
        (0x1000, 8, "0x00001000"),
        (0xDEADBEEF, 8, "0xDEADBEEF"),
        (0x140000000, 16, "0x0000000140000000"),
        (0xABC, 0, "0xABC"),
        (0, 4, "0x0000"),
    ],
)
def test_format_hex(value: int, width: int, expected: str):
    assert format_hex(value, width) == expected


def test_format_timestamp():
    assert format_timestamp(0) == "1970-01-01 00:00:00 UTC"
    assert format_timestamp(0x5F5E1000) == "2020-09-13 12:26:40 UTC"
    assert format_timestamp(0xFFFFFFFF) == "2106-02-07 06:28:15 UTC"


def test_unrepresentable_timestamp():
    assert format_timestamp(2**63) == "n/a"
    assert timestamp_iso(2**63) is None


def test_timestamp_iso():
    assert timestamp_iso(0) == "1970-01-01T00:00:00+00:00"


def test_pe32_report():
    data = build_pe(
        sections=SAMPLE_SECTIONS,
        time_date_stamp=0,
        entry_point=0x1A00,
        image_base=0x400000,
        subsystem=2,
    )
    lines = render_metadata(PEParser(data).parse())
    assert lines == [
        "File Header:",
        "  Machine: 0x014C (x86)",
        "  Number of Sections: 3",
        "  Time Date Stamp: 0x00000000 (1970-01-01 00:00:00 UTC)",
        "  Characteristics: 0x0102",
        "",
        "Optional Header:",
        "  Magic: 0x010B (PE32)",
        "  Entry Point: 0x00001A00",
        "  Image Base: 0x00400000",
        "  Subsystem: 0x0002 (Windows GUI)",
        "",
        "Sections:",
        "  Index  Name      VirtSize    VirtAddr    RawSize     RawPtr",
        "      0  .text     0x00001A2B  0x00001000  0x00001C00  0x00000400",
        "      1  .rdata    0x00000840  0x00003000  0x00000A00  0x00002000",
        "      2  .data     0x00000310  0x00004000  0x00000200  0x00002A00",
    ]


def test_pe32_plus_image_base_width():
    data = build_pe(magic=0x20B, size_of_optional_header=0xF0, image_base=0x140000000)
    lines = render_optional_header(PEParser(data).parse().optional_header)
    assert "  Magic: 0x020B (PE32+)" in lines
    assert "  Image Base: 0x0000000140000000" in lines


def test_unknown_codes_render_as_unknown():
    data = build_pe(machine=0x1234, subsystem=0x99)
    lines = render_metadata(PEParser(data).parse())
    assert "  Machine: 0x1234 (Unknown)" in lines
    assert "  Subsystem: 0x0099 (Unknown)" in lines


def test_no_sections():
    assert render_sections(()) == ["Sections:", "  (none)"]


def test_full_width_section_name():
    data = build_pe(sections=(Section(b"ABCDEFGH", 1, 2, 3, 4),))
    lines = render_sections(PEParser(data).parse().sections)
    assert lines[-1] == "      0  ABCDEFGH  0x00000001  0x00000002  0x00000003  0x00000004"


@pytest.mark.parametrize(
    "name, expected",
    [
        (".text", ".text"),
        ("a\rb\tc", "a\\x0db\\x09c"),
        ("\x00\x7f", "\\x00\\x7f"),
        ("\x80x", "\\x80x"),
        ("caf\xe9", "caf\xe9"),
    ],
)
def test_escape_name(name: str, expected: str):
    assert escape_name(name) == expected


def test_control_characters_keep_columns():
    data = build_pe(sections=(Section(b"a\rb\tc", 1, 2, 3, 4), Section(b".x\x0c", 5, 6, 7, 8)))
    lines = render_sections(PEParser(data).parse().sections)
    assert lines[-2] == "      0  a\\x0db\\x09c  0x00000001  0x00000002  0x00000003  0x00000004"
    assert lines[-1] == "      1  .x\\x0c    0x00000005  0x00000006  0x00000007  0x00000008"
