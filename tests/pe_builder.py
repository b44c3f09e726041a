"""Synthetic PE images for tests.

Builds just enough of a PE file for the header parser: a DOS header whose
e_lfanew points at the PE signature, a COFF file header, an optional header
of the requested size and a section table.  Field values land at the
documented offsets so tests can assert they come back unchanged."""

import struct
from typing import NamedTuple, Optional, Sequence


class Section(NamedTuple):
    name: bytes
    virtual_size: int = 0
    virtual_address: int = 0
    size_of_raw_data: int = 0
    pointer_to_raw_data: int = 0


def _put(buf: bytearray, fmt: str, offset: int, value: int):
    """Write the value only if it fits, so undersized headers can be built."""
    if offset + struct.calcsize(fmt) <= len(buf):
        struct.pack_into(fmt, buf, offset, value)


# pylint: disable=too-many-arguments,too-many-locals
def build_pe(
    *,
    sections: Sequence[Section] = (),
    machine: int = 0x14C,
    number_of_sections: Optional[int] = None,
    time_date_stamp: int = 0,
    pointer_to_symbol_table: int = 0,
    number_of_symbols: int = 0,
    size_of_optional_header: int = 0xE0,
    characteristics: int = 0x0102,
    magic: int = 0x10B,
    entry_point: int = 0x1000,
    image_base: int = 0x400000,
    subsystem: int = 3,
    pe_offset: int = 0x80,
    trailing: bytes = b"",
) -> bytes:
    if number_of_sections is None:
        number_of_sections = len(sections)

    dos = bytearray(pe_offset)
    dos[0:2] = b"MZ"
    struct.pack_into("<I", dos, 0x3C, pe_offset)

    file_header = struct.pack(
        "<HHIIIHH",
        machine,
        number_of_sections,
        time_date_stamp,
        pointer_to_symbol_table,
        number_of_symbols,
        size_of_optional_header,
        characteristics,
    )

    optional = bytearray(size_of_optional_header)
    _put(optional, "<H", 0, magic)
    _put(optional, "<I", 0x10, entry_point)
    if magic == 0x20B:
        _put(optional, "<Q", 0x18, image_base)
    else:
        _put(optional, "<I", 0x1C, image_base)
    _put(optional, "<H", 0x44, subsystem)

    table = b"".join(
        struct.pack(
            "<8sIIII16x",
            sec.name,
            sec.virtual_size,
            sec.virtual_address,
            sec.size_of_raw_data,
            sec.pointer_to_raw_data,
        )
        for sec in sections
    )

    return bytes(dos) + b"PE\x00\x00" + file_header + bytes(optional) + table + trailing


# Three-section PE32 sample used across the tests.
SAMPLE_SECTIONS = (
    Section(b".text", 0x1A2B, 0x1000, 0x1C00, 0x400),
    Section(b".rdata", 0x0840, 0x3000, 0x0A00, 0x2000),
    Section(b".data", 0x0310, 0x4000, 0x0200, 0x2A00),
)
