"""
PE/COFF Header Parser
======================

Struct-based parser for the headers of the Portable Executable (PE) format
used by Microsoft Windows for executables (.exe), dynamic link libraries
(.dll) and drivers.  Both PE32 (32-bit) and PE32+ (64-bit) optional headers
are supported.

The parser walks the self-describing layout in a fixed order and stops at
the first inconsistency:

    - DOS header (``MZ`` stub) and its ``e_lfanew`` pointer
    - PE signature (``PE\\0\\0``)
    - COFF file header
    - Optional header (magic, entry point, image base, subsystem)
    - Section table

Every read goes through :class:`BinaryReader`, so a forged offset or count
produces :class:`UnexpectedEndOfFileError` instead of reading garbage.
There is no best-effort mode: a parse either returns a complete
:class:`PeMetadata` or raises a :class:`PEFormatError`.

References:
    - Microsoft. (2024). PE Format. Microsoft Learn.
      https://learn.microsoft.com/en-us/windows/win32/debug/pe-format
    - Pietrek, M. (1994). Peering Inside the PE: A Tour of the Win32
      Portable Executable File Format. Microsoft Systems Journal.
"""

from __future__ import annotations

import sys

from pescope.core.exceptions import (
    InvalidDosSignatureError,
    InvalidPeSignatureError,
    OptionalHeaderTooSmallError,
    TooSmallForDosHeaderError,
    UnknownOptionalHeaderMagicError,
)
from pescope.core.models import (
    PE32_MAGIC,
    PE32PLUS_MAGIC,
    FileHeader,
    OptionalHeader,
    PeMetadata,
    SectionHeader,
)
from pescope.parsers.binary_reader import BinaryReader, checked_table_size


# ---------------------------------------------------------------------------
# PE Constants
# ---------------------------------------------------------------------------

# Magic numbers
DOS_MAGIC: int = 0x5A4D          # "MZ"
PE_MAGIC: int = 0x00004550       # "PE\0\0"

# DOS header
DOS_HEADER_SIZE: int = 0x40
E_LFANEW_OFFSET: int = 0x3C

# COFF file header
PE_SIGNATURE_SIZE: int = 4
FILE_HEADER_SIZE: int = 20

# Smallest optional header that still holds the subsystem field
MIN_OPTIONAL_HEADER_SIZE: int = 0x46

# Optional header field offsets
OPT_ENTRY_POINT: int = 0x10
OPT_IMAGE_BASE_PE32PLUS: int = 0x18
OPT_IMAGE_BASE_PE32: int = 0x1C
OPT_SUBSYSTEM: int = 0x44

# IMAGE_SECTION_HEADER is always 40 bytes
SECTION_HEADER_SIZE: int = 40
SECTION_NAME_SIZE: int = 8


class PEParser:
    """Validating parser for PE file, optional and section headers.

    Usage::

        parser = PEParser(raw_bytes)
        metadata = parser.parse()
        print(metadata.optional_header.image_base)
    """

    def __init__(self, data: bytes, *, address_limit: int = sys.maxsize) -> None:
        """Initialise the parser with raw binary data.

        Args:
            data: Complete PE file contents.
            address_limit: Largest table size the parser may address.
                           Defaults to the platform's ``sys.maxsize``.
        """
        self._reader: BinaryReader = BinaryReader(data)
        self._address_limit: int = address_limit

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    def parse(self) -> PeMetadata:
        """Parse the PE headers.

        Returns:
            The assembled, immutable metadata.

        Raises:
            PEFormatError: On the first structural or signature error.
        """
        pe_offset = self._parse_dos_header()
        self._verify_pe_signature(pe_offset)

        file_header_offset = pe_offset + PE_SIGNATURE_SIZE
        file_header = self._parse_file_header(file_header_offset)

        optional_header_offset = file_header_offset + FILE_HEADER_SIZE
        optional_header = self._parse_optional_header(
            optional_header_offset, file_header.size_of_optional_header
        )

        section_table_offset = (
            optional_header_offset + file_header.size_of_optional_header
        )
        sections = self._parse_section_table(
            section_table_offset, file_header.number_of_sections
        )

        return PeMetadata(
            file_header=file_header,
            optional_header=optional_header,
            sections=sections,
        )

    # ------------------------------------------------------------------ #
    #  DOS header / PE signature
    # ------------------------------------------------------------------ #

    def _parse_dos_header(self) -> int:
        """Validate the MZ stub and return ``e_lfanew``."""
        reader = self._reader
        if len(reader) < DOS_HEADER_SIZE:
            raise TooSmallForDosHeaderError()
        if reader.read_u16(0) != DOS_MAGIC:
            raise InvalidDosSignatureError()

        pe_offset = reader.read_u32(E_LFANEW_OFFSET)
        reader.ensure_bounds(pe_offset, PE_SIGNATURE_SIZE)
        return pe_offset

    def _verify_pe_signature(self, pe_offset: int) -> None:
        if self._reader.read_u32(pe_offset) != PE_MAGIC:
            raise InvalidPeSignatureError()

    # ------------------------------------------------------------------ #
    #  COFF header
    # ------------------------------------------------------------------ #

    def _parse_file_header(self, offset: int) -> FileHeader:
        """Parse the COFF file header (20 bytes after the PE signature)."""
        reader = self._reader
        reader.ensure_bounds(offset, FILE_HEADER_SIZE)

        file_header = FileHeader(
            machine=reader.read_u16(offset + 0),
            number_of_sections=reader.read_u16(offset + 2),
            time_date_stamp=reader.read_u32(offset + 4),
            pointer_to_symbol_table=reader.read_u32(offset + 8),
            number_of_symbols=reader.read_u32(offset + 12),
            size_of_optional_header=reader.read_u16(offset + 16),
            characteristics=reader.read_u16(offset + 18),
        )

        if file_header.size_of_optional_header < MIN_OPTIONAL_HEADER_SIZE:
            raise OptionalHeaderTooSmallError()
        return file_header

    # ------------------------------------------------------------------ #
    #  Optional header
    # ------------------------------------------------------------------ #

    def _parse_optional_header(self, offset: int, size: int) -> OptionalHeader:
        """Parse the optional header (PE32 or PE32+).

        The two formats place the image base differently: PE32 keeps a
        32-bit ``BaseOfData`` at 0x18 and a 32-bit image base at 0x1C,
        while PE32+ drops ``BaseOfData`` and stores a 64-bit image base
        at 0x18.
        """
        reader = self._reader
        reader.ensure_bounds(offset, size)

        magic = reader.read_u16(offset)
        if magic == PE32_MAGIC:
            is_pe32_plus = False
        elif magic == PE32PLUS_MAGIC:
            is_pe32_plus = True
        else:
            raise UnknownOptionalHeaderMagicError(magic)

        if is_pe32_plus:
            image_base = reader.read_u64(offset + OPT_IMAGE_BASE_PE32PLUS)
        else:
            image_base = reader.read_u32(offset + OPT_IMAGE_BASE_PE32)

        return OptionalHeader(
            is_pe32_plus=is_pe32_plus,
            magic=magic,
            address_of_entry_point=reader.read_u32(offset + OPT_ENTRY_POINT),
            image_base=image_base,
            subsystem=reader.read_u16(offset + OPT_SUBSYSTEM),
        )

    # ------------------------------------------------------------------ #
    #  Section table
    # ------------------------------------------------------------------ #

    def _parse_section_table(
        self, offset: int, count: int
    ) -> tuple[SectionHeader, ...]:
        """Parse ``count`` section headers starting at ``offset``.

        The whole table is bounds-checked up front, so a truncated table
        fails before any entry is produced.
        """
        reader = self._reader
        table_size = checked_table_size(
            count, SECTION_HEADER_SIZE, limit=self._address_limit
        )
        reader.ensure_bounds(offset, table_size)

        sections: list[SectionHeader] = []
        for i in range(count):
            sec_offset = offset + i * SECTION_HEADER_SIZE
            sections.append(SectionHeader(
                name=reader.read_fixed_string(sec_offset, SECTION_NAME_SIZE),
                virtual_size=reader.read_u32(sec_offset + 8),
                virtual_address=reader.read_u32(sec_offset + 12),
                size_of_raw_data=reader.read_u32(sec_offset + 16),
                pointer_to_raw_data=reader.read_u32(sec_offset + 20),
            ))
        return tuple(sections)
