"""
Pescope Data Models
====================

Pydantic models for the structural metadata extracted from a PE image.
All models are frozen: they are created once during a parse and handed to
the presentation layer as immutable values.  Field bounds mirror the width
of the on-disk field, so a model can never hold a value the file format
could not encode.

References:
    - Microsoft. (2024). PE Format. Microsoft Learn.
      https://learn.microsoft.com/en-us/windows/win32/debug/pe-format
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

U16_MAX: int = 0xFFFF
U32_MAX: int = 0xFFFF_FFFF
U64_MAX: int = 0xFFFF_FFFF_FFFF_FFFF

PE32_MAGIC: int = 0x10B
PE32PLUS_MAGIC: int = 0x20B


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# COFF file header
# ---------------------------------------------------------------------------

class FileHeader(_FrozenModel):
    """The 20-byte COFF file header following the PE signature.

    Attributes:
        machine: Target machine type code.
        number_of_sections: Number of entries in the section table.
        time_date_stamp: Link time, seconds since the Unix epoch (UTC).
        pointer_to_symbol_table: File offset of the COFF symbol table.
            Informational only; deprecated for images.
        number_of_symbols: Number of COFF symbol table entries.
            Informational only.
        size_of_optional_header: Size of the optional header in bytes.
        characteristics: File attribute bit flags.
    """
    machine: int = Field(default=0, ge=0, le=U16_MAX)
    number_of_sections: int = Field(default=0, ge=0, le=U16_MAX)
    time_date_stamp: int = Field(default=0, ge=0, le=U32_MAX)
    pointer_to_symbol_table: int = Field(default=0, ge=0, le=U32_MAX)
    number_of_symbols: int = Field(default=0, ge=0, le=U32_MAX)
    size_of_optional_header: int = Field(default=0, ge=0, le=U16_MAX)
    characteristics: int = Field(default=0, ge=0, le=U16_MAX)


# ---------------------------------------------------------------------------
# Optional header
# ---------------------------------------------------------------------------

class OptionalHeader(_FrozenModel):
    """The subset of the PE32 / PE32+ optional header this tool reports.

    Attributes:
        is_pe32_plus: ``True`` for PE32+ (64-bit) images.
        magic: ``0x10B`` (PE32) or ``0x20B`` (PE32+).
        address_of_entry_point: Entry point RVA.
        image_base: Preferred load address; 32-bit for PE32, 64-bit for PE32+.
        subsystem: Windows subsystem code.
    """
    is_pe32_plus: bool = False
    magic: int = Field(default=PE32_MAGIC, ge=0, le=U16_MAX)
    address_of_entry_point: int = Field(default=0, ge=0, le=U32_MAX)
    image_base: int = Field(default=0, ge=0, le=U64_MAX)
    subsystem: int = Field(default=0, ge=0, le=U16_MAX)

    @property
    def format_name(self) -> str:
        """``"PE32+"`` or ``"PE32"``."""
        return "PE32+" if self.is_pe32_plus else "PE32"


# ---------------------------------------------------------------------------
# Section table
# ---------------------------------------------------------------------------

class SectionHeader(_FrozenModel):
    """One 40-byte entry of the section table.

    The raw pointer and size are reported as found; they are not checked
    against the file length.
    """
    name: str = Field(default="", max_length=8)
    virtual_size: int = Field(default=0, ge=0, le=U32_MAX)
    virtual_address: int = Field(default=0, ge=0, le=U32_MAX)
    size_of_raw_data: int = Field(default=0, ge=0, le=U32_MAX)
    pointer_to_raw_data: int = Field(default=0, ge=0, le=U32_MAX)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class PeMetadata(_FrozenModel):
    """Everything a single parse produces: both headers and the sections
    in on-disk order."""
    file_header: FileHeader = Field(default_factory=FileHeader)
    optional_header: OptionalHeader = Field(default_factory=OptionalHeader)
    sections: tuple[SectionHeader, ...] = ()


class InspectionResult(_FrozenModel):
    """Parsed metadata together with the input it came from.

    Attributes:
        path: Resolved path of the inspected file, or ``"<memory>"``.
        size: Input size in bytes.
        metadata: The parsed headers.
    """
    path: str = "<memory>"
    size: int = Field(default=0, ge=0)
    metadata: PeMetadata = Field(default_factory=PeMetadata)
