"""
Pescope -- PE Header Inspector
===============================

Pescope reads a Windows Portable Executable (PE) file and reports its
structural metadata: the COFF file header, the PE32 / PE32+ optional header
and the section table.  It is a read-only, offline inspection tool; every
offset taken from the file is bounds-checked before it is trusted.

Capabilities:
    - DOS stub and PE signature validation
    - COFF file header and optional header extraction (PE32 and PE32+)
    - Section table extraction
    - Symbolic machine-type and subsystem names
    - Text and JSON reports

References:
    - Microsoft. (2024). PE Format.
    - Pietrek, M. (1994). Peering Inside the PE.
"""

__version__ = "1.0.0"

from pescope.core.engine import InspectEngine
from pescope.core.models import (
    FileHeader,
    InspectionResult,
    OptionalHeader,
    PeMetadata,
    SectionHeader,
)
from pescope.parsers.pe_parser import PEParser

__all__ = [
    "FileHeader",
    "InspectEngine",
    "InspectionResult",
    "OptionalHeader",
    "PEParser",
    "PeMetadata",
    "SectionHeader",
]
