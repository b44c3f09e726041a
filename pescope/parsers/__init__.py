"""
Pescope Parsers Module
=======================

Bounds-checked binary reader, PE header parser and symbolic lookup tables.
"""

from pescope.parsers.binary_reader import BinaryReader, checked_table_size
from pescope.parsers.lookup import machine_name, subsystem_name
from pescope.parsers.pe_parser import PEParser

__all__ = [
    "BinaryReader",
    "PEParser",
    "checked_table_size",
    "machine_name",
    "subsystem_name",
]
