"""
Pescope Core Module
====================

Contains the inspection engine, the data models and the error taxonomy.
"""

from pescope.core.engine import InspectEngine
from pescope.core.exceptions import (
    EmptyFileError,
    FileNotReadableError,
    FileTooLargeError,
    InputError,
    InvalidDosSignatureError,
    InvalidPeSignatureError,
    OptionalHeaderTooSmallError,
    PEFormatError,
    PescopeError,
    SectionTableOverflowError,
    TooSmallForDosHeaderError,
    UnexpectedEndOfFileError,
    UnknownOptionalHeaderMagicError,
)
from pescope.core.models import (
    FileHeader,
    InspectionResult,
    OptionalHeader,
    PeMetadata,
    SectionHeader,
)

__all__ = [
    "EmptyFileError",
    "FileHeader",
    "FileNotReadableError",
    "FileTooLargeError",
    "InputError",
    "InspectEngine",
    "InspectionResult",
    "InvalidDosSignatureError",
    "InvalidPeSignatureError",
    "OptionalHeader",
    "OptionalHeaderTooSmallError",
    "PEFormatError",
    "PeMetadata",
    "PescopeError",
    "SectionHeader",
    "SectionTableOverflowError",
    "TooSmallForDosHeaderError",
    "UnexpectedEndOfFileError",
    "UnknownOptionalHeaderMagicError",
]
