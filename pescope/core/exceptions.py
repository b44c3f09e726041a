"""
Pescope Exceptions
===================

Error taxonomy for the PE inspector.  Every failure is terminal for the
current invocation: the parser and the byte source raise at the point of
detection and the CLI turns the exception into a one-line message.

Hierarchy::

    PescopeError
    +-- InputError
    |   +-- FileNotReadableError
    |   +-- EmptyFileError
    |   +-- FileTooLargeError
    +-- PEFormatError
        +-- UnexpectedEndOfFileError
        +-- TooSmallForDosHeaderError
        +-- InvalidDosSignatureError
        +-- InvalidPeSignatureError
        +-- OptionalHeaderTooSmallError
        +-- UnknownOptionalHeaderMagicError
        +-- SectionTableOverflowError
"""

from __future__ import annotations


class PescopeError(Exception):
    """Base class for all pescope errors."""


# ---------------------------------------------------------------------------
# Input acquisition
# ---------------------------------------------------------------------------

class InputError(PescopeError):
    """The input file could not be turned into a byte buffer."""


class FileNotReadableError(InputError):
    """The path does not exist, is not a regular file, or can not be read."""


class EmptyFileError(InputError):
    """The file exists but contains no bytes."""


class FileTooLargeError(InputError):
    """The file exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            f"File is too large: maximum supported size is {_human_size(limit)}."
        )


# ---------------------------------------------------------------------------
# Structural / format errors
# ---------------------------------------------------------------------------

class PEFormatError(PescopeError):
    """The buffer is not a well-formed PE image."""

    message = "Malformed PE file."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class UnexpectedEndOfFileError(PEFormatError):
    """A read would run past the end of the buffer."""

    message = "Unexpected end of file while reading PE data."

    def __init__(self, offset: int, size: int, length: int) -> None:
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__()


class TooSmallForDosHeaderError(PEFormatError):
    message = "File too small to contain a valid DOS header."


class InvalidDosSignatureError(PEFormatError):
    message = "Invalid DOS signature. Not a PE file."


class InvalidPeSignatureError(PEFormatError):
    message = "Invalid PE signature."


class OptionalHeaderTooSmallError(PEFormatError):
    message = "Optional header is too small."


class UnknownOptionalHeaderMagicError(PEFormatError):
    message = "Unknown optional header magic."

    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__()


class SectionTableOverflowError(PEFormatError):
    message = "Section table size overflows address space."


def _human_size(num_bytes: int) -> str:
    """Render a byte count as ``64 MiB`` when it is a whole number of MiB."""
    mib = 1024 * 1024
    if num_bytes >= mib and num_bytes % mib == 0:
        return f"{num_bytes // mib} MiB"
    return f"{num_bytes:,} bytes"
