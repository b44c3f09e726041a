"""
Bounds-Checked Binary Reader
=============================

Explicit-offset, little-endian access to an immutable byte buffer.

Every offset handed to the reader in a PE file is derived from a field that
an attacker controls, so each read validates ``offset + size`` against the
buffer length before touching the data.  The comparison is written as
``size > length - offset`` so that it holds for any offset, however large.

References:
    - Python ``struct`` module. https://docs.python.org/3/library/struct.html
"""

from __future__ import annotations

import struct
import sys

from pescope.core.exceptions import (
    SectionTableOverflowError,
    UnexpectedEndOfFileError,
)

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class BinaryReader:
    """Read fixed-width integers and fixed-length strings from a buffer.

    Usage::

        reader = BinaryReader(raw_bytes)
        magic = reader.read_u16(0)
        name = reader.read_fixed_string(offset, 8)
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        """Initialise the reader.

        Args:
            data: The complete buffer.  Mutable inputs are copied so the
                  reader always works on an immutable snapshot.
        """
        self._data: bytes = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        """The underlying immutable buffer."""
        return self._data

    # ------------------------------------------------------------------ #
    #  Bounds checking
    # ------------------------------------------------------------------ #

    def ensure_bounds(self, offset: int, size: int) -> None:
        """Raise unless ``size`` bytes are available at ``offset``.

        Raises:
            UnexpectedEndOfFileError: If the range is not inside the buffer.
        """
        length = len(self._data)
        if offset < 0 or size < 0 or offset > length or size > length - offset:
            raise UnexpectedEndOfFileError(offset, size, length)

    # ------------------------------------------------------------------ #
    #  Integer reads
    # ------------------------------------------------------------------ #

    def read_u16(self, offset: int) -> int:
        """Read an unsigned little-endian 16-bit value."""
        self.ensure_bounds(offset, _U16.size)
        return _U16.unpack_from(self._data, offset)[0]

    def read_u32(self, offset: int) -> int:
        """Read an unsigned little-endian 32-bit value."""
        self.ensure_bounds(offset, _U32.size)
        return _U32.unpack_from(self._data, offset)[0]

    def read_u64(self, offset: int) -> int:
        """Read an unsigned little-endian 64-bit value."""
        self.ensure_bounds(offset, _U64.size)
        return _U64.unpack_from(self._data, offset)[0]

    # ------------------------------------------------------------------ #
    #  Strings
    # ------------------------------------------------------------------ #

    def read_fixed_string(self, offset: int, max_len: int) -> str:
        """Read a fixed-length, NUL-terminated or NUL-padded string.

        ``max_len`` bytes must be in bounds even when the terminator comes
        earlier.  Bytes after the first NUL are ignored.  Each byte is kept
        as its raw 8-bit code (Latin-1), so no input is ever rejected.

        Args:
            offset: File offset of the first byte.
            max_len: Width of the field in bytes.

        Returns:
            The decoded prefix before the first NUL, or the whole field.
        """
        self.ensure_bounds(offset, max_len)
        raw = self._data[offset:offset + max_len]
        return raw.split(b"\x00", 1)[0].decode("latin-1")


def checked_table_size(count: int, entry_size: int, limit: int = sys.maxsize) -> int:
    """Return ``count * entry_size``, refusing products beyond ``limit``.

    Args:
        count: Number of table entries.
        entry_size: Size of one entry in bytes (must be positive).
        limit: Largest addressable size.  Defaults to the platform's
               ``sys.maxsize``.

    Raises:
        SectionTableOverflowError: If the table can not be addressed.
    """
    if count < 0 or count > limit // entry_size:
        raise SectionTableOverflowError()
    return count * entry_size
