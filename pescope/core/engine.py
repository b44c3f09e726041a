"""
Pescope Inspection Engine
==========================

Orchestrates a single inspection: acquire the input bytes, run the PE
header parser, and wrap the result for presentation.

Pipeline:
    1. Validate the input path (exists, regular file, readable)
    2. Enforce the size cap (empty and oversized inputs are rejected)
    3. Read the whole file into an immutable buffer
    4. Parse DOS header, PE signature, file header, optional header and
       section table

Every failure raises a :class:`~pescope.core.exceptions.PescopeError`
subclass; the engine logs it and lets it propagate.
"""

from __future__ import annotations

from pathlib import Path

from shared.config import PescopeConfig
from shared.logger import PescopeLogger

from pescope.core.exceptions import (
    EmptyFileError,
    FileNotReadableError,
    FileTooLargeError,
    PEFormatError,
)
from pescope.core.models import InspectionResult, PeMetadata
from pescope.parsers.lookup import machine_name
from pescope.parsers.pe_parser import PEParser


class InspectEngine:
    """Read a file and extract its PE structural metadata.

    Usage::

        engine = InspectEngine()
        result = engine.inspect("/path/to/binary.exe")
        print(result.metadata.file_header.machine)

    Or on bytes already in memory::

        metadata = engine.parse(raw_bytes)
    """

    def __init__(
        self,
        config: PescopeConfig | None = None,
        logger: PescopeLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Pescope configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: PescopeConfig = config or PescopeConfig()
        self._logger: PescopeLogger = logger or PescopeLogger("engine")

    @property
    def max_file_size(self) -> int:
        return self._config.inspect.max_file_size

    # ------------------------------------------------------------------ #
    #  Main entry points
    # ------------------------------------------------------------------ #

    def inspect(self, file_path: str | Path) -> InspectionResult:
        """Load *file_path* and parse its PE headers.

        Raises:
            InputError: If the file can not be loaded.
            PEFormatError: If the contents are not a well-formed PE image.
        """
        path = Path(file_path)
        data = self.load_file(path)
        metadata = self.parse(data)
        return InspectionResult(
            path=str(path.resolve()),
            size=len(data),
            metadata=metadata,
        )

    def parse(self, data: bytes) -> PeMetadata:
        """Parse an in-memory buffer.

        Raises:
            PEFormatError: On the first structural or signature error.
        """
        with self._logger.operation("parse"), self._logger.timed("PE header parse"):
            try:
                metadata = PEParser(data).parse()
            except PEFormatError as exc:
                self._logger.debug("PE parsing failed: %s", exc)
                raise

            header = metadata.file_header
            self._logger.info(
                "PE: %s %s, %d sections",
                machine_name(header.machine),
                metadata.optional_header.format_name,
                len(metadata.sections),
            )
        return metadata

    # ------------------------------------------------------------------ #
    #  Byte source
    # ------------------------------------------------------------------ #

    def load_file(self, file_path: str | Path) -> bytes:
        """Read the whole file, enforcing the configured size cap.

        Args:
            file_path: Path to the input file.

        Returns:
            The complete file contents.

        Raises:
            FileNotReadableError: The path is missing, not a regular file,
                                  or can not be read.
            EmptyFileError: The file has no contents.
            FileTooLargeError: The file exceeds ``max_file_size``.
        """
        path = Path(file_path)
        with self._logger.operation("load"):
            self._logger.debug("Loading %s", path)

            try:
                file_size = path.stat().st_size
            except OSError as exc:
                self._logger.debug("Cannot stat %s: %s", path, exc)
                raise FileNotReadableError(f"Unable to open file: {path}") from exc

            if not path.is_file():
                raise FileNotReadableError(f"Unable to open file: {path}")
            if file_size == 0:
                raise EmptyFileError(f"File is empty: {path}")

            max_size = self.max_file_size
            if file_size > max_size:
                raise FileTooLargeError(file_size, max_size)

            try:
                with open(path, "rb") as fh:
                    data = fh.read(max_size + 1)
            except OSError as exc:
                self._logger.debug("Cannot read %s: %s", path, exc)
                raise FileNotReadableError(f"Failed to read file: {path}") from exc

            # The file may change between stat() and read()
            if not data:
                raise EmptyFileError(f"File is empty: {path}")
            if len(data) > max_size:
                raise FileTooLargeError(len(data), max_size)

            self._logger.debug("Read %d bytes from %s", len(data), path)
            return data
