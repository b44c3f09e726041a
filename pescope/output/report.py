"""
Pescope Report Generator
=========================

Builds JSON reports from inspection results.  Raw header fields are kept
as integers; the symbolic names and the decoded time stamp are added next
to them so a consumer never has to carry its own lookup tables.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pescope import __version__
from pescope.core.models import InspectionResult
from pescope.output.console import timestamp_iso
from pescope.parsers.lookup import machine_name, subsystem_name

REPORT_TYPE = "pescope_pe_metadata"


class PescopeReportGenerator:
    """Generate JSON reports from :class:`InspectionResult` objects.

    Usage::

        generator = PescopeReportGenerator(indent=2)
        text = generator.to_json(result)
        generator.generate_json(result, "report.json")
    """

    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def build(self, result: InspectionResult) -> dict[str, Any]:
        """Assemble the report as a plain dictionary."""
        metadata = result.metadata
        file_header = metadata.file_header
        optional_header = metadata.optional_header

        return {
            "report_type": REPORT_TYPE,
            "version": __version__,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "path": result.path,
            "size": result.size,
            "metadata": {
                "file_header": {
                    **file_header.model_dump(mode="json"),
                    "machine_name": machine_name(file_header.machine),
                    "timestamp_utc": timestamp_iso(file_header.time_date_stamp),
                },
                "optional_header": {
                    **optional_header.model_dump(mode="json"),
                    "format": optional_header.format_name,
                    "subsystem_name": subsystem_name(optional_header.subsystem),
                },
                "sections": [
                    {"index": index, **section.model_dump(mode="json")}
                    for index, section in enumerate(metadata.sections)
                ],
            },
        }

    def to_json(self, result: InspectionResult) -> str:
        """Serialise the report to a JSON string."""
        return json.dumps(
            self.build(result), indent=self._indent, ensure_ascii=False
        )

    def generate_json(self, result: InspectionResult, output_path: str | Path) -> str:
        """Write the JSON report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(result) + "\n", encoding="utf-8")
        return str(path.resolve())
