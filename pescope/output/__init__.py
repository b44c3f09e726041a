"""
Pescope Output Module
======================

Text display and JSON report generation for parsed PE metadata.
"""

from pescope.output.console import PescopeConsoleOutput
from pescope.output.report import PescopeReportGenerator

__all__ = [
    "PescopeConsoleOutput",
    "PescopeReportGenerator",
]
