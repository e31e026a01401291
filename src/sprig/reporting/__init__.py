"""
sprig reporting components.

This package provides the result accumulator, the report formatting
configuration and the text renderers.
"""

from sprig.reporting.format import DEFAULT_FORMAT, ReportFormat
from sprig.reporting.render import (
    Report,
    failure_lines_output,
    leaf_title,
    line_output,
    marked_title,
    pluralize,
    render_report,
    scope_title,
    summary_line,
)
from sprig.reporting.result import TestResult

__all__ = [
    "TestResult",
    "Report",
    "ReportFormat",
    "DEFAULT_FORMAT",
    "line_output",
    "marked_title",
    "scope_title",
    "leaf_title",
    "failure_lines_output",
    "summary_line",
    "render_report",
    "pluralize",
]
