"""
spectrace.reports - Report rendering for validation results
"""

from spectrace.reports.formatters import (
    DEFAULT_FORMAT,
    FORMATTERS,
    format_console,
    format_json,
    format_markdown,
    format_result,
)

__all__ = [
    "DEFAULT_FORMAT",
    "FORMATTERS",
    "format_console",
    "format_json",
    "format_markdown",
    "format_result",
]
