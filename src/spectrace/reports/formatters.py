"""
spectrace.reports.formatters - Render a ValidationResult.

Provides JSON, markdown and console renderings. HTML lives in
spectrace.reports.html because it needs the optional Jinja2 dependency.
"""

import json
from typing import Callable, Dict, List, Sequence

from spectrace.core.rules import TraceabilityIssue
from spectrace.validation.result import ValidationResult

DEFAULT_FORMAT = "console"
PASSED_LINE = "All traceability checks passed!"


def format_json(result: ValidationResult) -> str:
    """Render the result as indented JSON."""
    return json.dumps(result.to_dict(), indent=2)


def _markdown_section(title: str, issues: Sequence[TraceabilityIssue]) -> List[str]:
    if not issues:
        return []
    lines = [f"## {title}", ""]
    lines.extend(f"- **{issue.rule}**: {issue.message}" for issue in issues)
    lines.append("")
    return lines


def format_markdown(result: ValidationResult) -> str:
    """Render the result as a markdown report.

    A summary table comes first; Errors, Warnings and Info sections follow
    and are left out when empty.
    """
    stats = result.stats
    lines = [
        "# Traceability Validation Report",
        "",
        "## Summary",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Requirements | {stats.requirements} |",
        f"| Designs | {stats.designs} |",
        f"| Tasks | {stats.tasks} |",
        f"| Valid Chains | {stats.valid_chains} |",
        f"| Errors | {len(result.errors)} |",
        f"| Warnings | {len(result.warnings)} |",
        "",
    ]
    lines += _markdown_section("Errors", result.errors)
    lines += _markdown_section("Warnings", result.warnings)
    lines += _markdown_section("Info", result.info)
    return "\n".join(lines) + "\n"


def _console_section(title: str, issues: Sequence[TraceabilityIssue]) -> List[str]:
    if not issues:
        return []
    lines = [f"{title} ({len(issues)}):"]
    lines.extend(f"  [{issue.rule}] {issue.message}" for issue in issues)
    lines.append("")
    return lines


def format_console(result: ValidationResult) -> str:
    """Render the result as a terse plain-text report."""
    stats = result.stats
    lines = [
        "Traceability Validation Report",
        "=" * 30,
        "",
        "Stats:",
        f"  Requirements: {stats.requirements}",
        f"  Designs:      {stats.designs}",
        f"  Tasks:        {stats.tasks}",
        f"  Valid Chains: {stats.valid_chains}",
        "",
    ]
    lines += _console_section("ERRORS", result.errors)
    lines += _console_section("WARNINGS", result.warnings)
    lines += _console_section("INFO", result.info)

    if not result.errors and not result.warnings:
        lines.append(PASSED_LINE)

    return "\n".join(lines) + "\n"


def _format_html(result: ValidationResult) -> str:
    from spectrace.reports.html import format_html

    return format_html(result)


FORMATTERS: Dict[str, Callable[[ValidationResult], str]] = {
    "json": format_json,
    "markdown": format_markdown,
    "console": format_console,
    "html": _format_html,
}


def format_result(result: ValidationResult, fmt: str = DEFAULT_FORMAT) -> str:
    """Render ``result`` in the named format; unknown names fall back to console."""
    return FORMATTERS.get(fmt, format_console)(result)
