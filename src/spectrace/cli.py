"""
spectrace.cli - Command-line interface.

Main entry point for the spectrace CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from spectrace import __version__
from spectrace.commands import config_cmd, validate
from spectrace.reports import FORMATTERS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="spectrace",
        description="Traceability validation for requirement, design and task specs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  spectrace validate                        # Validate .agents/specs
  spectrace validate docs/specs --strict    # Warnings fail the run
  spectrace validate --format markdown      # Markdown report
  spectrace validate --format json -o r.json

Configuration:
  spectrace config path         # Show config file location
  spectrace config show         # View effective settings

Exit codes (validate):
  0  passed (possibly with warnings)
  1  errors found
  2  warnings found in strict mode
  3  specs path missing or not a directory
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"spectrace {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate traceability between requirements, designs and tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Rules:
  Rule 1  Forward Traceability   every REQ is cited by a DESIGN   (warning)
  Rule 2  Backward Traceability  every TASK cites a DESIGN        (error)
  Rule 3  Complete Chain         every DESIGN has REQ and TASK     (warning)
  Rule 4  Reference Validity     cited ids exist                  (error)
  Rule 5  Status Consistency     completed TASK, unfinished DESIGN (info)
""",
    )
    validate_parser.add_argument(
        "specs_path",
        nargs="?",
        type=Path,
        help="Specs root containing requirements/, design/ and tasks/ "
        "(default: traceability.specs_path from config)",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat warnings as failures (exit code 2)",
    )
    validate_parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        help="Output format (default: traceability.format from config)",
    )
    validate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the report to a file instead of stdout",
        metavar="PATH",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    show_parser = config_subparsers.add_parser("show", help="Show effective configuration")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    config_subparsers.add_parser("path", help="Show config file location")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "validate":
        return validate.run(args)
    if args.command == "config":
        return config_cmd.run(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
