"""
spectrace.commands.validate - Validate traceability command.

Loads the specs tree, runs the traceability rules and prints the report.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from spectrace.config import ConfigError, ConfigLoader, get_config
from spectrace.core.rules import TraceabilityRulesConfig
from spectrace.reports import DEFAULT_FORMAT, format_result
from spectrace.validation import Outcome, ValidationResult, validate_traceability


def run(args: argparse.Namespace) -> int:
    """
    Run the validate command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code of the validation outcome (0, 1, 2 or 3)
    """
    config = load_configuration(args)
    if config is None:
        return 1

    try:
        rules_config = TraceabilityRulesConfig.from_dict(config.section("traceability"))
        strict = args.strict if args.strict is not None else config.get_bool("traceability.strict")
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    specs_path = args.specs_path or Path(config.get("traceability.specs_path", ".agents/specs"))
    fmt = args.format or config.get("traceability.format", DEFAULT_FORMAT)

    if args.verbose:
        mode = " (strict)" if strict else ""
        print(f"Validating traceability in: {specs_path}{mode}", file=sys.stderr)

    result = validate_traceability(specs_path, strict=strict, config=rules_config)

    if result.outcome is Outcome.INVALID_PATH:
        print(f"Error: {result.message}", file=sys.stderr)
        return result.exit_code

    if args.verbose:
        print_duplicates(result)

    output = format_result(result, fmt)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        if not args.quiet:
            print(f"Report written to: {args.output}", file=sys.stderr)
    elif not args.quiet or not result.valid:
        print(output, end="")

    return result.exit_code


def print_duplicates(result: ValidationResult) -> None:
    """Print ids that were declared by more than one file."""
    for duplicate in result.duplicates:
        print(
            f"Warning: duplicate id {duplicate.id}: {duplicate.kept} replaces {duplicate.replaced}",
            file=sys.stderr,
        )


def load_configuration(args: argparse.Namespace) -> Optional[ConfigLoader]:
    """Load configuration from file or use defaults."""
    try:
        return ConfigLoader.from_dict(get_config(args.config, start_path=Path.cwd()))
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
