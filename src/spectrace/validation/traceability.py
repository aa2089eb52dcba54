"""Traceability validation entry points.

``validate_traceability`` loads artifacts from a specs directory;
``validate_traceability_from_content`` takes already-parsed tables and
skips the filesystem entirely.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from spectrace.core.loader import load_all_artifacts
from spectrace.core.models import Artifact, ArtifactCollection
from spectrace.core.rules import RuleEngine, TraceabilityRulesConfig
from spectrace.validation.result import ValidationResult, assemble_result, invalid_path_result


def validate_collection(
    specs: ArtifactCollection,
    strict: bool = False,
    engine: RuleEngine | None = None,
    specs_path: Path | None = None,
) -> ValidationResult:
    """Run the rule engine over ``specs`` and assemble the result."""
    engine = engine or RuleEngine()
    return assemble_result(specs, engine.validate(specs), strict=strict, specs_path=specs_path)


def validate_traceability(
    specs_path: Path | str,
    strict: bool = False,
    config: TraceabilityRulesConfig | None = None,
) -> ValidationResult:
    """Validate traceability between the specs under ``specs_path``.

    Args:
        specs_path: Specs root holding requirements/, design/ and tasks/
        strict: Whether warnings alone fail the run
        config: Directory, pattern and prefix configuration

    Returns:
        ValidationResult; Outcome.INVALID_PATH when the root is missing,
        is not a directory or cannot be read
    """
    path = Path(specs_path)
    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        return invalid_path_result(path, f"Invalid specs path: {e}", strict=strict)

    if not resolved.exists():
        return invalid_path_result(path, f"Specs path not found: {path}", strict=strict)
    if not resolved.is_dir():
        return invalid_path_result(path, f"Specs path is not a directory: {path}", strict=strict)
    if not os.access(resolved, os.R_OK | os.X_OK):
        return invalid_path_result(path, f"Specs path is not readable: {path}", strict=strict)

    engine = RuleEngine(config)
    try:
        specs = load_all_artifacts(resolved, engine.config)
    except PermissionError as e:
        return invalid_path_result(
            path, f"Specs path is not readable: {e.filename or path}", strict=strict
        )
    return validate_collection(specs, strict=strict, engine=engine, specs_path=path)


def validate_traceability_from_content(
    requirements: Mapping[str, Artifact],
    designs: Mapping[str, Artifact],
    tasks: Mapping[str, Artifact],
    strict: bool = False,
    config: TraceabilityRulesConfig | None = None,
) -> ValidationResult:
    """Validate in-memory artifact tables.

    Useful when the caller has no direct file access or already holds the
    parsed headers. The result carries no specs path.
    """
    specs = ArtifactCollection.from_tables(requirements, designs, tasks)
    return validate_collection(specs, strict=strict, engine=RuleEngine(config))
