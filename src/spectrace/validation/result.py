"""Validation result assembly.

Combines load statistics and rule engine output into a single
ValidationResult and decides the verdict:

- any error                      -> fail (Outcome.ERRORS)
- warnings and strict mode       -> fail (Outcome.STRICT_WARNINGS)
- otherwise                      -> pass (Outcome.PASSED)

A specs root that cannot be scanned is reported separately as
Outcome.INVALID_PATH before any rule runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from spectrace.core.models import ArtifactCollection, DuplicateArtifact
from spectrace.core.rules import RuleResult, TraceabilityIssue


class Outcome(Enum):
    """Verdict of a traceability run."""

    PASSED = "passed"
    ERRORS = "errors"
    STRICT_WARNINGS = "strict_warnings"
    INVALID_PATH = "invalid_path"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    Outcome.PASSED: 0,
    Outcome.ERRORS: 1,
    Outcome.STRICT_WARNINGS: 2,
    Outcome.INVALID_PATH: 3,
}

MESSAGE_ERRORS = "Traceability validation failed with errors"
MESSAGE_STRICT_WARNINGS = "Traceability validation failed with warnings (strict mode)"
MESSAGE_PASSED_WITH_WARNINGS = "Traceability validation passed with warnings"
MESSAGE_PASSED = "All traceability checks passed"


@dataclass(frozen=True)
class Check:
    """Pass/fail view of one issue."""

    name: str
    passed: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "passed": self.passed, "message": self.message}


@dataclass(frozen=True)
class TraceabilityStats:
    """Artifact counts and the number of complete chains."""

    requirements: int = 0
    designs: int = 0
    tasks: int = 0
    valid_chains: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "requirements": self.requirements,
            "designs": self.designs,
            "tasks": self.tasks,
            "validChains": self.valid_chains,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one traceability validation run."""

    outcome: Outcome
    message: str
    strict: bool = False
    specs_path: Path | None = None
    stats: TraceabilityStats = field(default_factory=TraceabilityStats)
    errors: tuple[TraceabilityIssue, ...] = ()
    warnings: tuple[TraceabilityIssue, ...] = ()
    info: tuple[TraceabilityIssue, ...] = ()
    checks: tuple[Check, ...] = ()
    # Ids overwritten during loading; not part of the serialized report
    duplicates: tuple[DuplicateArtifact, ...] = ()

    @property
    def valid(self) -> bool:
        return self.outcome is Outcome.PASSED

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code

    def to_dict(self) -> dict[str, Any]:
        """Serializable mapping using the camelCase report field names."""
        data: dict[str, Any] = {
            "valid": self.valid,
            "checks": [c.to_dict() for c in self.checks],
            "message": self.message,
        }
        if self.specs_path is not None:
            data["specsPath"] = str(self.specs_path)
        data.update(
            {
                "strict": self.strict,
                "stats": self.stats.to_dict(),
                "errors": [i.to_dict() for i in self.errors],
                "warnings": [i.to_dict() for i in self.warnings],
                "info": [i.to_dict() for i in self.info],
                "exitCode": self.exit_code,
            }
        )
        return data


def build_checks(rule_result: RuleResult, strict: bool) -> tuple[Check, ...]:
    """One check per issue: errors fail, warnings fail only when strict, info passes."""
    checks = [Check(name=e.rule, passed=False, message=e.message) for e in rule_result.errors]
    checks += [
        Check(name=w.rule, passed=not strict, message=w.message) for w in rule_result.warnings
    ]
    checks += [Check(name=i.rule, passed=True, message=i.message) for i in rule_result.info]
    return tuple(checks)


def decide_outcome(rule_result: RuleResult, strict: bool) -> tuple[Outcome, str]:
    if rule_result.errors:
        return Outcome.ERRORS, MESSAGE_ERRORS
    if rule_result.warnings and strict:
        return Outcome.STRICT_WARNINGS, MESSAGE_STRICT_WARNINGS
    if rule_result.warnings:
        return Outcome.PASSED, MESSAGE_PASSED_WITH_WARNINGS
    return Outcome.PASSED, MESSAGE_PASSED


def assemble_result(
    specs: ArtifactCollection,
    rule_result: RuleResult,
    strict: bool = False,
    specs_path: Path | None = None,
) -> ValidationResult:
    """Combine load statistics and rule output into a ValidationResult.

    Args:
        specs: The collection the rules were evaluated over
        rule_result: Output of RuleEngine.validate()
        strict: Whether warnings alone fail the run
        specs_path: Root the collection was loaded from, if any

    Returns:
        Immutable ValidationResult
    """
    outcome, message = decide_outcome(rule_result, strict)
    return ValidationResult(
        outcome=outcome,
        message=message,
        strict=strict,
        specs_path=specs_path,
        stats=TraceabilityStats(
            requirements=len(specs.requirements),
            designs=len(specs.designs),
            tasks=len(specs.tasks),
            valid_chains=rule_result.valid_chains,
        ),
        errors=tuple(rule_result.errors),
        warnings=tuple(rule_result.warnings),
        info=tuple(rule_result.info),
        checks=build_checks(rule_result, strict),
        duplicates=tuple(specs.duplicates),
    )


def invalid_path_result(specs_path: Path, message: str, strict: bool = False) -> ValidationResult:
    """Result for a specs root that could not be scanned."""
    return ValidationResult(
        outcome=Outcome.INVALID_PATH,
        message=message,
        strict=strict,
        specs_path=specs_path,
    )
