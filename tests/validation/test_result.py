"""Tests for validation result assembly."""

from pathlib import Path

from spectrace.core.models import Artifact, ArtifactCollection, DuplicateArtifact
from spectrace.core.rules import (
    RULE_FORWARD,
    RULE_REFERENCE,
    RULE_STATUS,
    RuleResult,
    Severity,
    TraceabilityIssue,
)
from spectrace.validation.result import (
    Check,
    Outcome,
    assemble_result,
    invalid_path_result,
)

ERROR = TraceabilityIssue(
    rule=RULE_REFERENCE, source="TASK-001", target="DESIGN-9", message="broken"
)
WARNING = TraceabilityIssue(
    rule=RULE_FORWARD, source="REQ-001", message="orphan", severity=Severity.WARNING
)
INFO = TraceabilityIssue(
    rule=RULE_STATUS, source="TASK-002", target="DESIGN-1", message="drift", severity=Severity.INFO
)


def rules(errors=(), warnings=(), info=(), valid_chains=0):
    return RuleResult(
        errors=list(errors), warnings=list(warnings), info=list(info), valid_chains=valid_chains
    )


class TestOutcome:
    """Verdict selection."""

    def test_clean(self):
        result = assemble_result(ArtifactCollection(), rules())

        assert result.outcome is Outcome.PASSED
        assert result.valid
        assert result.message == "All traceability checks passed"

    def test_errors_win_over_strict_warnings(self):
        result = assemble_result(ArtifactCollection(), rules([ERROR], [WARNING]), strict=True)

        assert result.outcome is Outcome.ERRORS
        assert result.exit_code == 1

    def test_warnings_strict(self):
        result = assemble_result(ArtifactCollection(), rules(warnings=[WARNING]), strict=True)

        assert result.outcome is Outcome.STRICT_WARNINGS
        assert result.exit_code == 2

    def test_warnings_non_strict(self):
        result = assemble_result(ArtifactCollection(), rules(warnings=[WARNING]))

        assert result.outcome is Outcome.PASSED
        assert result.message == "Traceability validation passed with warnings"

    def test_info_never_fails(self):
        result = assemble_result(ArtifactCollection(), rules(info=[INFO]), strict=True)

        assert result.valid
        assert result.message == "All traceability checks passed"

    def test_exit_codes_are_distinct(self):
        codes = {outcome.exit_code for outcome in Outcome}

        assert codes == {0, 1, 2, 3}


class TestChecks:
    """Per-issue checks."""

    def test_check_order_and_pass_state(self):
        result = assemble_result(
            ArtifactCollection(), rules([ERROR], [WARNING], [INFO]), strict=False
        )

        assert result.checks == (
            Check(name=RULE_REFERENCE, passed=False, message="broken"),
            Check(name=RULE_FORWARD, passed=True, message="orphan"),
            Check(name=RULE_STATUS, passed=True, message="drift"),
        )

    def test_warning_checks_fail_in_strict_mode(self):
        result = assemble_result(ArtifactCollection(), rules(warnings=[WARNING]), strict=True)

        assert [c.passed for c in result.checks] == [False]


class TestAssembleResult:
    """Statistics and serialization."""

    def test_stats_from_collection(self):
        specs = ArtifactCollection.from_tables(
            requirements={"REQ-001": Artifact(id="REQ-001"), "REQ-002": Artifact(id="REQ-002")},
            tasks={"TASK-001": Artifact(id="TASK-001")},
        )

        result = assemble_result(specs, rules(valid_chains=4))

        assert result.stats.requirements == 2
        assert result.stats.designs == 0
        assert result.stats.tasks == 1
        assert result.stats.valid_chains == 4

    def test_to_dict(self):
        result = assemble_result(
            ArtifactCollection(),
            rules([ERROR], [WARNING], [INFO], valid_chains=1),
            strict=True,
            specs_path=Path("specs"),
        )

        data = result.to_dict()

        assert list(data) == [
            "valid",
            "checks",
            "message",
            "specsPath",
            "strict",
            "stats",
            "errors",
            "warnings",
            "info",
            "exitCode",
        ]
        assert data["specsPath"] == "specs"
        assert data["strict"] is True
        assert data["stats"]["validChains"] == 1
        assert data["errors"] == [
            {
                "rule": RULE_REFERENCE,
                "source": "TASK-001",
                "target": "DESIGN-9",
                "message": "broken",
            }
        ]
        assert data["warnings"] == [
            {"rule": RULE_FORWARD, "source": "REQ-001", "message": "orphan"}
        ]
        assert data["exitCode"] == 1

    def test_duplicates_not_serialized(self):
        specs = ArtifactCollection(
            duplicates=[DuplicateArtifact(id="REQ-001", kept=None, replaced=None)]
        )

        result = assemble_result(specs, rules())

        assert [d.id for d in result.duplicates] == ["REQ-001"]
        assert "duplicates" not in result.to_dict()


class TestInvalidPathResult:
    """Filesystem failures."""

    def test_invalid_path(self):
        result = invalid_path_result(Path("missing"), "Specs path not found: missing", strict=True)

        assert result.outcome is Outcome.INVALID_PATH
        assert not result.valid
        assert result.exit_code == 3
        assert result.checks == ()
        assert result.to_dict()["exitCode"] == 3
