"""
spectrace.core.rules - Traceability rule engine.

Builds the reference indices between requirements, designs and tasks and
evaluates the traceability rules:

1. Forward Traceability - every requirement is cited by a design
2. Backward Traceability - every task cites a design
3. Complete Chain - every design cites a requirement and is cited by a task
4. Reference Validity - cited designs/requirements exist
5. Status Consistency - a completed task's designs are completed too
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from spectrace.config import ConfigError
from spectrace.core.models import ArtifactCollection, ArtifactKind

RULE_FORWARD = "Rule 1: Forward Traceability"
RULE_BACKWARD = "Rule 2: Backward Traceability"
RULE_CHAIN = "Rule 3: Complete Chain"
RULE_REFERENCE = "Rule 4: Reference Validity"
RULE_STATUS = "Rule 5: Status Consistency"

DEFAULT_COMPLETED_STATUSES = ("complete", "done", "implemented")


class Severity(Enum):
    """Severity level for traceability issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class TraceabilityIssue:
    """
    A single traceability rule violation.

    Attributes:
        rule: Rule name (e.g., "Rule 4: Reference Validity")
        source: ID of the artifact the issue was found on
        message: Human-readable description
        target: Referenced ID, when the issue concerns a reference
        severity: Severity tier the issue was reported under
    """

    rule: str
    source: str
    message: str
    target: str | None = None
    severity: Severity = Severity.ERROR

    @property
    def rule_title(self) -> str:
        """Rule name without its "Rule N: " numbering."""
        _, sep, title = self.rule.partition(": ")
        return title if sep else self.rule

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rule": self.rule, "source": self.source}
        if self.target is not None:
            data["target"] = self.target
        data["message"] = self.message
        return data

    def __str__(self) -> str:
        return f"[{self.rule}] {self.message}"


def _default_directories() -> dict[ArtifactKind, str]:
    return {
        ArtifactKind.REQUIREMENT: "requirements",
        ArtifactKind.DESIGN: "design",
        ArtifactKind.TASK: "tasks",
    }


def _default_patterns() -> dict[ArtifactKind, str]:
    return {
        ArtifactKind.REQUIREMENT: "REQ-*.md",
        ArtifactKind.DESIGN: "DESIGN-*.md",
        ArtifactKind.TASK: "TASK-*.md",
    }


@dataclass
class TraceabilityRulesConfig:
    """Configuration for artifact discovery and traceability rules."""

    requirement_prefix: str = "REQ-"
    design_prefix: str = "DESIGN-"
    task_prefix: str = "TASK-"
    completed_statuses: list[str] = field(
        default_factory=lambda: list(DEFAULT_COMPLETED_STATUSES)
    )
    directories: dict[ArtifactKind, str] = field(default_factory=_default_directories)
    patterns: dict[ArtifactKind, str] = field(default_factory=_default_patterns)

    def __post_init__(self):
        """Normalize completed statuses for case-insensitive comparison."""
        self.completed_statuses = [s.lower() for s in self.completed_statuses]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraceabilityRulesConfig":
        """Create config from the [traceability] configuration section.

        Args:
            data: Dictionary from the [traceability] config section

        Returns:
            TraceabilityRulesConfig instance

        Raises:
            ConfigError: If completed_statuses is not a list of strings
        """
        prefixes = data.get("prefixes", {})
        directories = data.get("directories", {})
        patterns = data.get("patterns", {})
        default_dirs = _default_directories()
        default_patterns = _default_patterns()
        completed = data.get("completed_statuses", list(DEFAULT_COMPLETED_STATUSES))
        if not isinstance(completed, (list, tuple)) or not all(
            isinstance(status, str) for status in completed
        ):
            raise ConfigError(
                f"traceability.completed_statuses must be a list of strings, got {completed!r}"
            )

        return cls(
            requirement_prefix=prefixes.get("requirement", "REQ-"),
            design_prefix=prefixes.get("design", "DESIGN-"),
            task_prefix=prefixes.get("task", "TASK-"),
            completed_statuses=list(completed),
            directories={
                ArtifactKind.REQUIREMENT: directories.get(
                    "requirements", default_dirs[ArtifactKind.REQUIREMENT]
                ),
                ArtifactKind.DESIGN: directories.get(
                    "designs", default_dirs[ArtifactKind.DESIGN]
                ),
                ArtifactKind.TASK: directories.get("tasks", default_dirs[ArtifactKind.TASK]),
            },
            patterns={
                ArtifactKind.REQUIREMENT: patterns.get(
                    "requirements", default_patterns[ArtifactKind.REQUIREMENT]
                ),
                ArtifactKind.DESIGN: patterns.get(
                    "designs", default_patterns[ArtifactKind.DESIGN]
                ),
                ArtifactKind.TASK: patterns.get("tasks", default_patterns[ArtifactKind.TASK]),
            },
        )

    @property
    def requirement_label(self) -> str:
        return _label(self.requirement_prefix)

    @property
    def design_label(self) -> str:
        return _label(self.design_prefix)

    @property
    def task_label(self) -> str:
        return _label(self.task_prefix)

    def is_completed(self, status: str) -> bool:
        return status.lower() in self.completed_statuses


def _label(prefix: str) -> str:
    return prefix.rstrip("-_ ") or prefix


@dataclass
class RuleResult:
    """Issues found by one rule engine run, partitioned by severity."""

    errors: list[TraceabilityIssue] = field(default_factory=list)
    warnings: list[TraceabilityIssue] = field(default_factory=list)
    info: list[TraceabilityIssue] = field(default_factory=list)
    valid_chains: int = 0

    def add(self, issue: TraceabilityIssue) -> None:
        if issue.severity is Severity.ERROR:
            self.errors.append(issue)
        elif issue.severity is Severity.WARNING:
            self.warnings.append(issue)
        else:
            self.info.append(issue)


class RuleEngine:
    """
    Evaluates traceability rules over an ArtifactCollection.

    The engine holds only its configuration; indices are rebuilt on
    every call to ``validate``.
    """

    def __init__(self, config: TraceabilityRulesConfig | None = None):
        """
        Initialize rule engine.

        Args:
            config: Rules configuration; defaults when omitted
        """
        self.config = config or TraceabilityRulesConfig()

    def validate(self, specs: ArtifactCollection) -> RuleResult:
        """
        Run all traceability rules.

        Args:
            specs: Loaded (or supplied) artifacts

        Returns:
            RuleResult with errors, warnings, info and the valid chain count
        """
        result = RuleResult()

        # REQ id -> designs citing it; DESIGN id -> tasks citing it
        req_refs: dict[str, list[str]] = {req_id: [] for req_id in specs.requirements}
        design_refs: dict[str, list[str]] = {design_id: [] for design_id in specs.designs}

        self._index_task_references(specs, design_refs, result)
        self._index_design_references(specs, req_refs, result)
        self._check_forward_traceability(specs, req_refs, result)
        self._check_complete_chains(specs, design_refs, result)
        self._check_status_consistency(specs, result)

        return result

    def _index_task_references(
        self,
        specs: ArtifactCollection,
        design_refs: dict[str, list[str]],
        result: RuleResult,
    ) -> None:
        """Index task -> design references (rules 2 and 4)."""
        cfg = self.config
        for task_id, task in specs.tasks.items():
            has_design_ref = False
            for related_id in task.related:
                if not related_id.startswith(cfg.design_prefix):
                    continue
                has_design_ref = True
                if related_id in specs.designs:
                    design_refs[related_id].append(task_id)
                else:
                    result.add(
                        TraceabilityIssue(
                            rule=RULE_REFERENCE,
                            source=task_id,
                            target=related_id,
                            message=(
                                f"{cfg.task_label} '{task_id}' references non-existent "
                                f"{cfg.design_label} '{related_id}'"
                            ),
                            severity=Severity.ERROR,
                        )
                    )

            if not has_design_ref:
                result.add(
                    TraceabilityIssue(
                        rule=RULE_BACKWARD,
                        source=task_id,
                        message=(
                            f"{cfg.task_label} '{task_id}' has no {cfg.design_label} "
                            "reference (untraced task)"
                        ),
                        severity=Severity.ERROR,
                    )
                )

    def _index_design_references(
        self,
        specs: ArtifactCollection,
        req_refs: dict[str, list[str]],
        result: RuleResult,
    ) -> None:
        """Index design -> requirement references (rule 4)."""
        cfg = self.config
        for design_id, design in specs.designs.items():
            for related_id in design.related:
                if not related_id.startswith(cfg.requirement_prefix):
                    continue
                if related_id in specs.requirements:
                    req_refs[related_id].append(design_id)
                else:
                    result.add(
                        TraceabilityIssue(
                            rule=RULE_REFERENCE,
                            source=design_id,
                            target=related_id,
                            message=(
                                f"{cfg.design_label} '{design_id}' references non-existent "
                                f"{cfg.requirement_label} '{related_id}'"
                            ),
                            severity=Severity.ERROR,
                        )
                    )

    def _check_forward_traceability(
        self,
        specs: ArtifactCollection,
        req_refs: dict[str, list[str]],
        result: RuleResult,
    ) -> None:
        """Rule 1: every requirement is cited by at least one design."""
        cfg = self.config
        for req_id in specs.requirements:
            if not req_refs[req_id]:
                result.add(
                    TraceabilityIssue(
                        rule=RULE_FORWARD,
                        source=req_id,
                        message=(
                            f"{cfg.requirement_label} '{req_id}' has no {cfg.design_label} "
                            "referencing it (orphaned requirement)"
                        ),
                        severity=Severity.WARNING,
                    )
                )

    def _check_complete_chains(
        self,
        specs: ArtifactCollection,
        design_refs: dict[str, list[str]],
        result: RuleResult,
    ) -> None:
        """Rule 3: every design cites a requirement and is cited by a task."""
        cfg = self.config
        for design_id, design in specs.designs.items():
            # Prefix match only; unresolved ids were already reported by rule 4
            has_req_ref = any(r.startswith(cfg.requirement_prefix) for r in design.related)
            has_task_ref = bool(design_refs[design_id])

            if not has_req_ref:
                result.add(
                    TraceabilityIssue(
                        rule=RULE_CHAIN,
                        source=design_id,
                        message=(
                            f"{cfg.design_label} '{design_id}' has no {cfg.requirement_label} "
                            "reference (missing backward trace)"
                        ),
                        severity=Severity.WARNING,
                    )
                )

            if not has_task_ref:
                result.add(
                    TraceabilityIssue(
                        rule=RULE_CHAIN,
                        source=design_id,
                        message=(
                            f"{cfg.design_label} '{design_id}' has no {cfg.task_label} "
                            "referencing it (orphaned design)"
                        ),
                        severity=Severity.WARNING,
                    )
                )

            if has_req_ref and has_task_ref:
                result.valid_chains += 1

    def _check_status_consistency(self, specs: ArtifactCollection, result: RuleResult) -> None:
        """Rule 5: a completed task should not cite unfinished designs."""
        cfg = self.config
        for task_id, task in specs.tasks.items():
            if not cfg.is_completed(task.status):
                continue
            for related_id in task.related:
                if not related_id.startswith(cfg.design_prefix):
                    continue
                design = specs.designs.get(related_id)
                if design is None or cfg.is_completed(design.status):
                    continue
                result.add(
                    TraceabilityIssue(
                        rule=RULE_STATUS,
                        source=task_id,
                        target=related_id,
                        message=(
                            f"{cfg.task_label} '{task_id}' is complete but "
                            f"{cfg.design_label} '{related_id}' is '{design.status}'"
                        ),
                        severity=Severity.INFO,
                    )
                )
