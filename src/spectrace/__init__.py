"""
spectrace - Traceability validation for specification artifacts

spectrace reads the metadata headers of requirement, design and task
documents, checks that every reference between them resolves, and
reports orphaned requirements, untraced tasks, incomplete chains and
status drift.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("spectrace")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from spectrace.core import (  # noqa: E402
    Artifact,
    ArtifactCollection,
    ArtifactKind,
    RuleEngine,
    Severity,
    TraceabilityIssue,
    TraceabilityRulesConfig,
    load_all_artifacts,
    parse_header,
)
from spectrace.validation import (  # noqa: E402
    Outcome,
    ValidationResult,
    validate_traceability,
    validate_traceability_from_content,
)

__all__ = [
    "__version__",
    "Artifact",
    "ArtifactCollection",
    "ArtifactKind",
    "Outcome",
    "RuleEngine",
    "Severity",
    "TraceabilityIssue",
    "TraceabilityRulesConfig",
    "ValidationResult",
    "load_all_artifacts",
    "parse_header",
    "validate_traceability",
    "validate_traceability_from_content",
]
