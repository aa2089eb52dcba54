"""
spectrace.core - Artifact models, header parsing, loading and rule evaluation
"""

from spectrace.core.frontmatter import parse_header, parse_header_file
from spectrace.core.loader import load_all_artifacts
from spectrace.core.models import Artifact, ArtifactCollection, ArtifactKind, DuplicateArtifact
from spectrace.core.rules import (
    RuleEngine,
    RuleResult,
    Severity,
    TraceabilityIssue,
    TraceabilityRulesConfig,
)

__all__ = [
    "Artifact",
    "ArtifactCollection",
    "ArtifactKind",
    "DuplicateArtifact",
    "RuleEngine",
    "RuleResult",
    "Severity",
    "TraceabilityIssue",
    "TraceabilityRulesConfig",
    "load_all_artifacts",
    "parse_header",
    "parse_header_file",
]
