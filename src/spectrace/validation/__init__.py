"""Validation module - Traceability validation and result assembly.

Provides the directory and in-memory entry points plus the
ValidationResult they return.
"""

from spectrace.validation.result import (
    Check,
    Outcome,
    TraceabilityStats,
    ValidationResult,
    assemble_result,
)
from spectrace.validation.traceability import (
    validate_collection,
    validate_traceability,
    validate_traceability_from_content,
)

__all__ = [
    "Check",
    "Outcome",
    "TraceabilityStats",
    "ValidationResult",
    "assemble_result",
    "validate_collection",
    "validate_traceability",
    "validate_traceability_from_content",
]
