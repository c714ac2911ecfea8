"""Validators for translated Cloud Trace records."""

from .record_validator import LimitIssue, RecordValidator, Severity, ValidationReport

__all__ = [
    "LimitIssue",
    "RecordValidator",
    "Severity",
    "ValidationReport",
]
