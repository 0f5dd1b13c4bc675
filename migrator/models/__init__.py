"""Data models for the migration job."""

from .issue import CSVIssue, ISSUE_COLUMNS
from .config import JobConfig, ObjectDefinition, LookupDefinition
from .job import JobStatus, ValidationOutcome

__all__ = [
    "CSVIssue",
    "ISSUE_COLUMNS",
    "JobConfig",
    "ObjectDefinition",
    "LookupDefinition",
    "JobStatus",
    "ValidationOutcome",
]
