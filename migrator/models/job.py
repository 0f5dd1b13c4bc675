"""Job execution state."""

from enum import Enum


class JobStatus(str, Enum):
    """Status of a migration job run."""
    PENDING = "pending"
    PREPARING = "preparing"
    VALIDATING = "validating"
    COUNTING = "counting"
    DELETING = "deleting"
    QUERYING = "querying"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


class ValidationOutcome(str, Enum):
    """How the validate/repair step ended."""
    NO_ISSUES = "no_issues"
    # Issues found, operator (or auto-continue policy) accepted them
    CONTINUED = "continued"
    # Issues found after the prompt already fired; report written only
    REPORTED = "reported"
