"""CSV issue records collected during validation and repair."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from ..constants import ISSUE_DATE_FORMAT

# Column order of the issues report file
ISSUE_COLUMNS: List[str] = [
    "Date",
    "Child value",
    "Child sObject",
    "Child field",
    "Parent value",
    "Parent sObject",
    "Parent field",
    "Error",
]


def _now() -> str:
    return datetime.now().strftime(ISSUE_DATE_FORMAT)


@dataclass
class CSVIssue:
    """
    A single problem found in a CSV file.

    Structural issues (found while validating) and content issues (found
    while repairing) share this shape; only the time of discovery differs.
    """
    error: str
    child_value: str = ""
    child_object: str = ""
    child_field: str = ""
    parent_value: str = ""
    parent_object: str = ""
    parent_field: str = ""
    date: str = field(default_factory=_now)

    def to_row(self) -> Dict[str, str]:
        """Convert to a report row keyed by the report columns."""
        return {
            "Date": self.date,
            "Child value": self.child_value,
            "Child sObject": self.child_object,
            "Child field": self.child_field,
            "Parent value": self.parent_value,
            "Parent sObject": self.parent_object,
            "Parent field": self.parent_field,
            "Error": self.error,
        }
