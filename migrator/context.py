"""Per-run state shared with every task call."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from .models.issue import CSVIssue
from .services.cache import CachedCSVContent
from .services.value_mapping import ValueMapping


@dataclass
class JobContext:
    """Aggregation state of one job run: issues, value mapping and the row cache."""
    base_path: Path
    value_mapping: ValueMapping = field(default_factory=dict)
    issues: List[CSVIssue] = field(default_factory=list)
    cache: CachedCSVContent = field(default_factory=CachedCSVContent)
    # Files already checked for structure; tasks sharing a file check it once
    validated_paths: Set[str] = field(default_factory=set)
