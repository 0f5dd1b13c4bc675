"""Service layer for the migration job."""

from .cache import CachedCSVContent
from .value_mapping import ValueMappingLoader
from .archiver import SourceFileArchiver
from .prompt import AbortPrompt
from .reporter import IssueReporter

__all__ = [
    "CachedCSVContent",
    "ValueMappingLoader",
    "SourceFileArchiver",
    "AbortPrompt",
    "IssueReporter",
]
