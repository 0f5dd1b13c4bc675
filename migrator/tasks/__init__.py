"""Per-object migration tasks."""

from .base import BaseTask
from .csv_task import CSVObjectTask

__all__ = [
    "BaseTask",
    "CSVObjectTask",
]
