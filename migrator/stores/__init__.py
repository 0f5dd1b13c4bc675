"""Record stores the job talks to."""

from .base import RecordStore
from .api_store import APIRecordStore

__all__ = [
    "RecordStore",
    "APIRecordStore",
]
