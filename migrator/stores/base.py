"""Base record store interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RecordStore(ABC):
    """A place records are migrated from or to."""

    @abstractmethod
    def count(self, object_name: str) -> int:
        """Get the total number of records of an object."""
        pass

    @abstractmethod
    def query(self, object_name: str) -> List[Dict[str, Any]]:
        """Get all records of an object."""
        pass

    @abstractmethod
    def delete_records(self, object_name: str) -> int:
        """
        Delete all records of an object.

        Returns:
            Number of records deleted
        """
        pass
