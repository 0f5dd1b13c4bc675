"""Base task interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from ..models.issue import CSVIssue

if TYPE_CHECKING:
    from ..context import JobContext


class BaseTask(ABC):
    """
    One migrated object.

    Tasks own a working CSV file and a backup copy of it, validate and
    repair the CSV when asked by the job, and talk to the record stores
    during the count, delete and query phases.
    """

    @property
    @abstractmethod
    def object_name(self) -> str:
        pass

    @property
    @abstractmethod
    def csv_filename(self) -> str:
        """Working CSV file of the object."""
        pass

    @property
    @abstractmethod
    def source_csv_filename(self) -> str:
        """Backup of the original CSV file."""
        pass

    @abstractmethod
    def validate_csv(self, context: "JobContext") -> List[CSVIssue]:
        """
        Check the structure of the CSV file.

        Returns:
            Structural issues; an empty list if the file is fine
        """
        pass

    @abstractmethod
    def repair_csv(self, context: "JobContext") -> List[CSVIssue]:
        """
        Repair the content of the CSV file through context.cache.

        Every file whose cached rows are changed must be marked dirty.

        Returns:
            Content issues that could not be repaired
        """
        pass

    @abstractmethod
    def get_total_records_count(self) -> None:
        pass

    @abstractmethod
    def delete_old_target_records(self) -> bool:
        """
        Delete the records of the object from the target.

        Returns:
            True if any record was deleted
        """
        pass

    @abstractmethod
    def query_records(self) -> None:
        pass
