"""Sequential drivers for the per-task record store phases."""

import logging
from typing import List

from .tasks.base import BaseTask

logger = logging.getLogger(__name__)


class JobPhaseRunner:
    """Runs the count, delete and query steps of every task in registration order."""

    def __init__(self, tasks: List[BaseTask]):
        self.tasks = tasks

    def count_all(self) -> None:
        """Retrieve the total record count of each task."""
        for task in self.tasks:
            task.get_total_records_count()

    def delete_old_records(self) -> bool:
        """
        Delete old target records of each task.

        Every task is invoked, even after one reported a deletion.

        Returns:
            True if any task deleted records
        """
        deleted = False
        for task in self.tasks:
            deleted = task.delete_old_target_records() or deleted
        logger.debug(f"Old records deleted: {deleted}")
        return deleted

    def query_all(self) -> None:
        """Query records of each task."""
        for task in self.tasks:
            task.query_records()
