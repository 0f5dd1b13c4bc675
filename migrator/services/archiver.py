"""Backup of the original CSV files before they get repaired."""

import logging
import shutil
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class SourceFileArchiver:
    """Copies each task's working CSV to its backup path, byte for byte."""

    def archive_all(self, tasks: Iterable) -> int:
        """
        Archive the working CSV of every task.

        Raises:
            OSError: if a source file is missing or a backup cannot be written
        """
        count = 0
        for task in tasks:
            destination = Path(task.source_csv_filename)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(task.csv_filename, destination)
            logger.debug(f"Archived {task.csv_filename} to {destination}")
            count += 1
        return count
