"""Writing of report files and cached CSV content."""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .cache import CachedCSVContent
from .csv_io import Row, write_csv_file

logger = logging.getLogger(__name__)


class IssueReporter:
    """Writes CSV files under the job's working directory."""

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    def save_csv(self, file_name: str, rows: Iterable[Any], columns: Optional[List[str]] = None) -> Path:
        """
        Write rows to a file in the base directory, header included.

        Args:
            file_name: File name, not a full path
            rows: Dicts or objects with to_row()
            columns: Header; defaults to the union of the row columns
        """
        file_path = self.base_path / file_name
        data: List[Row] = [r.to_row() if hasattr(r, "to_row") else dict(r) for r in rows]
        logger.info(f"Writing to {file_path}")
        write_csv_file(file_path, data, columns)
        return file_path

    def flush_dirty(self, cache: CachedCSVContent) -> int:
        """
        Overwrite every dirty file with its cached rows, in insertion order.

        Dirty markers and tables are left in place.

        Returns:
            Number of files written
        """
        written = 0
        for file_path in cache.dirty_paths:
            rows = list(cache.tables[file_path].values())
            logger.debug(f"Writing to {file_path}")
            write_csv_file(file_path, rows)
            written += 1
        return written
