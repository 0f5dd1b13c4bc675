"""Shared in-memory cache of CSV file contents."""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from ..constants import SYNTHETIC_ID_DIGITS, SYNTHETIC_ID_PREFIX
from .csv_io import Row, read_csv_file

logger = logging.getLogger(__name__)


class CachedCSVContent:
    """
    Per-file row tables shared by every task of a job.

    Each file path maps to a table of record key -> row. Tasks rewrite rows
    in place and call mark_dirty(); only dirty files are written back.
    The cache also hands out synthetic record ids that never repeat until
    clear() is called.
    """

    def __init__(self):
        self.tables: Dict[str, Dict[str, Row]] = {}
        self.dirty: Set[str] = set()
        self._id_counter = 1

    @staticmethod
    def _key(path: Union[str, Path]) -> str:
        return os.path.abspath(str(path))

    def get_table(self, path: Union[str, Path]) -> Dict[str, Row]:
        """Get the table of a file, creating an empty one on first use."""
        return self.tables.setdefault(self._key(path), {})

    def has_table(self, path: Union[str, Path]) -> bool:
        return self._key(path) in self.tables

    def put_row(self, path: Union[str, Path], key: str, row: Row) -> None:
        """Store a row in a file's table. Does not mark the file dirty."""
        self.get_table(path)[key] = row

    def load_table(self, path: Union[str, Path], key_field: Optional[str] = "Id") -> Dict[str, Row]:
        """
        Read a file into its table once; later calls return the cached table.

        Rows are keyed by their key_field value. Rows with a blank or
        repeated key get a positional key (#<row number>) so none are lost.
        """
        key = self._key(path)
        if key in self.tables:
            return self.tables[key]

        table: Dict[str, Row] = {}
        for row_num, row in enumerate(read_csv_file(path), start=1):
            record_key = row.get(key_field, "") if key_field else ""
            if not record_key or record_key in table:
                record_key = f"#{row_num}"
            table[record_key] = row

        self.tables[key] = table
        logger.debug(f"Cached {len(table)} rows of {path}")
        return table

    def mark_dirty(self, path: Union[str, Path]) -> None:
        """Record that a file's table differs from the file on disk."""
        self.dirty.add(self._key(path))

    def is_dirty(self, path: Union[str, Path]) -> bool:
        return self._key(path) in self.dirty

    @property
    def dirty_paths(self) -> List[str]:
        """Dirty file paths, in the order their tables were created."""
        return [path for path in self.tables if path in self.dirty]

    def next_id(self) -> str:
        """Generate the next synthetic id: ID followed by a 16-digit counter."""
        value = f"{SYNTHETIC_ID_PREFIX}{self._id_counter:0{SYNTHETIC_ID_DIGITS}d}"
        self._id_counter += 1
        return value

    def clear(self) -> None:
        """Drop all tables and dirty markers and restart the id sequence."""
        self.tables = {}
        self.dirty = set()
        self._id_counter = 1
