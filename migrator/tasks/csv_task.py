"""Task for one object whose records are exchanged as a CSV file."""

import logging
import os
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..constants import (
    CSV_SOURCE_SUB_DIRECTORY,
    ID_FIELD,
    USER_AND_GROUP_FILENAME,
    USER_AND_GROUP_OBJECTS,
)
from ..context import JobContext
from ..models.config import LookupDefinition, ObjectDefinition
from ..models.issue import CSVIssue
from ..services.csv_io import Row, read_csv_records
from ..services.value_mapping import ValueMapping, lookup
from ..stores.base import RecordStore
from .base import BaseTask

logger = logging.getLogger(__name__)


def csv_file_name(object_name: str) -> str:
    """CSV file name of an object. User and Group share the merged file."""
    if object_name in USER_AND_GROUP_OBJECTS:
        return USER_AND_GROUP_FILENAME + ".csv"
    return f"{object_name}.csv"


class CSVObjectTask(BaseTask):
    """
    Migrates one object through its CSV file.

    Validation checks the header and the shape of every row. Repair
    translates values through the value mapping, gives every row an Id and
    keeps lookup columns (AccountId) consistent with their reference
    columns (Account.Name) using the parent object's cached rows.
    """

    def __init__(
        self,
        definition: ObjectDefinition,
        base_path: Union[str, Path],
        store: Optional[RecordStore] = None
    ):
        """
        Initialize the task.

        Args:
            definition: Object configuration
            base_path: Job directory holding the CSV files
            store: Target record store for the count, delete and query phases
        """
        self.definition = definition
        self.base_path = Path(base_path)
        self.store = store

        self.total_records_count: Optional[int] = None
        self.target_records: List[Dict[str, Any]] = []

    @property
    def object_name(self) -> str:
        return self.definition.name

    @property
    def csv_filename(self) -> str:
        return str(self.base_path / csv_file_name(self.object_name))

    @property
    def source_csv_filename(self) -> str:
        return str(self.base_path / CSV_SOURCE_SUB_DIRECTORY / csv_file_name(self.object_name))

    def _issue(self, error: str, **kwargs) -> CSVIssue:
        return CSVIssue(error=error, child_object=self.object_name, **kwargs)

    # ---------- validation ----------

    def validate_csv(self, context: JobContext) -> List[CSVIssue]:
        issues: List[CSVIssue] = []
        header, records = read_csv_records(self.csv_filename)

        # User and Group share one file; its layout is checked once per run
        path_key = os.path.abspath(self.csv_filename)
        first_check = path_key not in context.validated_paths
        context.validated_paths.add(path_key)

        if not header:
            if first_check:
                issues.append(self._issue("CSV file is empty"))
            return issues

        if first_check:
            for column, count in Counter(header).items():
                if count > 1:
                    issues.append(self._issue("Column appears more than once", child_field=column))

        required = list(self.definition.required_fields)
        required.extend(d.field for d in self.definition.lookups if d.field not in required)
        for column in required:
            if column not in header:
                issues.append(self._issue("Required column is missing", child_field=column))

        if first_check:
            # Line 1 is the header
            for line_num, record in enumerate(records, start=2):
                if record and len(record) != len(header):
                    issues.append(self._issue(
                        f"Row has {len(record)} values, header has {len(header)} columns",
                        child_value=f"line {line_num}",
                    ))

        if issues:
            logger.debug(f"{self.object_name}: {len(issues)} structural issue(s)")
        return issues

    # ---------- repair ----------

    def repair_csv(self, context: JobContext) -> List[CSVIssue]:
        cache = context.cache
        issues: List[CSVIssue] = []
        table = cache.load_table(self.csv_filename)
        changed = False

        for row in table.values():
            if self._apply_value_mapping(row, context.value_mapping, issues):
                changed = True
            if not row.get(ID_FIELD):
                row[ID_FIELD] = cache.next_id()
                changed = True

        for lookup_definition in self.definition.lookups:
            if self._repair_lookup(lookup_definition, table, context, issues):
                changed = True

        if changed:
            cache.mark_dirty(self.csv_filename)
        logger.debug(f"{self.object_name}: repaired {len(table)} rows, {len(issues)} issue(s)")
        return issues

    def _apply_value_mapping(self, row: Row, mapping: ValueMapping, issues: List[CSVIssue]) -> bool:
        changed = False
        for column, value in list(row.items()):
            values = lookup(mapping, self.object_name, column)
            if values is None:
                continue
            raw = value.strip()
            if raw in values:
                if values[raw] != value:
                    row[column] = values[raw]
                    changed = True
            elif raw and raw not in values.values():
                issues.append(self._issue(
                    "Value is missing from the value mapping",
                    child_value=value,
                    child_field=column,
                ))
        return changed

    def _repair_lookup(
        self,
        definition: LookupDefinition,
        table: Dict[str, Row],
        context: JobContext,
        issues: List[CSVIssue]
    ) -> bool:
        """Make the lookup Id and the reference column of every row point at the same parent."""
        cache = context.cache
        parent_path = str(self.base_path / csv_file_name(definition.parent_object))
        parent_table = cache.load_table(parent_path)

        by_id: Dict[str, Row] = {}
        by_value: Dict[str, Row] = {}
        parent_changed = False
        for parent in parent_table.values():
            if not parent.get(ID_FIELD):
                parent[ID_FIELD] = cache.next_id()
                parent_changed = True
            by_id[parent[ID_FIELD]] = parent
            value = parent.get(definition.parent_field, "")
            if value:
                by_value.setdefault(value, parent)
        if parent_changed:
            cache.mark_dirty(parent_path)

        reference_column = definition.reference_column
        changed = False
        for row in table.values():
            lookup_id = row.get(definition.field, "")
            reference = row.get(reference_column, "")
            if not lookup_id and not reference:
                continue

            parent = by_id.get(lookup_id) if lookup_id else None
            if parent is None and reference:
                parent = by_value.get(reference)

            if parent is None:
                if reference:
                    issues.append(self._issue(
                        "Parent lookup record is missing",
                        child_value=reference,
                        child_field=reference_column,
                        parent_value=reference,
                        parent_object=definition.parent_object,
                        parent_field=definition.parent_field,
                    ))
                else:
                    issues.append(self._issue(
                        "Parent lookup record is missing",
                        child_value=lookup_id,
                        child_field=definition.field,
                        parent_value=lookup_id,
                        parent_object=definition.parent_object,
                        parent_field=ID_FIELD,
                    ))
                continue

            if lookup_id != parent[ID_FIELD]:
                row[definition.field] = parent[ID_FIELD]
                changed = True

            parent_value = parent.get(definition.parent_field, "")
            if reference != parent_value and (parent_value or reference_column in row):
                row[reference_column] = parent_value
                changed = True

        return changed

    # ---------- record store phases ----------

    def get_total_records_count(self) -> None:
        if self.store is None:
            logger.debug(f"{self.object_name}: no record store, skipping count")
            return
        self.total_records_count = self.store.count(self.object_name)
        logger.info(f"{self.object_name}: {self.total_records_count} record(s) in the target")

    def delete_old_target_records(self) -> bool:
        if not self.definition.delete_old_records or self.store is None:
            return False
        deleted = self.store.delete_records(self.object_name)
        logger.info(f"{self.object_name}: deleted {deleted} old record(s)")
        return deleted > 0

    def query_records(self) -> None:
        if self.store is None:
            logger.debug(f"{self.object_name}: no record store, skipping query")
            return
        self.target_records = self.store.query(self.object_name)
        logger.info(f"{self.object_name}: queried {len(self.target_records)} record(s)")
