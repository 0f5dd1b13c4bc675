"""Shared test helpers."""

import csv


def write_csv(path, rows, columns=None):
    columns = columns or (list(rows[0].keys()) if rows else [])
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
    return path


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class FakeTask:
    """Task that records every call in a shared log."""

    def __init__(self, name, log, validate_issues=None, repair_issues=None,
                 deleted=False, csv_filename="", source_csv_filename=""):
        self._name = name
        self.log = log
        self.validate_issues = validate_issues or []
        self.repair_issues = repair_issues or []
        self.deleted = deleted
        self._csv = csv_filename
        self._source = source_csv_filename

    @property
    def object_name(self):
        return self._name

    @property
    def csv_filename(self):
        return self._csv

    @property
    def source_csv_filename(self):
        return self._source

    def validate_csv(self, context):
        self.log.append(("validate", self._name))
        return list(self.validate_issues)

    def repair_csv(self, context):
        self.log.append(("repair", self._name))
        return list(self.repair_issues)

    def get_total_records_count(self):
        self.log.append(("count", self._name))

    def delete_old_target_records(self):
        self.log.append(("delete", self._name))
        return self.deleted

    def query_records(self):
        self.log.append(("query", self._name))

