"""CSV file reading, writing and merging."""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Row = Dict[str, str]
PathLike = Union[str, Path]

FALLBACK_ENCODING = "latin-1"


def _read_rows(path: Path, encoding: str) -> List[Row]:
    rows = []
    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            rows.append({
                column: (value if value is not None else "")
                for column, value in row.items()
                if column is not None
            })
    return rows


def read_csv_file(file_path: PathLike, encoding: str = "utf-8-sig") -> List[Row]:
    """
    Read a CSV file into a list of rows.

    Missing files read as empty. Short rows are padded with empty strings
    and values beyond the header are dropped. A leading byte-order mark is
    stripped; files that are not valid UTF-8 are read as latin-1.

    Args:
        file_path: Path to the CSV file
        encoding: File encoding

    Returns:
        List of rows, each an ordered mapping of column name to value
    """
    path = Path(file_path)
    if not path.exists():
        return []

    try:
        return _read_rows(path, encoding)
    except UnicodeDecodeError:
        logger.warning(f"UTF-8 decode failed, trying {FALLBACK_ENCODING} for {file_path}")
        return _read_rows(path, FALLBACK_ENCODING)


def _read_records(file_path: PathLike, encoding: str) -> Tuple[List[str], List[List[str]]]:
    with open(file_path, "r", encoding=encoding, newline="") as f:
        reader = csv.reader(f)
        header = next(reader, [])
        return header, [record for record in reader]


def read_csv_records(file_path: PathLike, encoding: str = "utf-8-sig") -> Tuple[List[str], List[List[str]]]:
    """Read a CSV file as a raw header and raw value lists, without any normalisation."""
    try:
        return _read_records(file_path, encoding)
    except UnicodeDecodeError:
        logger.warning(f"UTF-8 decode failed, trying {FALLBACK_ENCODING} for {file_path}")
        return _read_records(file_path, FALLBACK_ENCODING)


def collect_columns(rows: Iterable[Row]) -> List[str]:
    """Get the ordered union of the columns used by the rows."""
    columns: Dict[str, None] = {}
    for row in rows:
        for column in row.keys():
            columns.setdefault(column, None)
    return list(columns)


def write_csv_file(
    file_path: PathLike,
    rows: List[Row],
    columns: Optional[List[str]] = None,
    encoding: str = "utf-8"
) -> None:
    """
    Write rows to a CSV file, header included.

    Args:
        file_path: Destination path (overwritten)
        rows: Rows to write
        columns: Header to use; defaults to the union of the row columns
        encoding: File encoding
    """
    columns = columns or collect_columns(rows)
    with open(file_path, "w", encoding=encoding, newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns, restval="", extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    logger.debug(f"Wrote {len(rows)} rows to {file_path}")


def merge_csv_files(
    path_a: PathLike,
    path_b: PathLike,
    out_path: PathLike,
    dedupe: bool,
    key1_field: str,
    key2_field: str
) -> int:
    """
    Merge two related CSV exports into one file.

    With dedupe, a row whose (key1_field, key2_field) pair equals a row
    already emitted is dropped; the first occurrence wins.

    Args:
        path_a: First input file
        path_b: Second input file
        out_path: Merged output file
        dedupe: Drop duplicate key pairs
        key1_field: First key column
        key2_field: Second key column

    Returns:
        Number of rows written (0 and no file written if neither input exists)
    """
    inputs = [Path(p) for p in (path_a, path_b)]
    if not any(p.exists() for p in inputs):
        logger.debug(f"Nothing to merge into {out_path}")
        return 0

    merged: List[Row] = []
    seen = set()
    for path in inputs:
        for row in read_csv_file(path):
            if dedupe:
                key = (row.get(key1_field, ""), row.get(key2_field, ""))
                if key in seen:
                    continue
                seen.add(key)
            merged.append(row)

    write_csv_file(out_path, merged)
    logger.info(f"Merged {inputs[0].name} and {inputs[1].name} into {Path(out_path).name}: {len(merged)} rows")
    return len(merged)
