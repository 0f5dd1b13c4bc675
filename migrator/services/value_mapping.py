"""Loading of the value translation table."""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..constants import VALUE_MAPPING_CSV_FILENAME
from .csv_io import read_csv_file

logger = logging.getLogger(__name__)

# ObjectName + FieldName -> raw value -> target value
ValueMapping = Dict[str, Dict[str, str]]


def mapping_key(object_name: str, field_name: str) -> str:
    return str(object_name).strip() + str(field_name).strip()


def lookup(mapping: ValueMapping, object_name: str, field_name: str) -> Optional[Dict[str, str]]:
    """Get the raw -> target translations of one object field, if any."""
    return mapping.get(mapping_key(object_name, field_name))


class ValueMappingLoader:
    """Reads ValueMapping.csv (ObjectName, FieldName, RawValue, Value) from the job directory."""

    def __init__(self, base_path: Union[str, Path], file_name: str = VALUE_MAPPING_CSV_FILENAME):
        self.file_path = Path(base_path) / file_name

    def load(self, into: Optional[ValueMapping] = None) -> ValueMapping:
        """
        Load the translation rules.

        Args:
            into: Existing mapping to merge the rules into

        Returns:
            The (possibly updated) mapping; unchanged if the file is missing or empty
        """
        mapping = into if into is not None else {}
        rows = read_csv_file(self.file_path)
        if not rows:
            return mapping

        logger.debug(f"Reading values mapping file {self.file_path.name}")
        for row in rows:
            object_name = row.get("ObjectName") or ""
            field_name = row.get("FieldName") or ""
            if not object_name or not field_name:
                continue
            values = mapping.setdefault(mapping_key(object_name, field_name), {})
            values[(row.get("RawValue") or "").strip()] = (row.get("Value") or "").strip()

        logger.info(f"Loaded value mapping for {len(mapping)} object field(s)")
        return mapping
