"""Pydantic models for the job configuration file."""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..errors import ConfigurationError


class LookupDefinition(BaseModel):
    """A lookup field pointing at a record of another object."""
    field: str
    parent_object: str
    parent_field: str = "Name"

    @property
    def relationship_name(self) -> str:
        """Relationship name of the lookup: AccountId -> Account, Owner__c -> Owner__r."""
        if self.field.endswith("__c"):
            return self.field[:-3] + "__r"
        if self.field.endswith("Id") and len(self.field) > 2:
            return self.field[:-2]
        return self.field

    @property
    def reference_column(self) -> str:
        """CSV column holding the parent's human-readable key, e.g. Account.Name."""
        return f"{self.relationship_name}.{self.parent_field}"


class ObjectDefinition(BaseModel):
    name: str
    required_fields: List[str] = Field(default_factory=list)
    lookups: List[LookupDefinition] = Field(default_factory=list)
    delete_old_records: bool = False


class JobConfig(BaseModel):
    """Configuration of one migration job."""
    name: str = ""
    base_path: str = "."
    objects: List[ObjectDefinition] = Field(default_factory=list)

    # Ask the operator before continuing when CSV issues are found
    prompt_on_issues_in_csv_files: bool = True
    merge_user_group: bool = True

    # Target record store
    target_url: Optional[str] = None
    target_api_key: Optional[str] = None
    dry_run: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobConfig":
        """Create from dictionary representation."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid job configuration: {e}") from e

    @classmethod
    def from_json_file(cls, file_path: str) -> "JobConfig":
        """Load configuration from JSON file."""
        try:
            with open(file_path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {file_path}: {e}") from e
        return cls.from_dict(data)
