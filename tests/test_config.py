import json

import pytest

from migrator.errors import ConfigurationError
from migrator.models.config import JobConfig


def test_from_json_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(json.dumps({
        "name": "accounts",
        "base_path": str(tmp_path),
        "objects": [
            {"name": "Account", "required_fields": ["Name"]},
            {"name": "Contact", "lookups": [{"field": "AccountId", "parent_object": "Account"}]},
        ],
        "prompt_on_issues_in_csv_files": False,
    }))

    config = JobConfig.from_json_file(str(path))

    assert [o.name for o in config.objects] == ["Account", "Contact"]
    assert config.objects[1].lookups[0].parent_field == "Name"
    assert config.prompt_on_issues_in_csv_files is False
    assert config.merge_user_group is True


def test_defaults():
    config = JobConfig.from_dict({})
    assert config.base_path == "."
    assert config.objects == []
    assert config.prompt_on_issues_in_csv_files is True


def test_invalid_config_raises():
    with pytest.raises(ConfigurationError):
        JobConfig.from_dict({"objects": [{"required_fields": []}]})


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "job.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        JobConfig.from_json_file(str(path))
