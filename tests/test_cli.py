import json

from migrator import cli
from tests.helpers import write_csv


def write_config(tmp_path, **kwargs):
    data = {"base_path": str(tmp_path), "objects": [{"name": "Account"}]}
    data.update(kwargs)
    path = tmp_path / "job.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_validate_command(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args: None)
    write_csv(tmp_path / "Account.csv", [{"Id": "", "Name": "Acme"}])

    code = cli.main(["validate", "--config", write_config(tmp_path), "--no-prompt"])

    assert code == cli.EXIT_OK
    assert "ID0000000000000001" in (tmp_path / "Account.csv").read_text()


def test_abort_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args: None)
    monkeypatch.setattr("builtins.input", lambda _: "n")
    (tmp_path / "Account.csv").write_text("Id,Name\n1,Acme,Extra\n")

    code = cli.main(["run", "--config", write_config(tmp_path)])

    assert code == cli.EXIT_ABORTED


def test_bad_config_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args: None)
    assert cli.main(["run", "--config", str(tmp_path / "missing.json")]) == cli.EXIT_FAILED


def test_no_command_prints_help(capsys):
    assert cli.main([]) == cli.EXIT_OK
    assert "usage" in capsys.readouterr().out
