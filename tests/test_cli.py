"""CLI tests for parse, fields and project subcommands."""

import json
import logging
import sys
from pathlib import Path

import pytest

from recordshape import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["recordshape"] + args)
    return cli.main()


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the handler and level changes main() makes to the package logger."""
    package_logger = logging.getLogger("recordshape")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


def test_parse_prints_canonical_tree(monkeypatch, capsys):
    _run_cli(["parse", "key::id,recipient(*)"], monkeypatch)
    out = json.loads(capsys.readouterr().out)
    assert out["is_flat"] is False
    assert out["fields"][0] == {"name": "key", "alias": "id", "is_wildcard": False}
    assert out["fields"][1]["nested_fields"] == [{"name": "*", "is_wildcard": True}]


def test_parse_error_exits_2(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["parse", "key,"], monkeypatch)
    assert excinfo.value.code == 2
    assert "Expected field after comma" in capsys.readouterr().err


def test_fields_lists_sorted_names(monkeypatch, capsys):
    _run_cli(["fields", "Agency"], monkeypatch)
    assert capsys.readouterr().out.split() == ["abbreviation", "code", "department", "name"]


def test_fields_unknown_type(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["fields", "Nope"], monkeypatch)
    assert excinfo.value.code == 2
    assert "Unknown model: Nope" in capsys.readouterr().err


def test_project_object(monkeypatch, capsys, tmp_path):
    payload = tmp_path / "contract.json"
    _write_json(payload, {"key": "C-1", "award_date": "2024-01-15", "obligated": 10.5, "extra": True})
    _run_cli(
        ["project", "--type", "Contract", "--shape", "key,award_date,obligated", "--input", str(payload)],
        monkeypatch,
    )
    out = json.loads(capsys.readouterr().out)
    assert out == {"key": "C-1", "award_date": "2024-01-15", "obligated": "10.5"}


def test_project_flat_array(monkeypatch, capsys, tmp_path):
    payload = tmp_path / "contracts.json"
    _write_json(payload, [{"key": "C-1", "recipient.uei": "U1"}, {"key": "C-2"}])
    _run_cli(
        ["project", "--type", "Contract", "--shape", "key,recipient(uei)", "--input", str(payload), "--flat"],
        monkeypatch,
    )
    out = json.loads(capsys.readouterr().out)
    assert out == [{"key": "C-1", "recipient": {"uei": "U1"}}, {"key": "C-2"}]


def test_project_bad_payload_exits_2(monkeypatch, capsys, tmp_path):
    payload = tmp_path / "bad.json"
    _write_json(payload, [{"key": "C-1"}, 5])
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["project", "--type", "Contract", "--shape", "key", "--input", str(payload)], monkeypatch)
    assert excinfo.value.code == 2
    assert "index 1" in capsys.readouterr().err


def test_project_missing_file_exits_1(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["project", "--type", "Contract", "--shape", "key", "--input", str(tmp_path / "missing.json")],
            monkeypatch,
        )
    assert excinfo.value.code == 1


def test_custom_schema_catalog(monkeypatch, capsys, tmp_path, small_catalog):
    schema = tmp_path / "schema.json"
    _write_json(schema, small_catalog)
    _run_cli(["fields", "Node", "--schema", str(schema)], monkeypatch)
    assert capsys.readouterr().out.split() == ["children", "id", "label", "meta", "parent"]


def test_malformed_schema_catalog_exits_2(monkeypatch, capsys, tmp_path):
    schema = tmp_path / "schema.json"
    _write_json(schema, {"A": ["x"]})
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["fields", "A", "--schema", str(schema)], monkeypatch)
    assert excinfo.value.code == 2
    assert "Invalid schema for record type 'A'" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
    assert "usage" in capsys.readouterr().out


def test_verbose_attaches_single_stderr_handler(monkeypatch, capsys):
    package_logger = logging.getLogger("recordshape")
    _run_cli(["parse", "key", "--verbose"], monkeypatch)
    _run_cli(["parse", "piid", "--verbose"], monkeypatch)
    cli_handlers = [h for h in package_logger.handlers if h.get_name() == "recordshape-cli"]
    assert len(cli_handlers) == 1
    assert package_logger.level == logging.DEBUG
