"""Unit tests for the command-line entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from csv_indexer import cli
from csv_indexer.index.models import BulkIndexResult, IndexItemResult


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for var in ("CSV_FILE_PATH", "FIELD_CONFIG_PATH", "SELECTED_FIELDS", "DELIMITER", "TEST_MODE"):
        monkeypatch.delenv(var, raising=False)


def test_test_mode_prints_every_record(write_csv, capsys) -> None:
    path = write_csv("id,name\n1,Alice\n2,\n3\n")

    code = cli.main(["--csv", str(path), "--test"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Record 1:\n  id: 1\n  name: Alice\n  source_csv: file.csv" in out
    assert "Record 2:\n  id: 2\n  source_csv: file.csv" in out
    assert "Total records processed: 2" in out


def test_field_config_and_selection(write_csv, tmp_path: Path, capsys) -> None:
    path = write_csv("ID;Name;Email\n1;Alice;a@x.org\n")
    fields = tmp_path / "fields.json"
    fields.write_text(json.dumps([
        {"name": "id", "csv_name": "ID", "required": True},
        {"name": "name", "csv_name": "Name"},
        {"name": "email", "csv_name": "Email"},
    ]))

    code = cli.main(["--csv", str(path), "--fields", str(fields), "--select", "id,email", "--test"])

    out = capsys.readouterr().out
    assert code == 0
    assert "  id: 1\n  email: a@x.org\n" in out
    assert "name: Alice" not in out


def test_missing_csv_path_fails(caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert cli.main(["--test"]) == 1
    assert "CSV file path is required" in caplog.text


def test_missing_required_field_fails(write_csv, tmp_path: Path, caplog) -> None:
    path = write_csv("Name\nAlice\n")
    fields = tmp_path / "fields.json"
    fields.write_text('[{"name": "id", "required": true}]')

    with caplog.at_level(logging.ERROR):
        code = cli.main(["--csv", str(path), "--fields", str(fields), "--test"])

    assert code == 1
    assert "required field 'id'" in caplog.text


def test_bad_field_config_fails(write_csv, tmp_path: Path) -> None:
    path = write_csv("id\n1\n")
    fields = tmp_path / "fields.json"
    fields.write_text("not json")
    assert cli.main(["--csv", str(path), "--fields", str(fields)]) == 1


def test_nonexistent_csv_fails(tmp_path: Path) -> None:
    assert cli.main(["--csv", str(tmp_path / "missing.csv"), "--test"]) == 1


def test_invalid_delimiter_is_usage_error(write_csv) -> None:
    path = write_csv("id\n1\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--csv", str(path), "--delimiter", "::"])
    assert excinfo.value.code == 2


def test_bulk_output(write_csv, tmp_path: Path, capsys) -> None:
    path = write_csv("id\tname\n1\tAlice\n")
    out = tmp_path / "bulk" / "out.ndjson"

    code = cli.main(["--csv", str(path), "--bulk-output", str(out), "--index", "people"])

    assert code == 0
    assert "Sample of processed records:" in capsys.readouterr().out
    lines = out.read_text().splitlines()
    assert json.loads(lines[0]) == {"index": {"_index": "people", "_id": "file.csv:1"}}
    assert json.loads(lines[1]) == {"id": "1", "name": "Alice", "source_csv": "file.csv"}


def test_index_into_chroma(write_csv) -> None:
    path = write_csv("id\n1\n2\n")
    sink = MagicMock()
    sink.bulk_index.return_value = BulkIndexResult(
        index_name="csv_data",
        items=[IndexItemResult(doc_id="file.csv:1"), IndexItemResult(doc_id="file.csv:2")],
    )

    with patch.object(cli, "make_sink", return_value=sink) as make_sink:
        code = cli.main(["--csv", str(path), "--chroma-host", "chroma", "--chroma-port", "9000"])

    assert code == 0
    settings = make_sink.call_args.args[0]
    assert settings.chroma_host == "chroma"
    assert settings.chroma_port == 9000
    sink.setup.assert_called_once()
    batch = sink.bulk_index.call_args.args[0]
    assert len(batch) == 2


def test_partial_index_failure_exits_nonzero(write_csv, caplog) -> None:
    path = write_csv("id\n1\n2\n")
    sink = MagicMock()
    sink.bulk_index.return_value = BulkIndexResult(
        index_name="csv_data",
        items=[
            IndexItemResult(doc_id="file.csv:1"),
            IndexItemResult(doc_id="file.csv:2", ok=False, error="rejected"),
        ],
    )

    with patch.object(cli, "make_sink", return_value=sink):
        with caplog.at_level(logging.ERROR):
            code = cli.main(["--csv", str(path)])

    assert code == 1
    assert "Failed to index file.csv:2: rejected" in caplog.text


def test_test_mode_never_builds_a_sink(write_csv) -> None:
    path = write_csv("id\n1\n")
    with patch.object(cli, "make_sink") as make_sink:
        assert cli.main(["--csv", str(path), "--test"]) == 0
    make_sink.assert_not_called()


def test_unreachable_chroma_exits_nonzero(write_csv, caplog) -> None:
    path = write_csv("id\n1\n")
    refused = ValueError("Could not connect to a Chroma server. Are you sure it is running?")

    with patch("chromadb.HttpClient", side_effect=refused):
        with caplog.at_level(logging.ERROR):
            code = cli.main(["--csv", str(path), "--chroma-host", "127.0.0.1", "--chroma-port", "1"])

    assert code == 1
    assert "Could not connect to a Chroma server" in caplog.text
    assert "127.0.0.1:1" in caplog.text
