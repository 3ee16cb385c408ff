"""Unit tests for environment-backed settings."""

import pytest
from pydantic import ValidationError

from csv_indexer.config import Settings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path) -> None:
    """Keep a developer's .env / environment out of these tests."""
    monkeypatch.chdir(tmp_path)
    for var in ("CSV_FILE_PATH", "DELIMITER", "SELECTED_FIELDS", "INDEX_NAME", "TEST_MODE"):
        monkeypatch.delenv(var, raising=False)


def test_defaults() -> None:
    s = Settings()
    assert s.csv_file_path == ""
    assert s.delimiter == ""
    assert s.index_name == "csv_data"
    assert s.chroma_port == 8000
    assert s.test_mode is False
    assert s.selected_field_list == []


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("CSV_FILE_PATH", "/data/in.csv")
    monkeypatch.setenv("INDEX_NAME", "contacts")
    monkeypatch.setenv("TEST_MODE", "true")
    s = Settings()
    assert s.csv_file_path == "/data/in.csv"
    assert s.index_name == "contacts"
    assert s.test_mode is True


def test_reads_dotenv_file(tmp_path) -> None:
    (tmp_path / ".env").write_text("DELIMITER=;\nSELECTED_FIELDS=id\n")
    s = Settings()
    assert s.delimiter == ";"
    assert s.selected_field_list == ["id"]


def test_selected_field_list_is_trimmed() -> None:
    s = Settings(selected_fields=" id , Name,, email ")
    assert s.selected_field_list == ["id", "Name", "email"]


@pytest.mark.parametrize("alias", ["tab", "TAB", "\\t", "\t"])
def test_tab_aliases(alias: str) -> None:
    assert Settings(delimiter=alias).delimiter == "\t"


def test_multi_character_delimiter_rejected() -> None:
    with pytest.raises(ValidationError, match="single character"):
        Settings(delimiter=";;")


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(upsert_batch_size=0)
