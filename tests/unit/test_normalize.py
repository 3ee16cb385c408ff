"""Unit tests for text normalization."""

import pytest

from csv_indexer.ingestion.normalize import clean_row, clean_string


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Name  ", "Name"),
        ("Email \t  Address", "Email Address"),
        ("\x00\x01 padded \x7f", "padded"),
        ("line\nbreak\r\nhere", "line break here"),
        (" non-breaking space ", "non-breaking space"),
        ("", ""),
        (" \t\n ", ""),
    ],
)
def test_clean_string(raw: str, expected: str) -> None:
    assert clean_string(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["  a  b  ", "\x00 \x01x\x02 y ", "a \x00 b", "\t\x1fz\x1f\t", "plain"],
)
def test_clean_string_is_idempotent(raw: str) -> None:
    once = clean_string(raw)
    assert clean_string(once) == once
    assert once == once.strip()
    assert "  " not in once


def test_internal_control_characters_are_kept() -> None:
    """Only padding is stripped; control characters inside a value stay."""
    assert clean_string(" a\x00b ") == "a\x00b"


def test_clean_row() -> None:
    assert clean_row([" 1 ", "", "  Alice   Smith "]) == ["1", "", "Alice Smith"]
