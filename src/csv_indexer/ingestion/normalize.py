"""Whitespace and control-character cleanup for header and record cells."""

from __future__ import annotations

import unicodedata


def _is_padding(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch) == "Cc"


def clean_string(value: str) -> str:
    """Trim whitespace/control padding and collapse internal whitespace runs.

    >>> clean_string("  Email \\t  Address\\x00")
    'Email Address'

    Idempotent: ``clean_string(clean_string(s)) == clean_string(s)``.
    """
    start, end = 0, len(value)
    while start < end and _is_padding(value[start]):
        start += 1
    while end > start and _is_padding(value[end - 1]):
        end -= 1
    return " ".join(value[start:end].split())


def clean_row(row: list[str]) -> list[str]:
    """Apply :func:`clean_string` to every cell of *row*."""
    return [clean_string(cell) for cell in row]
