"""Delimiter auto-detection from the first line of a file."""

from __future__ import annotations

import logging
from pathlib import Path

from csv_indexer.errors import EmptyInputError

logger = logging.getLogger(__name__)

# Priority order: earlier candidates win ties.
CANDIDATE_DELIMITERS: tuple[str, ...] = (",", ";", "\t", "|")
DEFAULT_DELIMITER = ","


def detect_delimiter(sample_line: str) -> str:
    """Return the candidate delimiter occurring most often in *sample_line*.

    Counting is not quoting-aware.  When no candidate occurs the default
    comma is returned.
    """
    best, best_count = DEFAULT_DELIMITER, 0
    for candidate in CANDIDATE_DELIMITERS:
        count = sample_line.count(candidate)
        if count > best_count:
            best, best_count = candidate, count
    return best


def read_sample_line(path: str | Path, encoding: str = "utf-8-sig") -> str:
    """Return the first line of *path* without its line terminator.

    Raises
    ------
    EmptyInputError
        If the file has no first line at all.
    """
    with open(path, encoding=encoding, errors="replace", newline="") as fh:
        line = fh.readline()
    if not line:
        raise EmptyInputError(str(path))
    return line.rstrip("\r\n")


def sniff_delimiter(path: str | Path, encoding: str = "utf-8-sig") -> str:
    """Detect the delimiter of *path* from its first line."""
    delimiter = detect_delimiter(read_sample_line(path, encoding=encoding))
    logger.info("Detected delimiter: %r", delimiter)
    return delimiter
