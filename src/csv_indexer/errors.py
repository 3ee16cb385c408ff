"""Exception hierarchy for the CSV indexing pipeline.

Fatal errors (``EmptyInputError``, ``MissingRequiredFieldError``,
``SchemaLoadError``, ``SinkError``) unwind to the caller.
``MalformedRowError`` is raised by the row reader for a single record and
is always caught by the record assembler.
"""

from __future__ import annotations


class CSVIndexerError(Exception):
    """Base class for every error raised by ``csv_indexer``."""


class EmptyInputError(CSVIndexerError):
    """The source file has no readable first line."""

    def __init__(self, source_path: str) -> None:
        super().__init__(f"CSV file is empty: {source_path}")
        self.source_path = source_path


class MalformedRowError(CSVIndexerError):
    """A data row cannot be parsed under the current delimiter/quoting rules."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


class MissingRequiredFieldError(CSVIndexerError):
    """A required schema field has no matching header column."""

    def __init__(self, field_name: str, csv_name: str | None = None) -> None:
        csv_name = csv_name or field_name
        super().__init__(
            f"required field '{field_name}' (column '{csv_name}') not found in CSV header"
        )
        self.field_name = field_name
        self.csv_name = csv_name


class SchemaLoadError(CSVIndexerError):
    """The externally supplied field configuration is unreadable or invalid."""


class SinkError(CSVIndexerError):
    """The index sink could not be prepared for writing."""
