"""Stateful row reader over a delimited text file.

The reader owns the file handle for its whole lifetime; use it as a
context manager so the handle is released on every exit path::

    with CSVRowReader(path, delimiter=";") as reader:
        header = reader.read_header()
        while (row := reader.read()) is not None:
            ...

Handles:
- UTF-8 with or without BOM (``utf-8-sig``).  Undecodable bytes become
  U+FFFD and the affected row is logged; they never abort the file.
- Windows CRLF and Unix LF line endings (``newline=''``).
- Quoted fields, including embedded delimiters and newlines.
- Strict quoting and a fixed column count taken from the header row;
  violations raise :class:`~csv_indexer.errors.MalformedRowError` for the
  offending record only, and reading can continue with the next one.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import IO

from csv_indexer.errors import EmptyInputError, MalformedRowError

logger = logging.getLogger(__name__)

REPLACEMENT_CHAR = "\ufffd"


class CSVRowReader:
    """Read a header row, then data rows one at a time.

    Parameters
    ----------
    path:
        Path to the delimited file.
    delimiter:
        Single-character field separator.
    encoding:
        Text encoding of the file.
    """

    def __init__(
        self,
        path: str | Path,
        delimiter: str = ",",
        encoding: str = "utf-8-sig",
    ) -> None:
        self.path = Path(path)
        self.delimiter = delimiter
        self.encoding = encoding
        self._file: IO[str] | None = None
        self._reader = None
        self._expected_columns: int | None = None

    # -- lifecycle -------------------------------------------------------------

    def open(self) -> None:
        self._file = open(self.path, encoding=self.encoding, errors="replace", newline="")
        self._reader = csv.reader(
            self._file,
            delimiter=self.delimiter,
            skipinitialspace=True,
            strict=True,
        )

    def close(self) -> None:
        """Close the underlying file handle."""
        if self._file is not None:
            self._file.close()
            self._file = None
            self._reader = None

    def __enter__(self) -> CSVRowReader:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -- reading ---------------------------------------------------------------

    @property
    def line_number(self) -> int:
        """Physical line number of the last line consumed."""
        return self._reader.line_num if self._reader is not None else 0

    def read_header(self) -> list[str]:
        """Read the header row and fix the expected column count.

        Raises
        ------
        EmptyInputError
            If the file has no rows at all.
        MalformedRowError
            If the header row itself cannot be parsed.
        """
        row = self._next_row()
        if row is None:
            raise EmptyInputError(str(self.path))
        self._expected_columns = len(row)
        return row

    def read(self) -> list[str] | None:
        """Return the next data row, or ``None`` at end of input.

        Raises
        ------
        MalformedRowError
            If the row has bad quoting or a column count different from the
            header's.  The row is consumed; the next call continues after it.
        """
        if self._expected_columns is None:
            raise RuntimeError("CSVRowReader.read_header() must be called before read().")

        row = self._next_row()
        if row is not None and len(row) != self._expected_columns:
            raise MalformedRowError(
                self.line_number,
                f"wrong number of fields: expected {self._expected_columns}, got {len(row)}",
            )
        return row

    def _next_row(self) -> list[str] | None:
        if self._reader is None:
            raise RuntimeError("CSVRowReader.open() must be called before reading.")
        while True:
            try:
                row = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as exc:
                raise MalformedRowError(self.line_number, str(exc)) from exc
            # Blank physical lines are not records.
            if row:
                if any(REPLACEMENT_CHAR in cell for cell in row):
                    logger.warning(
                        "Undecodable bytes in %s at line %d replaced with U+FFFD",
                        self.path.name, self.line_number,
                    )
                return row
