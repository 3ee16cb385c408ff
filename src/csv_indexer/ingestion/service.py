"""End-to-end field-mapping pipeline for a single delimited file.

Stage order:
  1. Delimiter — explicit, or sniffed from the first line.
  2. Header    — read once, cleaned.
  3. Schema    — supplied fields (narrowed by selection) or inferred.
  4. Mapping   — header index built, required fields validated.
  5. Records   — every remaining row assembled into a document.

Stages 2-5 share one file handle that is released on every exit path.
Fatal errors (empty input, missing required field) propagate; malformed
data rows are skipped inside stage 5.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from csv_indexer.ingestion.assembler import assemble_documents
from csv_indexer.ingestion.delimiter import sniff_delimiter
from csv_indexer.ingestion.header import HeaderIndex, map_header
from csv_indexer.ingestion.normalize import clean_row
from csv_indexer.ingestion.reader import CSVRowReader
from csv_indexer.schema.models import DocumentBatch, Schema
from csv_indexer.schema.resolver import resolve_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of :func:`ingest_csv`.

    Attributes
    ----------
    source_path:
        Path of the file that was read.
    delimiter:
        Delimiter used to split rows.
    schema:
        Resolved schema applied to every record.
    header_index:
        Normalized header name → column position.
    batch:
        Assembled documents in input order.
    """

    source_path: Path
    delimiter: str
    schema: Schema
    header_index: HeaderIndex
    batch: DocumentBatch


def ingest_csv(
    source_path: Path | str,
    *,
    fields: Schema | None = None,
    selected_fields: list[str] | None = None,
    delimiter: str | None = None,
    encoding: str = "utf-8-sig",
) -> IngestionResult:
    """Map *source_path* onto a schema and assemble its documents.

    Parameters
    ----------
    source_path:
        Path to the delimited file.
    fields:
        Externally supplied schema, or ``None`` to infer one from the header.
    selected_fields:
        Case-insensitive selection narrowing *fields*.
    delimiter:
        Field separator; ``None`` or ``""`` auto-detects.
    encoding:
        Text encoding of the file.  Undecodable bytes are replaced.

    Returns
    -------
    IngestionResult
        The resolved schema, header index and assembled batch.

    Raises
    ------
    EmptyInputError
        The file has no first line.
    MissingRequiredFieldError
        A required field has no header column.
    MalformedRowError
        The header row itself is unparseable.
    """
    source_path = Path(source_path)

    if not delimiter:
        delimiter = sniff_delimiter(source_path, encoding=encoding)

    with CSVRowReader(source_path, delimiter=delimiter, encoding=encoding) as reader:
        header = clean_row(reader.read_header())
        schema = resolve_schema(header, fields, selected_fields)
        header_index = map_header(header, schema)
        batch = assemble_documents(reader, schema, header_index, source_path.name)

    logger.info(
        "Assembled %d document(s) from %s (%d skipped)",
        len(batch), source_path.name, len(batch.skipped_lines),
    )
    return IngestionResult(
        source_path=source_path,
        delimiter=delimiter,
        schema=schema,
        header_index=header_index,
        batch=batch,
    )
