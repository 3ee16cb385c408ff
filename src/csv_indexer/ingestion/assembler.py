"""Record assembly — data rows → documents keyed by schema field names."""

from __future__ import annotations

import logging

from csv_indexer.errors import MalformedRowError
from csv_indexer.ingestion.header import HeaderIndex, header_key
from csv_indexer.ingestion.normalize import clean_row
from csv_indexer.ingestion.reader import CSVRowReader
from csv_indexer.schema.models import SOURCE_FIELD, Document, DocumentBatch, Schema

logger = logging.getLogger(__name__)


def assemble_document(
    row: list[str],
    fields: Schema,
    header_index: HeaderIndex,
    source: str,
) -> Document:
    """Build one document from a single data row.

    Parameters
    ----------
    row:
        Raw cells of the data row.
    fields:
        Resolved schema; evaluated in order.
    header_index:
        Normalized header name → column position.
    source:
        Value of the reserved :data:`SOURCE_FIELD`.

    Returns
    -------
    Document
        Only fields whose column exists and whose cleaned value is
        non-empty are set.  ``SOURCE_FIELD`` is always set, last.
    """
    values = clean_row(row)
    doc: dict[str, str] = {}
    for field in fields:
        position = header_index.get(header_key(field.csv_name))
        if position is None or position >= len(values):
            continue
        value = values[position]
        if value:
            doc[field.name] = value

    # Reserved field always last, even if a schema field shares its name.
    doc.pop(SOURCE_FIELD, None)
    doc[SOURCE_FIELD] = source
    return Document(fields=doc)


def assemble_documents(
    reader: CSVRowReader,
    fields: Schema,
    header_index: HeaderIndex,
    source: str,
) -> DocumentBatch:
    """Read every remaining row from *reader* and assemble a batch.

    Malformed rows are logged and skipped; they never abort the batch.
    """
    documents: list[Document] = []
    skipped: list[int] = []

    while True:
        try:
            row = reader.read()
        except MalformedRowError as exc:
            logger.warning("Skipping malformed record in %s: %s", source, exc)
            skipped.append(exc.line_number)
            continue
        if row is None:
            break
        documents.append(assemble_document(row, fields, header_index, source))

    if skipped:
        logger.warning("Skipped %d malformed record(s) in %s", len(skipped), source)

    return DocumentBatch(
        source=source,
        documents=tuple(documents),
        skipped_lines=tuple(skipped),
    )
