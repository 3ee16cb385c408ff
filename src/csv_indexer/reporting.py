"""Human-readable rendering of a document batch."""

from __future__ import annotations

import sys
from typing import TextIO

from csv_indexer.schema.models import SOURCE_FIELD, DocumentBatch, Schema

SAMPLE_SIZE = 2


def print_documents(
    batch: DocumentBatch,
    fields: Schema,
    print_all: bool,
    stream: TextIO | None = None,
) -> None:
    """Print *batch* to *stream* (stdout by default).

    With *print_all* every document is listed field by field in schema
    order, followed by its source file.  Otherwise only the raw field
    mapping of the first two documents is shown.  Both modes end with the
    total record count.
    """
    out = stream or sys.stdout

    if print_all:
        print("Test Mode - Printing all processed records:", file=out)
        for number, doc in enumerate(batch, 1):
            print(f"Record {number}:", file=out)
            for field in fields:
                value = doc.get_field(field.name)
                if value and field.name != SOURCE_FIELD:
                    print(f"  {field.name}: {value}", file=out)
            print(f"  {SOURCE_FIELD}: {doc.source}", file=out)
            print(file=out)
    else:
        print("Sample of processed records:", file=out)
        for doc in batch.documents[:SAMPLE_SIZE]:
            print(f"Fields: {dict(doc.fields)}", file=out)

    print(f"Total records processed: {len(batch)}", file=out)
