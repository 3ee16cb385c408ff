"""
csv-indexer — map delimited text files onto a document schema and bulk-load
the resulting documents into a search index.

Public API
----------
- :func:`ingest_csv` — run the full field-mapping pipeline on one file.
- :class:`Document`, :class:`DocumentBatch`, :class:`FieldDefinition` — data models.
- :mod:`csv_indexer.index` — sinks that persist a :class:`DocumentBatch`.
"""

from csv_indexer.ingestion.service import IngestionResult, ingest_csv
from csv_indexer.schema.models import (
    SOURCE_FIELD,
    Document,
    DocumentBatch,
    FieldDefinition,
)

__all__ = [
    "SOURCE_FIELD",
    "Document",
    "DocumentBatch",
    "FieldDefinition",
    "IngestionResult",
    "ingest_csv",
]
