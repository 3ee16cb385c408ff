"""
Index — sinks that persist a :class:`~csv_indexer.schema.models.DocumentBatch`.

Public surface
--------------
- :class:`IndexSinkBase` — abstract sink (subclass for other stores).
- :class:`ChromaIndexSink` — Chroma collection backend.
- :class:`BulkFileSink` — writes an NDJSON bulk request body to disk.
- :func:`encode_bulk_body` — action + source line per document.
- :class:`BulkIndexResult`, :class:`IndexItemResult` — per-item outcomes.
"""

from csv_indexer.index.base import IndexSinkBase, document_ids
from csv_indexer.index.bulk import BulkFileSink, encode_bulk_body
from csv_indexer.index.models import BulkIndexResult, IndexItemResult

__all__ = [
    "BulkFileSink",
    "BulkIndexResult",
    "ChromaIndexSink",
    "IndexItemResult",
    "IndexSinkBase",
    "document_ids",
    "encode_bulk_body",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaIndexSink to avoid pulling in chromadb at import time."""
    if name == "ChromaIndexSink":
        from csv_indexer.index.chroma_store import ChromaIndexSink

        return ChromaIndexSink
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
