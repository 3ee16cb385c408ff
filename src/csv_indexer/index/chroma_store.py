"""Chroma implementation of the index-sink abstraction."""

from __future__ import annotations

import logging
import time
from typing import Any

import chromadb

from csv_indexer.errors import SinkError
from csv_indexer.index.base import IndexSinkBase, document_ids
from csv_indexer.index.models import BulkIndexResult, IndexItemResult
from csv_indexer.schema.models import SOURCE_FIELD, Document, DocumentBatch

logger = logging.getLogger(__name__)


def document_text(doc: Document) -> str:
    """Searchable text for *doc*: ``"name: value; ..."`` in field order."""
    return "; ".join(f"{name}: {value}" for name, value in doc.fields.items())


class ChromaIndexSink(IndexSinkBase):
    """Chroma-backed index sink.

    Documents are upserted with deterministic ids so re-runs over the same
    file are idempotent.  Field maps are stored as flat string metadata.

    Parameters
    ----------
    index_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    upsert_batch_size:
        Max documents per upsert call.
    client:
        Pre-built Chroma client; connected from *host*/*port* in
        :meth:`setup` when omitted.
    """

    def __init__(
        self,
        index_name: str = "csv_data",
        *,
        host: str = "localhost",
        port: int = 8000,
        upsert_batch_size: int = 5000,
        client: Any = None,
    ) -> None:
        super().__init__(index_name)
        self._host = host
        self._port = port
        self.upsert_batch_size = upsert_batch_size
        self._client = client
        self._collection = None

    # -- IndexSinkBase overrides ----------------------------------------------

    def setup(self) -> None:
        try:
            if self._client is None:
                self._client = chromadb.HttpClient(host=self._host, port=self._port)
            self._collection = self._client.get_or_create_collection(
                name=self.index_name,
                metadata={"source_field": SOURCE_FIELD},
            )
        except Exception as exc:
            raise SinkError(
                f"error connecting to Chroma at {self._host}:{self._port} "
                f"or creating collection {self.index_name!r}: {exc}"
            ) from exc

    def bulk_index(self, batch: DocumentBatch) -> BulkIndexResult:
        if self._collection is None:
            self.setup()

        ids = document_ids(batch)
        texts = [document_text(doc) for doc in batch]
        metadatas = [dict(doc.fields) for doc in batch]
        result = BulkIndexResult(index_name=self.index_name)

        t0 = time.monotonic()
        batches = 0
        for start in range(0, len(ids), self.upsert_batch_size):
            end = start + self.upsert_batch_size
            chunk_ids = ids[start:end]
            try:
                self._collection.upsert(
                    ids=chunk_ids,
                    documents=texts[start:end],
                    metadatas=metadatas[start:end],
                )
            except Exception as exc:
                logger.error(
                    "Upsert of documents %d-%d into %r failed: %s",
                    start, min(end, len(ids)), self.index_name, exc,
                )
                result.items.extend(
                    IndexItemResult(doc_id=i, ok=False, error=str(exc)) for i in chunk_ids
                )
                continue
            batches += 1
            result.items.extend(IndexItemResult(doc_id=i) for i in chunk_ids)
            result.batches = batches
            logger.info("  upserted batch %d (%d-%d)", batches, start, min(end, len(ids)))

        logger.info(
            "Indexed %d/%d documents in %.1fs (%d batches)",
            result.indexed, len(ids), time.monotonic() - t0, batches,
        )
        return result

    def health_check(self) -> bool:
        try:
            if self._client is None:
                self._client = chromadb.HttpClient(host=self._host, port=self._port)
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
