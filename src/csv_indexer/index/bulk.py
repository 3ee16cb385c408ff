"""Bulk request body encoding (one action line + one source line per document)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from csv_indexer.index.base import IndexSinkBase, document_ids
from csv_indexer.index.models import BulkIndexResult, IndexItemResult
from csv_indexer.schema.models import DocumentBatch

logger = logging.getLogger(__name__)


def encode_bulk_body(batch: DocumentBatch, index_name: str) -> str:
    """Encode *batch* as a newline-delimited JSON bulk request body.

    Each document contributes ``{"index": {"_index": ..., "_id": ...}}``
    followed by its field map, in batch order.  The body ends with a
    newline.  Identical batches always encode to identical bodies.
    """
    lines: list[str] = []
    for doc_id, doc in zip(document_ids(batch), batch):
        action = {"index": {"_index": index_name, "_id": doc_id}}
        lines.append(json.dumps(action, ensure_ascii=False))
        lines.append(json.dumps(dict(doc.fields), ensure_ascii=False))
    return "".join(line + "\n" for line in lines)


class BulkFileSink(IndexSinkBase):
    """Write the bulk request body to a file instead of a live store.

    Parameters
    ----------
    path:
        Destination file; parent directories are created.
    index_name:
        ``_index`` written on every action line.
    """

    def __init__(self, path: str | Path, index_name: str) -> None:
        super().__init__(index_name)
        self.path = Path(path)

    def setup(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def bulk_index(self, batch: DocumentBatch) -> BulkIndexResult:
        ids = document_ids(batch)
        result = BulkIndexResult(index_name=self.index_name)
        try:
            self.path.write_text(encode_bulk_body(batch, self.index_name), encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write bulk body to %s: %s", self.path, exc)
            result.items = [IndexItemResult(doc_id=i, ok=False, error=str(exc)) for i in ids]
            return result

        result.items = [IndexItemResult(doc_id=i) for i in ids]
        result.batches = 1
        logger.info("Wrote %d bulk action(s) to %s", len(ids), self.path)
        return result

    def health_check(self) -> bool:
        return self.path.parent.is_dir()
