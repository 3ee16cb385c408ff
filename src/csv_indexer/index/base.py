"""Abstract base class for index-store sinks.

Adding a new backend (Elasticsearch, OpenSearch, …) only requires
subclassing :class:`IndexSinkBase` and implementing the abstract methods.
The ingestion pipeline never depends on a concrete sink.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from csv_indexer.index.models import BulkIndexResult
from csv_indexer.schema.models import DocumentBatch


def document_ids(batch: DocumentBatch) -> list[str]:
    """Deterministic ids ``<source>:<ordinal>`` for every document in *batch*.

    Re-indexing the same file overwrites earlier documents instead of
    duplicating them.
    """
    return [f"{batch.source}:{ordinal}" for ordinal in range(1, len(batch) + 1)]


class IndexSinkBase(ABC):
    """Backend-agnostic sink interface.

    Parameters
    ----------
    index_name:
        Logical name of the index / collection.
    """

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def bulk_index(self, batch: DocumentBatch) -> BulkIndexResult:
        """Write every document of *batch*, in order.

        Write failures are reported per item in the returned result; they
        are not raised.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def setup(self) -> None:
        """Ensure the target index exists.  No-op by default.

        Raises :class:`~csv_indexer.errors.SinkError` when it cannot.
        """
