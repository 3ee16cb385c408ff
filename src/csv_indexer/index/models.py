"""Per-item outcome models returned by index sinks."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexItemResult(BaseModel):
    """Outcome of writing a single document.

    Attributes
    ----------
    doc_id:
        Identifier the sink stored the document under.
    ok:
        ``True`` when the sink accepted the document.
    error:
        Failure description when ``ok`` is ``False``.
    """

    doc_id: str
    ok: bool = True
    error: str | None = None


class BulkIndexResult(BaseModel):
    """Aggregate outcome of one :meth:`IndexSinkBase.bulk_index` call.

    ``batches`` counts the write requests the sink completed successfully.
    """

    index_name: str
    items: list[IndexItemResult] = Field(default_factory=list)
    batches: int = 0

    @property
    def indexed(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if not item.ok)

    @property
    def errors(self) -> list[IndexItemResult]:
        return [item for item in self.items if not item.ok]

    def summary(self) -> str:
        """Return e.g. ``"Indexed 98/100 documents → index 'csv_data'"``."""
        return (
            f"Indexed {self.indexed}/{len(self.items)} documents "
            f"→ index '{self.index_name}'"
        )
