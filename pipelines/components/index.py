"""KFP v2 component — Index parsed documents into a Chroma collection.

Step 2 of the CSV ingestion pipeline.  Reads the JSON-Lines Dataset
written by ``parse_csv`` and upserts every document, with its field map
as metadata, into the target collection.

Document ids are ``<file name>:<ordinal>``, matching the ``doc_id``
written by ``parse_csv``, so re-runs over the same file overwrite
documents instead of duplicating them.  A failed upsert marks every
document of that chunk as failed; the remaining chunks are still
attempted.

Local testing
-------------
    from pipelines.components.index import index_documents
    index_documents.python_func(
        documents=_FakeArtifact("/tmp/documents.jsonl"),
        chroma_host="localhost",
        chroma_port=8000,
        collection_name="csv_data",
        metrics=_FakeArtifact("/tmp/metrics"),
    )
"""

from kfp import dsl

from pipelines.components.image import CSV_INDEXER_IMAGE


@dsl.component(base_image=CSV_INDEXER_IMAGE)
def index_documents(
    documents: dsl.Input[dsl.Dataset],
    chroma_host: str,
    chroma_port: int,
    collection_name: str,
    metrics: dsl.Output[dsl.Metrics],
    upsert_batch_size: int = 5000,
) -> str:
    """Upsert parsed documents into a Chroma collection.

    Parameters
    ----------
    documents:
        Input Dataset — JSON-Lines produced by ``parse_csv`` with
        ``doc_id`` and ``fields`` keys.
    chroma_host / chroma_port:
        Chroma connection details.
    collection_name:
        Target collection name.
    metrics:
        Output Metrics artifact with indexing statistics.
    upsert_batch_size:
        Max records per upsert call.

    Returns
    -------
    str
        Summary, e.g. ``"Indexed 120/120 documents → index 'csv_data'"``.
    """
    import json
    import logging

    from csv_indexer.index.chroma_store import ChromaIndexSink
    from csv_indexer.schema.models import SOURCE_FIELD, Document, DocumentBatch

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("index_documents")

    # ── read parsed records ───────────────────────────────────────
    records: list[dict] = []
    with open(documents.path) as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                log.warning("Skipping malformed line %d: %s", lineno, exc)

    if not records:
        metrics.log_metric("documents_indexed", 0)
        metrics.log_metric("upsert_batches", 0)
        return "No documents to index."

    for i, rec in enumerate(records):
        missing = {"doc_id", "fields"} - rec.keys()
        if missing:
            raise ValueError(f"Record {i} missing required keys: {missing}")

    batch = DocumentBatch(
        source=records[0]["fields"].get(SOURCE_FIELD, ""),
        documents=tuple(Document(fields=rec["fields"]) for rec in records),
    )

    # ── upsert ────────────────────────────────────────────────────
    sink = ChromaIndexSink(
        collection_name,
        host=chroma_host,
        port=chroma_port,
        upsert_batch_size=upsert_batch_size,
    )
    sink.setup()
    result = sink.bulk_index(batch)

    # KFP Metrics
    metrics.log_metric("documents_indexed", result.indexed)
    metrics.log_metric("documents_failed", result.failed)
    metrics.log_metric("upsert_batches", result.batches)

    msg = result.summary()
    log.info(msg)
    return msg
