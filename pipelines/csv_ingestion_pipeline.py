"""KFP v2 pipeline — CSV ingestion workflow.

Two stages connected by a KFP Dataset artifact:

    parse → index

Compile
-------
    python -m pipelines.csv_ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.index import index_documents
from pipelines.components.parse import parse_csv


# ──────────────────────────────────────────────────────────────────────
# Pipeline definition
# ──────────────────────────────────────────────────────────────────────


@dsl.pipeline(
    name="csv-ingestion-pipeline",
    description=(
        "Parse a delimited file into schema-mapped documents, then "
        "bulk-index them into a Chroma collection."
    ),
)
def csv_ingestion_pipeline(
    # ── Source ──────────────────────────────────────────────────────
    csv_path: str = "/data/input.csv",
    field_config: str = "",
    selected_fields: str = "",
    delimiter: str = "",
    # ── Index ──────────────────────────────────────────────────────
    chroma_host: str = "chroma.kubeflow.svc.cluster.local",
    chroma_port: int = 8000,
    collection_name: str = "csv_data",
    upsert_batch_size: int = 5000,
) -> None:
    """Parse → index.

    Parameters
    ----------
    csv_path:
        Path to the delimited input file inside the component container.
    field_config:
        JSON-encoded list of field definitions (empty infers from header).
    selected_fields:
        Comma-separated field names narrowing *field_config*.
    delimiter:
        Field separator; empty auto-detects.
    chroma_host / chroma_port / collection_name:
        Chroma connection details.
    upsert_batch_size:
        Max records per upsert call.
    """
    parse_task = parse_csv(
        csv_path=csv_path,
        field_config=field_config,
        selected_fields=selected_fields,
        delimiter=delimiter,
    )

    index_documents(
        documents=parse_task.outputs["documents"],
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        collection_name=collection_name,
        upsert_batch_size=upsert_batch_size,
    )


# ──────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="CSV ingestion pipeline")
    parser.add_argument(
        "--compile",
        action="store_true",
        help="Compile pipeline to YAML",
    )
    parser.add_argument(
        "--output",
        default="pipelines/compiled/csv_ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(csv_ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
