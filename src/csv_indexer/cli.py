"""Command-line entry point: parse a delimited file and bulk-load it.

Usage
-----
    csv-indexer --csv data/contacts.csv --fields fields.json --select id,name
    csv-indexer --csv data/contacts.csv --test
    csv-indexer --csv data/contacts.csv --bulk-output out/contacts.ndjson

Every flag falls back to the matching environment variable (or ``.env``
entry) read by :class:`~csv_indexer.config.Settings`.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from csv_indexer.config import Settings
from csv_indexer.errors import CSVIndexerError
from csv_indexer.index.base import IndexSinkBase
from csv_indexer.index.bulk import BulkFileSink
from csv_indexer.ingestion.service import ingest_csv
from csv_indexer.reporting import print_documents
from csv_indexer.schema.loader import load_field_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv-indexer",
        description="Map a delimited file onto a document schema and bulk-load it.",
    )
    parser.add_argument("--csv", dest="csv_file_path", help="Path to CSV file")
    parser.add_argument(
        "--fields",
        dest="field_config_path",
        help="Path to field configuration JSON file",
    )
    parser.add_argument(
        "--select",
        dest="selected_fields",
        help="Comma-separated list of fields to include (empty for all fields)",
    )
    parser.add_argument(
        "--delimiter",
        help="CSV delimiter character, or 'tab' (auto-detect if not specified)",
    )
    parser.add_argument(
        "--test",
        dest="test_mode",
        action="store_true",
        default=None,
        help="Only parse and print documents without connecting to the index",
    )
    parser.add_argument("--chroma-host", dest="chroma_host", help="Chroma server host")
    parser.add_argument("--chroma-port", dest="chroma_port", type=int, help="Chroma server port")
    parser.add_argument("--index", dest="index_name", help="Target index / collection name")
    parser.add_argument(
        "--bulk-output",
        dest="bulk_output",
        help="Write an NDJSON bulk body to this path instead of indexing into Chroma",
    )
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default INFO)")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment-backed settings with every given CLI flag applied on top."""
    overrides = {
        key: value
        for key, value in vars(args).items()
        if value is not None and key in Settings.model_fields
    }
    return Settings(**overrides)


def make_sink(settings: Settings, bulk_output: str | None) -> IndexSinkBase:
    if bulk_output:
        return BulkFileSink(bulk_output, index_name=settings.index_name)

    from csv_indexer.index.chroma_store import ChromaIndexSink

    return ChromaIndexSink(
        settings.index_name,
        host=settings.chroma_host,
        port=settings.chroma_port,
        upsert_batch_size=settings.upsert_batch_size,
    )


def run(settings: Settings, bulk_output: str | None = None) -> int:
    """Execute one ingestion run and return the process exit code."""
    if not settings.csv_file_path:
        logger.error("CSV file path is required (--csv or CSV_FILE_PATH)")
        return 1

    try:
        fields = (
            load_field_config(settings.field_config_path)
            if settings.field_config_path
            else None
        )
        result = ingest_csv(
            settings.csv_file_path,
            fields=fields,
            selected_fields=settings.selected_field_list,
            delimiter=settings.delimiter or None,
        )
    except CSVIndexerError as exc:
        logger.error("Error processing %s: %s", settings.csv_file_path, exc)
        return 1
    except OSError as exc:
        logger.error("Error reading CSV file: %s", exc)
        return 1

    if settings.test_mode:
        print_documents(result.batch, result.schema, print_all=True)
        return 0

    print_documents(result.batch, result.schema, print_all=False)

    try:
        sink = make_sink(settings, bulk_output)
        sink.setup()
    except CSVIndexerError as exc:
        logger.error("Error setting up index %r: %s", settings.index_name, exc)
        return 1

    outcome = sink.bulk_index(result.batch)
    if outcome.failed:
        for item in outcome.errors:
            logger.error("Failed to index %s: %s", item.doc_id, item.error)
        logger.error(outcome.summary())
        return 1

    logger.info("All documents indexed successfully. %s", outcome.summary())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(settings, bulk_output=args.bulk_output)


if __name__ == "__main__":
    sys.exit(main())
