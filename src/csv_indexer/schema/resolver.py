"""Resolve the schema used for every record of a file."""

from __future__ import annotations

import logging

from csv_indexer.ingestion.normalize import clean_string
from csv_indexer.schema.loader import filter_fields
from csv_indexer.schema.models import FieldDefinition, Schema

logger = logging.getLogger(__name__)


def detect_fields(header: list[str]) -> Schema:
    """Infer one optional field per non-empty header cell.

    Duplicate header names yield duplicate definitions; each one is
    evaluated independently during assembly.
    """
    fields: list[FieldDefinition] = []
    for cell in header:
        name = clean_string(cell)
        if not name:
            continue
        fields.append(FieldDefinition(name=name, csv_name=name, required=False))
    return tuple(fields)


def resolve_schema(
    header: list[str],
    fields: Schema | None = None,
    selected_fields: list[str] | None = None,
) -> Schema:
    """Return the final schema for a file with the given *header*.

    Parameters
    ----------
    header:
        Cleaned header row.
    fields:
        Externally supplied schema.  Used as-is (after narrowing by
        *selected_fields*) when non-empty; otherwise the schema is
        inferred from *header*.
    selected_fields:
        Case-insensitive field-name selection applied to *fields*.

    Never raises; an empty schema is a legal result.
    """
    if fields:
        return filter_fields(fields, selected_fields)

    detected = detect_fields(header)
    logger.info("Detected fields: %s", [f.name for f in detected])
    return detected
