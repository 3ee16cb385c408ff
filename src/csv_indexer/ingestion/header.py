"""Header row → column-position mapping and required-field validation."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from csv_indexer.errors import MissingRequiredFieldError
from csv_indexer.ingestion.normalize import clean_string
from csv_indexer.schema.models import Schema

logger = logging.getLogger(__name__)

HeaderIndex = Mapping[str, int]


def header_key(name: str) -> str:
    """Normalized lookup key for a header cell or ``csv_name``."""
    return clean_string(name).lower()


def build_header_index(header: list[str]) -> HeaderIndex:
    """Map each non-empty header name (lower-cased) to its column position.

    When two cells normalize to the same key the later column wins.
    """
    index: dict[str, int] = {}
    for position, cell in enumerate(header):
        key = header_key(cell)
        if not key:
            continue
        if key in index:
            logger.warning(
                "Header %r appears in columns %d and %d; using column %d",
                key, index[key], position, position,
            )
        index[key] = position
    return MappingProxyType(index)


def validate_required(fields: Schema, index: HeaderIndex) -> None:
    """Raise :class:`MissingRequiredFieldError` for the first required
    field whose ``csv_name`` has no column in *index*."""
    for field in fields:
        if field.required and header_key(field.csv_name) not in index:
            raise MissingRequiredFieldError(field.name, field.csv_name)


def map_header(header: list[str], fields: Schema) -> HeaderIndex:
    """Build the header index for *header* and validate *fields* against it."""
    index = build_header_index(header)
    validate_required(fields, index)
    logger.info("CSV header mapping: %s", dict(index))
    return index
