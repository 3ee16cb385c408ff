"""Loading and narrowing of externally supplied field configurations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from csv_indexer.errors import SchemaLoadError
from csv_indexer.schema.models import FieldDefinition, Schema

logger = logging.getLogger(__name__)

_FIELD_LIST = TypeAdapter(list[FieldDefinition])


def parse_field_config(raw: str | bytes) -> Schema:
    """Validate a JSON array of field definitions.

    Each entry is ``{"name": ..., "csv_name": ..., "required": ...}``;
    ``csv_name`` defaults to ``name`` and ``required`` to ``False``.

    Raises
    ------
    SchemaLoadError
        If *raw* is not JSON, not a list of valid definitions, or empty.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"error parsing field config: {exc}") from exc

    try:
        fields = _FIELD_LIST.validate_python(data)
    except ValidationError as exc:
        raise SchemaLoadError(f"invalid field config: {exc}") from exc

    if not fields:
        raise SchemaLoadError("field config contains no field definitions")
    return tuple(fields)


def load_field_config(path: str | Path) -> Schema:
    """Read and validate the field configuration file at *path*."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise SchemaLoadError(f"error reading field config file {path}: {exc}") from exc
    fields = parse_field_config(raw)
    logger.info("Loaded %d field definitions from %s", len(fields), path)
    return fields


def filter_fields(fields: Schema, selected: list[str] | None) -> Schema:
    """Keep the definitions whose name matches an entry of *selected*.

    Matching is case-insensitive and preserves schema order.  An empty or
    missing selection keeps every definition.
    """
    if not selected:
        return tuple(fields)
    wanted = {s.casefold() for s in selected}
    return tuple(f for f in fields if f.name.casefold() in wanted)
