"""
Schema — field definitions, external configuration loading, and
header-driven schema resolution.
"""

from csv_indexer.schema.loader import filter_fields, load_field_config, parse_field_config
from csv_indexer.schema.models import SOURCE_FIELD, Document, DocumentBatch, FieldDefinition, Schema
from csv_indexer.schema.resolver import detect_fields, resolve_schema

__all__ = [
    "SOURCE_FIELD",
    "Document",
    "DocumentBatch",
    "FieldDefinition",
    "Schema",
    "detect_fields",
    "filter_fields",
    "load_field_config",
    "parse_field_config",
    "resolve_schema",
]
