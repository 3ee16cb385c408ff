"""KFP v2 components — each file exports one @dsl.component."""

from pipelines.components.index import index_documents
from pipelines.components.parse import parse_csv

__all__ = [
    "index_documents",
    "parse_csv",
]
