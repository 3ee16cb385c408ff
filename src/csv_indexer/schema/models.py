"""Domain models for field definitions and assembled documents."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

# Reserved field carrying the input file's base name on every document.
SOURCE_FIELD = "source_csv"


class FieldDefinition(BaseModel):
    """One logical output field and the header column that supplies it.

    Attributes
    ----------
    name:
        Field name in the assembled document.
    csv_name:
        Header text of the source column.  Matched case-insensitively
        after whitespace normalization.  Defaults to ``name``.
    required:
        When ``True`` the run aborts if the header has no such column.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    csv_name: str = ""
    required: bool = False

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("field name must not be blank")
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_csv_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("csv_name"):
            data = {**data, "csv_name": data.get("name", "")}
        return data


# Ordered and immutable once resolved.
Schema = tuple[FieldDefinition, ...]


class Document(BaseModel):
    """A single assembled record: ordered ``field name → value`` mapping.

    Only non-empty values are stored.  Key order follows schema order with
    :data:`SOURCE_FIELD` last.  ``fields`` is a read-only view; item
    assignment raises ``TypeError``.
    """

    model_config = ConfigDict(frozen=True)

    fields: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("fields")
    @classmethod
    def _read_only(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("fields")
    def _dump_fields(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    def get_field(self, name: str) -> str:
        """Return the value of *name*, or ``""`` when the field is unset."""
        return self.fields.get(name, "")

    @property
    def source(self) -> str:
        return self.fields.get(SOURCE_FIELD, "")


class DocumentBatch(BaseModel):
    """Every document assembled from one file, in input row order.

    Attributes
    ----------
    source:
        Base name of the input file.
    documents:
        Assembled documents.
    skipped_lines:
        Line numbers of rows that were malformed and skipped.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    documents: tuple[Document, ...] = ()
    skipped_lines: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:  # type: ignore[override]
        return iter(self.documents)

    def __getitem__(self, index: int) -> Document:
        return self.documents[index]
