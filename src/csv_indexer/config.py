"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_DELIMITER_ALIASES = {"tab": "\t", "\\t": "\t"}


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    CLI flags override these values; components never read the settings
    object directly, they receive the values they need as arguments.
    """

    # Source
    csv_file_path: str = Field(default="", description="Path to the delimited input file")
    field_config_path: str = Field(default="", description="Path to a JSON field configuration")
    selected_fields: str = Field(
        default="",
        description="Comma-separated field names to keep (empty keeps every field)",
    )
    delimiter: str = Field(default="", description="Field separator; empty means auto-detect")
    test_mode: bool = Field(
        default=False,
        description="Only parse and print documents, never touch the index",
    )

    # Index
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    index_name: str = "csv_data"
    upsert_batch_size: int = Field(default=5000, gt=0)

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, value: str) -> str:
        value = _DELIMITER_ALIASES.get(value.lower(), value)
        if len(value) > 1:
            raise ValueError(f"delimiter must be a single character, got {value!r}")
        return value

    @property
    def selected_field_list(self) -> list[str]:
        """``selected_fields`` split on commas, trimmed, blanks dropped."""
        return [f.strip() for f in self.selected_fields.split(",") if f.strip()]
