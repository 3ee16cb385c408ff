"""Shared pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes *text* to ``tmp_path / name``."""

    def _write(text: str, name: str = "file.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write
