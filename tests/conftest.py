"""Shared fixtures for the document portal test-suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.config import Settings  # noqa: E402
from app.infrastructure.database import Database  # noqa: E402
from app.infrastructure.storage import DocumentStorage  # noqa: E402


def _make_pdf_bytes(size: int) -> bytes:
    header = b"%PDF-1.4\n"
    return header + b"0" * (size - len(header))


@pytest.fixture()
def make_pdf():
    """Return a factory producing ``size`` bytes that start like a PDF file."""

    return _make_pdf_bytes


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing the database and storage directory at ``tmp_path``."""

    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'documents.db'}",
        base_dir=tmp_path,
        storage_dir="uploads",
    )


@pytest.fixture()
def database(settings: Settings):
    """A ready database handle with every table created."""

    handle = Database(settings.database_url)
    handle.create_all()
    yield handle
    handle.drop_all()
    handle.dispose()


@pytest.fixture()
def storage(settings: Settings) -> DocumentStorage:
    """A storage directory below ``tmp_path``."""

    handle = DocumentStorage(settings.base_dir, settings.storage_dir)
    handle.ensure_directory()
    return handle
