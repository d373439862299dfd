"""Use cases for retrieving a single document."""

from pathlib import Path

from sqlalchemy.orm import Session

from app.domain.entities import Document
from app.infrastructure.repositories import DocumentRepository
from app.infrastructure.storage import DocumentStorage

NOT_FOUND_MESSAGE = "File not found"


def get_document(session: Session, document_id: int) -> Document:
    """Return the document identified by ``document_id`` or raise an error."""

    document = DocumentRepository(session).get(document_id)
    if document is None:
        raise ValueError(NOT_FOUND_MESSAGE)
    return document


def open_document(
    session: Session, storage: DocumentStorage, document_id: int
) -> tuple[Document, Path]:
    """Return the document together with the absolute path of its blob.

    Raises ``ValueError`` when no row exists and ``FileNotFoundError`` when the
    row exists but its blob is missing from the storage directory.
    """

    document = get_document(session, document_id)
    path = storage.resolve(document.filepath)
    if not path.is_file():
        raise FileNotFoundError(document.filepath)
    return document, path
