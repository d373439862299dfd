"""Use case for listing stored documents."""

from sqlalchemy.orm import Session

from app.domain.entities import Document
from app.infrastructure.repositories import DocumentRepository


def list_documents(session: Session) -> list[Document]:
    """Return every document, newest first."""

    return DocumentRepository(session).list()
