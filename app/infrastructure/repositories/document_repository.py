"""Persistence helpers for uploaded documents."""

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.domain.entities import Document
from app.infrastructure.models import DocumentModel
from app.utils import ensure_naive_datetime, now_naive


class DocumentRepository:
    """Provide CRUD operations for document rows.

    Write methods only flush; committing or rolling back is left to the caller
    so that the row change can be paired with a file system operation.
    """

    def __init__(self, session: Session, *, timezone_name: str | None = None) -> None:
        self.session = session
        self.timezone_name = timezone_name

    def list(self) -> list[Document]:
        query = self.session.query(DocumentModel).order_by(
            desc(DocumentModel.created_at), desc(DocumentModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, document_id: int) -> Document | None:
        model = self.session.get(DocumentModel, document_id)
        return self._to_entity(model) if model else None

    def add(self, document: Document) -> Document:
        model = DocumentModel(
            filename=document.filename,
            filepath=document.filepath,
            filesize=document.filesize,
            created_at=(
                ensure_naive_datetime(document.created_at, self.timezone_name)
                or now_naive(self.timezone_name)
            ),
        )
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def remove(self, document_id: int) -> None:
        model = self.session.get(DocumentModel, document_id)
        if model is None:
            msg = f"Document with id {document_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.flush()

    def list_filepaths(self) -> set[str]:
        return set(self.session.scalars(select(DocumentModel.filepath)).all())

    @staticmethod
    def _to_entity(model: DocumentModel) -> Document:
        return Document(
            id=model.id,
            filename=model.filename,
            filepath=model.filepath,
            filesize=model.filesize,
            created_at=model.created_at,
        )


__all__ = ["DocumentRepository"]
