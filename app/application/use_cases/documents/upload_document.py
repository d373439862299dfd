"""Use case for storing a new uploaded document."""

import logging
from typing import BinaryIO

from sqlalchemy.orm import Session

from app.domain.entities import Document
from app.infrastructure.repositories import DocumentRepository
from app.infrastructure.storage import DocumentStorage

logger = logging.getLogger(__name__)


def upload_document(
    session: Session,
    storage: DocumentStorage,
    *,
    filename: str,
    stream: BinaryIO,
    timezone_name: str | None = None,
) -> Document:
    """Write the blob, then commit its document row.

    If the row cannot be committed the freshly written blob is removed again
    so that no orphaned file is left behind.
    """

    blob = storage.save(stream)
    repository = DocumentRepository(session, timezone_name=timezone_name)
    try:
        document = repository.add(
            Document(
                id=None,
                filename=filename,
                filepath=blob.filepath,
                filesize=blob.size,
                created_at=None,
            )
        )
        session.commit()
    except Exception:
        session.rollback()
        storage.remove(blob.filepath)
        logger.warning("Discarded blob %s after a failed insert", blob.filepath)
        raise

    logger.info(
        "Stored document %s (%s, %d bytes) at %s",
        document.id,
        document.filename,
        document.filesize,
        document.filepath,
    )
    return document
