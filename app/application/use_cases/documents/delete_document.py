"""Use case for deleting a document and its blob."""

import logging

from sqlalchemy.orm import Session

from app.infrastructure.repositories import DocumentRepository
from app.infrastructure.storage import DocumentStorage
from .get_document import NOT_FOUND_MESSAGE

logger = logging.getLogger(__name__)


def delete_document(session: Session, storage: DocumentStorage, document_id: int) -> None:
    """Remove the document row and its blob together.

    The blob is moved aside first, the row deletion is committed, and only then
    is the blob purged. A failed commit puts the blob back. A blob that is
    already missing does not prevent the row from being deleted.
    """

    repository = DocumentRepository(session)
    document = repository.get(document_id)
    if document is None:
        raise ValueError(NOT_FOUND_MESSAGE)

    staged = storage.stage_removal(document.filepath)
    if staged is None:
        logger.warning(
            "Blob %s of document %s was already missing", document.filepath, document_id
        )

    try:
        repository.remove(document_id)
        session.commit()
    except Exception:
        session.rollback()
        if staged is not None:
            try:
                storage.restore(staged, document.filepath)
            except OSError:
                logger.exception(
                    "Could not restore blob %s of document %s", document.filepath, document_id
                )
        raise

    if staged is not None:
        try:
            storage.purge(staged)
        except OSError:
            # The row is gone; the reconciliation sweep purges the staged blob.
            logger.exception("Could not purge staged blob %s", staged)
    logger.info("Deleted document %s (%s)", document_id, document.filename)
