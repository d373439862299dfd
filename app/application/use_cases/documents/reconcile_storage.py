"""Use case repairing drift between document rows and stored blobs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.infrastructure.repositories import DocumentRepository
from app.infrastructure.storage import DocumentStorage

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    """Outcome of a reconciliation sweep."""

    missing_blob_document_ids: list[int] = field(default_factory=list)
    orphaned_blobs: list[str] = field(default_factory=list)
    restored_blobs: list[str] = field(default_factory=list)
    purged_staged_blobs: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def is_clean(self) -> bool:
        return not (
            self.missing_blob_document_ids
            or self.orphaned_blobs
            or self.restored_blobs
            or self.purged_staged_blobs
        )


def reconcile_storage(
    session: Session, storage: DocumentStorage, *, dry_run: bool = False
) -> ReconciliationReport:
    """Repair the pairing between document rows and blobs.

    Blobs left staged by an interrupted delete are moved back when their row
    still exists and purged otherwise. Then rows whose blob is gone are
    deleted, and blobs that no row refers to are removed. With ``dry_run`` the
    inconsistencies are only reported.
    """

    report = ReconciliationReport(dry_run=dry_run)
    repository = DocumentRepository(session)
    known_filepaths = repository.list_filepaths()

    for staged, filepath in storage.iter_staged():
        if filepath in known_filepaths and not storage.exists(filepath):
            report.restored_blobs.append(filepath)
            if not dry_run:
                storage.restore(staged, filepath)
        else:
            report.purged_staged_blobs.append(filepath)
            if not dry_run:
                storage.purge(staged)

    restorable = set(report.restored_blobs)
    for document in repository.list():
        if document.filepath in restorable:
            continue
        if not storage.exists(document.filepath):
            report.missing_blob_document_ids.append(document.id)
            if not dry_run:
                repository.remove(document.id)

    known_filepaths = repository.list_filepaths()
    for filepath in storage.iter_filepaths():
        if filepath not in known_filepaths:
            report.orphaned_blobs.append(filepath)

    if dry_run:
        session.rollback()
    else:
        session.commit()
        for filepath in report.orphaned_blobs:
            storage.remove(filepath)

    if report.is_clean:
        logger.info("Storage reconciliation found no inconsistencies")
    else:
        logger.warning(
            "Storage reconciliation%s: %d rows without blob %s, %d orphaned blobs %s, "
            "%d staged blobs restored %s, %d staged blobs purged %s",
            " (dry run)" if dry_run else "",
            len(report.missing_blob_document_ids),
            report.missing_blob_document_ids,
            len(report.orphaned_blobs),
            report.orphaned_blobs,
            len(report.restored_blobs),
            report.restored_blobs,
            len(report.purged_staged_blobs),
            report.purged_staged_blobs,
        )
    return report
