"""Utility script to repair drift between document rows and stored files."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.documents import reconcile_storage
from app.config import get_settings
from app.infrastructure.database import Database
from app.infrastructure.storage import DocumentStorage


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the reconciliation sweep."""

    parser = argparse.ArgumentParser(
        description="Remove document rows without a stored file and stored files without a row.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report the inconsistencies without changing anything.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the reconciliation sweep against the configured database and storage."""

    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    database = Database(settings.database_url)
    storage = DocumentStorage(settings.base_dir, settings.storage_dir)
    database.create_all()

    try:
        with database.session() as session:
            report = reconcile_storage(session, storage, dry_run=args.dry_run)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not reconcile the document store: {exc}") from exc
    finally:
        database.dispose()

    heading = "Inconsistencies found (dry run):" if args.dry_run else "Reconciliation finished:"
    print(
        f"{heading}\n"
        f"  Rows without file: {report.missing_blob_document_ids or '-'}\n"
        f"  Files without row: {report.orphaned_blobs or '-'}\n"
        f"  Staged files restored: {report.restored_blobs or '-'}\n"
        f"  Staged files purged: {report.purged_staged_blobs or '-'}"
    )


if __name__ == "__main__":
    main()
