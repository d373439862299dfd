"""Use cases for managing uploaded documents."""

from .delete_document import delete_document
from .get_document import get_document, open_document
from .list_documents import list_documents
from .reconcile_storage import ReconciliationReport, reconcile_storage
from .upload_document import upload_document

__all__ = [
    "ReconciliationReport",
    "delete_document",
    "get_document",
    "list_documents",
    "open_document",
    "reconcile_storage",
    "upload_document",
]
