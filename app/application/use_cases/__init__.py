"""Aggregate application use cases."""

from .documents import (
    delete_document,
    get_document,
    list_documents,
    open_document,
    reconcile_storage,
    upload_document,
)

__all__ = [
    "delete_document",
    "get_document",
    "list_documents",
    "open_document",
    "reconcile_storage",
    "upload_document",
]
