"""Repository implementations for infrastructure layer."""

from .document_repository import DocumentRepository

__all__ = [
    "DocumentRepository",
]
