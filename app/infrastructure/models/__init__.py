"""ORM models used by the application infrastructure."""

from .document import DocumentModel

__all__ = [
    "DocumentModel",
]
