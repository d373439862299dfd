"""Domain entities exposed by the application."""

from .document import Document

__all__ = [
    "Document",
]
