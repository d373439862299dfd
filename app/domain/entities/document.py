"""Domain entity describing an uploaded document."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Document:
    """Metadata for a PDF blob kept in the storage directory."""

    id: int | None
    filename: str
    filepath: str
    filesize: int
    created_at: datetime | None
