"""Local storage directory holding uploaded document blobs."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO
from uuid import uuid4

logger = logging.getLogger(__name__)

_STAGED_PREFIX = "."
_STAGED_SUFFIX = ".deleting"
_COPY_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredBlob:
    """Location and size of a blob written to the storage directory."""

    filepath: str
    size: int


class DocumentStorage:
    """Read and write document blobs below ``base_dir / storage_dir``.

    Stored paths are relative to ``base_dir`` and use forward slashes, e.g.
    ``uploads/0f8c...e1.pdf``. Blob names are random identifiers; the original
    filename lives only in the document row.
    """

    def __init__(self, base_dir: Path, storage_dir: str = "uploads") -> None:
        self.base_dir = Path(base_dir).resolve()
        self.storage_dir = storage_dir
        self.root = (self.base_dir / storage_dir).resolve()

    def ensure_directory(self) -> None:
        """Create the storage directory if it does not exist yet."""

        if not self.root.exists():
            self.root.mkdir(parents=True, exist_ok=True)
            logger.info("Created storage directory %s", self.root)

    def save(self, stream: BinaryIO, *, suffix: str = ".pdf") -> StoredBlob:
        """Copy ``stream`` into a new uniquely named blob."""

        name = f"{uuid4().hex}{suffix}"
        destination = self.root / name
        # Exclusive creation: never overwrite an existing blob.
        with destination.open("xb") as target:
            try:
                shutil.copyfileobj(stream, target, _COPY_CHUNK_SIZE)
            except BaseException:
                target.close()
                destination.unlink(missing_ok=True)
                raise
            size = target.tell()
        filepath = str(PurePosixPath(self.storage_dir, name))
        logger.debug("Stored blob %s (%d bytes)", filepath, size)
        return StoredBlob(filepath=filepath, size=size)

    def resolve(self, filepath: str) -> Path:
        """Return the absolute path of ``filepath``.

        Raises ``PermissionError`` when the path points outside the storage
        directory.
        """

        candidate = (self.base_dir / filepath).resolve()
        if candidate.parent != self.root:
            msg = f"Path {filepath!r} is outside the storage directory"
            raise PermissionError(msg)
        return candidate

    def exists(self, filepath: str) -> bool:
        """Return ``True`` when a blob is stored at ``filepath``."""

        return self.resolve(filepath).is_file()

    def remove(self, filepath: str) -> bool:
        """Delete the blob at ``filepath``; return ``False`` if it was already gone."""

        try:
            self.resolve(filepath).unlink()
        except FileNotFoundError:
            return False
        logger.debug("Removed blob %s", filepath)
        return True

    def stage_removal(self, filepath: str) -> Path | None:
        """Move the blob aside so its removal can still be undone.

        Returns the staged location, or ``None`` when the blob does not exist.
        """

        source = self.resolve(filepath)
        staged = source.with_name(f"{_STAGED_PREFIX}{source.name}{_STAGED_SUFFIX}")
        try:
            source.rename(staged)
        except FileNotFoundError:
            return None
        return staged

    def restore(self, staged: Path, filepath: str) -> None:
        """Undo :meth:`stage_removal`."""

        staged.rename(self.resolve(filepath))
        logger.info("Restored blob %s", filepath)

    def purge(self, staged: Path) -> None:
        """Finalize :meth:`stage_removal` by deleting the staged blob."""

        staged.unlink(missing_ok=True)

    def iter_filepaths(self) -> Iterator[str]:
        """Yield the stored path of every blob in the storage directory."""

        if not self.root.is_dir():
            return
        for entry in sorted(self.root.iterdir()):
            if not entry.is_file() or entry.name.startswith(_STAGED_PREFIX):
                continue
            yield str(PurePosixPath(self.storage_dir, entry.name))

    def iter_staged(self) -> Iterator[tuple[Path, str]]:
        """Yield staged removals left behind as ``(staged path, stored path)`` pairs."""

        if not self.root.is_dir():
            return
        for entry in sorted(self.root.iterdir()):
            name = entry.name
            if not (
                entry.is_file()
                and name.startswith(_STAGED_PREFIX)
                and name.endswith(_STAGED_SUFFIX)
            ):
                continue
            original = name[len(_STAGED_PREFIX) : -len(_STAGED_SUFFIX)]
            if original:
                yield entry, str(PurePosixPath(self.storage_dir, original))


__all__ = ["DocumentStorage", "StoredBlob"]
