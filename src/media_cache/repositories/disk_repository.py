"""On-disk implementation of CacheBackend.

Each entry is one file under the cache directory, named after its id and
written in the persisted entry format. The id -> file index is held in
memory and is not populated from an existing directory on construction;
call ``scan()`` (or use ``DiskCacheRepository.load``) to rebuild it.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from media_cache.config import DEFAULT_CAPACITY, settings
from media_cache.entities import CachedMedia, FileRef
from media_cache.exceptions import (
    EntryNotFoundError,
    FileDeletionError,
    MediaCacheError,
    SerializationError,
)
from media_cache.repositories.bounded_store import BoundedStore
from media_cache.utils import persistence

logger = logging.getLogger(__name__)


class ClearMode(str, Enum):
    """Cleanup policy applied when clearing or switching directories."""

    NO_CLEAN = "no_clean"
    MEMORY = "memory"
    DISK_AND_MEMORY = "disk_and_memory"


class DiskCacheRepository(BoundedStore[FileRef]):
    """Disk-backed implementation of the CacheBackend protocol.

    Example:
        ```python
        repo = DiskCacheRepository(Path("/tmp/media"), capacity=50)
        repo.store(media_id, media)
        repo.get_decoded(media_id)  # reads the file back
        ```
    """

    def __init__(self, directory: Path | None = None, capacity: int = DEFAULT_CAPACITY) -> None:
        super().__init__(capacity=capacity)
        self._directory = Path(directory) if directory is not None else settings.cache_dir

    @classmethod
    def create(
        cls, directory: Path | None = None, capacity: int | None = None
    ) -> DiskCacheRepository:
        """Factory method to create DiskCacheRepository with configured defaults.

        Args:
            directory: Cache directory. If None, uses settings.cache_dir
            capacity: Maximum number of entries. If None, uses settings.cache_capacity

        Returns:
            Configured DiskCacheRepository
        """
        return cls(
            directory=directory or settings.cache_dir,
            capacity=settings.cache_capacity if capacity is None else capacity,
        )

    @classmethod
    def load(cls, directory: Path, capacity: int = DEFAULT_CAPACITY) -> DiskCacheRepository:
        """Create a repository over ``directory`` and index its existing files."""
        return cls(directory=directory, capacity=capacity).scan()

    @property
    def directory(self) -> Path:
        return self._directory

    def store(self, id: str, media: CachedMedia) -> None:  # type: ignore[override]
        """Write ``media`` to ``directory/id`` and index it.

        When the repository is full and ``id`` is new, the oldest entry is
        evicted before anything is written. The index is only updated once
        the file has been written, and a failed write keeps any previous file
        for ``id``.

        Raises:
            SerializationError: If the directory or file cannot be written
            FileDeletionError: If the evicted entry's file cannot be deleted
        """
        if self.capacity == 0:
            return
        if id not in self and self.size() >= self.capacity:
            self.remove_oldest()

        path = self._directory / id
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SerializationError(f"Cannot create cache directory {self._directory}: {e}") from e

        persistence.serialize(media, path)
        super().store(id, FileRef(path))

    def get_decoded(self, id: str) -> CachedMedia | None:
        """Read the entry for ``id`` back from disk.

        Returns:
            The media, or None if ``id`` is not indexed

        Raises:
            EntryNotFoundError: If the indexed file was deleted externally
            DeserializationError: If the file is corrupt or has another format version
        """
        payload = self.get(id)
        if payload is None:
            return None
        try:
            return persistence.resolve_payload(payload)
        except EntryNotFoundError:
            logger.warning("Cached file for %s is gone, dropping it from the index", id)
            super().remove(id)
            raise

    def remove(self, id: str) -> bool:
        """Drop ``id`` from the index and delete its file.

        A file that is already missing counts as deleted. If deletion fails,
        the index entry stays dropped and FileDeletionError is raised.
        """
        payload = self.get(id)
        if not super().remove(id):
            return False
        _delete_file(payload.path)
        return True

    def scan(self, directory: Path | None = None) -> DiskCacheRepository:
        """Index the files found in ``directory`` (the current one by default).

        Files are inserted oldest modification first and keyed by file name.
        Once the repository is full, the oldest entry is evicted before each
        insertion, so the most recently modified files are the ones kept.

        Raises:
            MediaCacheError: If the directory cannot be listed
        """
        directory = directory if directory is not None else self._directory
        try:
            files = [p for p in directory.iterdir() if not p.is_dir()]
            files.sort(key=lambda p: p.stat().st_mtime)
        except OSError as e:
            raise MediaCacheError(f"Cannot scan cache directory {directory}: {e}") from e

        if self.capacity == 0:
            return self
        for path in files:
            if path.name not in self and self.size() >= self.capacity:
                self.remove_oldest()
            self._insert_unchecked(path.name, FileRef(path))
        logger.info("Indexed %d files from %s (%d entries)", len(files), directory, self.size())
        return self

    def change_directory(
        self, directory: Path | None, cleanup: ClearMode = ClearMode.NO_CLEAN
    ) -> DiskCacheRepository:
        """Switch to another cache directory.

        The cleanup policy is applied to the current directory before the new
        one becomes active. ``None`` selects the default directory.
        """
        self.clear(cleanup)
        self._directory = Path(directory) if directory is not None else settings.cache_dir
        logger.info("Cache directory set to %s", self._directory)
        return self

    def clear(self, mode: ClearMode = ClearMode.MEMORY) -> None:  # type: ignore[override]
        """Apply a cleanup policy.

        - NO_CLEAN: nothing happens
        - MEMORY: the index is emptied, files are kept
        - DISK_AND_MEMORY: every indexed file is deleted, then the index is emptied
        """
        if mode is ClearMode.NO_CLEAN:
            return
        if mode is ClearMode.DISK_AND_MEMORY:
            for _, payload in self:
                _delete_file(payload.path)
        super().clear()

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "disk",
            "directory": str(self._directory),
            "total_entries": self.size(),
            "capacity": self.capacity,
        }


def _delete_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise FileDeletionError(f"Cannot delete cached file {path}: {e}") from e
