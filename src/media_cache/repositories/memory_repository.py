"""In-memory implementation of CacheBackend.

Entries are held as raw bytes in process memory, so reads are a direct
lookup. The repository can still talk to the disk format: it can export
its entries to a directory, convert itself to a DiskCacheRepository, and
load previously persisted entries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from media_cache.config import DEFAULT_CAPACITY
from media_cache.entities import CachedMedia, RawBytes
from media_cache.exceptions import MediaCacheError
from media_cache.repositories.bounded_store import BoundedStore
from media_cache.utils import persistence
from media_cache.utils.identifiers import generate_id

if TYPE_CHECKING:
    from media_cache.repositories.disk_repository import DiskCacheRepository

logger = logging.getLogger(__name__)


class MemoryCacheRepository(BoundedStore[RawBytes]):
    """Memory-resident implementation of the CacheBackend protocol.

    This class satisfies the CacheBackend protocol through structural
    typing - no explicit inheritance needed.
    """

    @classmethod
    def create(cls, capacity: int | None = None) -> MemoryCacheRepository:
        """Factory method to create MemoryCacheRepository with defaults.

        Args:
            capacity: Maximum number of entries. If None, uses the default.

        Returns:
            Configured MemoryCacheRepository
        """
        return cls(capacity=DEFAULT_CAPACITY if capacity is None else capacity)

    @classmethod
    def load(cls, directory: Path, capacity: int = DEFAULT_CAPACITY) -> MemoryCacheRepository:
        """Create a repository filled with entries persisted in ``directory``.

        Files are read oldest first (by modification time) and keyed by the id
        of the source they were loaded from. When there are more files than
        ``capacity``, the most recently modified ones are kept.

        Raises:
            MediaCacheError: If the directory cannot be listed
            DeserializationError: If a file cannot be decoded
        """
        repo = cls(capacity=capacity)
        for path in _list_by_mtime(directory):
            media = persistence.deserialize(path)
            repo.store(generate_id(media.source), media)
        logger.info("Loaded %d cached entries from %s", repo.size(), directory)
        return repo

    def store(self, id: str, media: CachedMedia) -> None:  # type: ignore[override]
        """Store media bytes under ``id``."""
        super().store(id, RawBytes(media))

    def get_decoded(self, id: str) -> CachedMedia | None:
        """Direct passthrough: the bytes are already in memory."""
        payload = self.get(id)
        return persistence.resolve_payload(payload) if payload is not None else None

    def export_to(self, directory: Path) -> int:
        """Write every entry to ``directory`` in the persisted format.

        Files are named after the entry ids.

        Returns:
            Number of entries written

        Raises:
            SerializationError: If a file cannot be written
        """
        directory.mkdir(parents=True, exist_ok=True)
        count = 0
        for id, payload in self:
            persistence.serialize(payload.media, directory / id)
            count += 1
        logger.info("Exported %d cached entries to %s", count, directory)
        return count

    def to_disk(self, directory: Path) -> DiskCacheRepository:
        """Create a DiskCacheRepository with the same capacity and entries."""
        from media_cache.repositories.disk_repository import DiskCacheRepository

        disk = DiskCacheRepository(directory=directory, capacity=self.capacity)
        for id, payload in self:
            disk.store(id, payload.media)
        return disk

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "memory",
            "total_entries": self.size(),
            "capacity": self.capacity,
            "total_bytes": sum(payload.media.size for _, payload in self),
        }


def _list_by_mtime(directory: Path) -> list[Path]:
    """Non-directory entries of ``directory``, oldest modification first."""
    try:
        files = [p for p in directory.iterdir() if not p.is_dir()]
        return sorted(files, key=lambda p: p.stat().st_mtime)
    except OSError as e:
        raise MediaCacheError(
            f"An error occurred while reloading entries from {directory}: {e}"
        ) from e
