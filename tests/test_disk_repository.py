"""Tests for the on-disk backend."""

import os

import pytest

from media_cache.entities import CachedMedia
from media_cache.exceptions import (
    DeserializationError,
    EntryNotFoundError,
    FileDeletionError,
    FormatVersionError,
    MediaCacheError,
    SerializationError,
)
from media_cache.protocols import CacheBackend
from media_cache.repositories import ClearMode, DiskCacheRepository
from media_cache.utils import persistence


def _media(i: int) -> CachedMedia:
    return CachedMedia(source=f"https://example.com/{i}.png", data=bytes([i]) * 8)


def _persist(directory, names):
    """Write one entry per name, with increasing modification times."""
    directory.mkdir(parents=True, exist_ok=True)
    for i, name in enumerate(names):
        path = directory / name
        persistence.serialize(_media(i), path)
        os.utime(path, (1_000_000 + i, 1_000_000 + i))


def test_satisfies_protocol(cache_dir):
    assert isinstance(DiskCacheRepository(cache_dir), CacheBackend)


def test_store_writes_file_named_after_id(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=3)
    repo.store("abc", media)
    assert (cache_dir / "abc").is_file()
    assert repo.get("abc").path == cache_dir / "abc"
    assert repo.get_decoded("abc") == media


def test_get_decoded_absent(cache_dir):
    assert DiskCacheRepository(cache_dir).get_decoded("missing") is None


def test_eviction_deletes_file(cache_dir):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    for key in ("A", "B", "C"):
        repo.store(key, _media(ord(key)))
    assert list(repo.as_dict()) == ["B", "C"]
    assert sorted(p.name for p in cache_dir.iterdir()) == ["B", "C"]


def test_zero_capacity_writes_nothing(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=0)
    repo.store("id", media)
    assert repo.size() == 0
    assert not cache_dir.exists()


def test_store_failure_leaves_index_unchanged(tmp_path, media):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    repo = DiskCacheRepository(blocker, capacity=2)
    with pytest.raises(SerializationError):
        repo.store("id", media)
    assert repo.size() == 0


def test_failed_rewrite_keeps_previous_file(cache_dir, media, monkeypatch):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)

    def partial_write(entry, stream):
        stream.write(b"\x01")
        raise OSError("disk full")

    monkeypatch.setattr(persistence, "write_entry", partial_write)
    with pytest.raises(SerializationError):
        repo.store("id", _media(7))
    monkeypatch.undo()

    assert repo.contains("id")
    assert repo.get_decoded("id") == media
    assert [p.name for p in cache_dir.iterdir()] == ["id"]


def test_eviction_happens_before_write(cache_dir, media, monkeypatch):
    repo = DiskCacheRepository(cache_dir, capacity=1)
    repo.store("old", media)

    def fail(self, missing_ok=False):
        raise PermissionError("read-only")

    monkeypatch.setattr(type(cache_dir), "unlink", fail)
    with pytest.raises(FileDeletionError):
        repo.store("new", _media(1))
    monkeypatch.undo()

    assert repo.size() == 0
    assert not (cache_dir / "new").exists()


def test_vanished_file_raises_and_drops_index_entry(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)
    (cache_dir / "id").unlink()

    with pytest.raises(EntryNotFoundError):
        repo.get_decoded("id")
    assert not repo.contains("id")


def test_corrupt_file(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)
    (cache_dir / "id").write_bytes(b"\x01\x00\x00")
    with pytest.raises(DeserializationError):
        repo.get_decoded("id")


def test_version_mismatch(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)
    path = cache_dir / "id"
    path.write_bytes(b"\x09" + path.read_bytes()[1:])
    with pytest.raises(FormatVersionError):
        repo.get_decoded("id")


def test_remove_deletes_file(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)
    assert repo.remove("id") is True
    assert not (cache_dir / "id").exists()
    assert repo.remove("id") is False


def test_remove_with_missing_file_succeeds(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)
    (cache_dir / "id").unlink()
    assert repo.remove("id") is True


def test_remove_failure_reports_and_drops_entry(cache_dir, media, monkeypatch):
    repo = DiskCacheRepository(cache_dir, capacity=2)
    repo.store("id", media)

    def fail(self, missing_ok=False):
        raise PermissionError("read-only")

    monkeypatch.setattr(type(cache_dir), "unlink", fail)
    with pytest.raises(FileDeletionError):
        repo.remove("id")
    assert not repo.contains("id")


def test_fresh_backend_needs_scan(cache_dir):
    _persist(cache_dir, ["f0", "f1", "f2"])

    repo = DiskCacheRepository(cache_dir, capacity=2)
    assert repo.size() == 0

    assert repo.scan() is repo
    assert repo.size() == 2
    assert list(repo.as_dict()) == ["f1", "f2"]
    assert repo.get_decoded("f2") == _media(2)


def test_scan_evicts_oldest_files(cache_dir):
    _persist(cache_dir, ["f0", "f1", "f2"])
    DiskCacheRepository(cache_dir, capacity=2).scan()
    assert not (cache_dir / "f0").exists()


def test_scan_skips_directories(cache_dir):
    _persist(cache_dir, ["f0"])
    (cache_dir / "nested").mkdir()
    repo = DiskCacheRepository(cache_dir, capacity=5).scan()
    assert list(repo.as_dict()) == ["f0"]


def test_scan_missing_directory(tmp_path):
    with pytest.raises(MediaCacheError):
        DiskCacheRepository(tmp_path / "missing").scan()


def test_load(cache_dir):
    _persist(cache_dir, ["f0", "f1"])
    repo = DiskCacheRepository.load(cache_dir, capacity=5)
    assert list(repo.as_dict()) == ["f0", "f1"]


def test_change_directory_no_clean(tmp_path, media):
    old, new = tmp_path / "old", tmp_path / "new"
    repo = DiskCacheRepository(old, capacity=3)
    repo.store("id", media)

    repo.change_directory(new)
    assert repo.directory == new
    assert repo.contains("id")
    assert (old / "id").exists()


def test_change_directory_memory(tmp_path, media):
    old, new = tmp_path / "old", tmp_path / "new"
    repo = DiskCacheRepository(old, capacity=3)
    repo.store("id", media)

    repo.change_directory(new, ClearMode.MEMORY)
    assert repo.is_empty()
    assert (old / "id").exists()

    repo.store("other", media)
    assert (new / "other").exists()


def test_change_directory_disk_and_memory(tmp_path, media):
    old, new = tmp_path / "old", tmp_path / "new"
    repo = DiskCacheRepository(old, capacity=3)
    repo.store("id", media)

    repo.change_directory(new, ClearMode.DISK_AND_MEMORY)
    assert repo.is_empty()
    assert not (old / "id").exists()


def test_change_directory_none_selects_default(cache_dir):
    from media_cache.config import settings

    repo = DiskCacheRepository(cache_dir).change_directory(None)
    assert repo.directory == settings.cache_dir


def test_clear_modes(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=3)
    repo.store("id", media)

    repo.clear(ClearMode.NO_CLEAN)
    assert repo.contains("id")

    repo.clear()
    assert repo.is_empty()
    assert (cache_dir / "id").exists()


def test_set_capacity_deletes_evicted_files(cache_dir):
    repo = DiskCacheRepository(cache_dir, capacity=3)
    for key in ("A", "B", "C"):
        repo.store(key, _media(ord(key)))
    repo.set_capacity(1)
    assert list(repo.as_dict()) == ["C"]
    assert [p.name for p in cache_dir.iterdir()] == ["C"]


def test_get_stats(cache_dir, media):
    repo = DiskCacheRepository(cache_dir, capacity=3)
    repo.store("id", media)
    stats = repo.get_stats()
    assert stats["backend"] == "disk"
    assert stats["directory"] == str(cache_dir)
    assert stats["total_entries"] == 1
