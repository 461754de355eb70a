#!/usr/bin/env python3
"""
Demo script for media cache.

This script generates a few images in a temporary directory and loads them
through the cache, showing cache hits, transforms, eviction and the disk
backend. No network access is needed.
"""

import asyncio
import io
import tempfile
from pathlib import Path

from PIL import Image

from media_cache import (
    ClearMode,
    DiskCacheRepository,
    MediaCache,
    MemoryCacheRepository,
    RequestResult,
    StoreStrategy,
)
from media_cache.transforms import Flip, Grayscale, Resize


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_state(result: RequestResult) -> None:
    """Callback printing every state change."""
    print(f"    {result.state.value:<10} {result.request.source}")


def make_images(directory: Path, count: int) -> list[Path]:
    """Write ``count`` small PNG files and return their paths."""
    paths = []
    for i in range(count):
        path = directory / f"sample_{i}.png"
        Image.new("RGB", (64 + i * 16, 48), color=(40 * i % 256, 120, 200)).save(path)
        paths.append(path)
    return paths


def demo_memory_cache(images: list[Path]) -> None:
    """Demonstrate cache hits and FIFO eviction in memory."""
    print_section("Memory Backend")

    cache = MediaCache(backend=MemoryCacheRepository(capacity=2))

    print("\n🔍 First load, then the same request again:")
    cache.fetch(images[0], callback=print_state)
    cache.fetch(images[0], callback=print_state)

    print("\n📦 Capacity is 2, loading two more images evicts the first:")
    for path in images[1:3]:
        cache.fetch(path, callback=print_state)
    print(f"  Entries: {cache.storage.size()} / {cache.storage.capacity}")
    print(f"  First image cached: {cache.storage.contains(cache.request(images[0]).id)}")

    print("\n📊 Stats:")
    for key, value in cache.get_stats().items():
        print(f"  {key}: {value}")


def demo_transforms(images: list[Path]) -> None:
    """Demonstrate transforms and store strategies."""
    print_section("Transforms")

    cache = MediaCache(store_strategy=StoreStrategy.SAVE_TRANSFORMED)
    result = cache.fetch(images[1], transforms=[Resize(32, 32), Grayscale(), Flip()])
    print(f"\n  State: {result.state.value}")
    print(f"  Source: {result.unwrap_source().size} bytes")
    print(f"  Output: {result.unwrap_output().size} bytes")

    stored = cache.storage.get_decoded(result.id)
    with Image.open(io.BytesIO(stored.data)) as image:
        print(f"  Stored image: {image.size[0]}x{image.size[1]} {image.mode}")


def demo_disk_cache(images: list[Path], cache_dir: Path) -> None:
    """Demonstrate the disk backend and rebuilding its index."""
    print_section("Disk Backend")

    cache = MediaCache(backend=DiskCacheRepository(cache_dir, capacity=10))
    for path in images:
        cache.fetch(path)
    print(f"\n  Files written: {len(list(cache_dir.iterdir()))}")

    fresh = DiskCacheRepository(cache_dir, capacity=10)
    print(f"  New backend before scan: {fresh.size()} entries")
    fresh.scan()
    print(f"  New backend after scan:  {fresh.size()} entries")

    fresh.clear(ClearMode.DISK_AND_MEMORY)
    print(f"  After DISK_AND_MEMORY clear: {len(list(cache_dir.iterdir()))} files")


async def demo_async(images: list[Path]) -> None:
    """Demonstrate concurrent execution."""
    print_section("Async Execution")

    cache = MediaCache()
    requests = [cache.request(path) for path in images]
    results = await asyncio.gather(*(cache.execute_async(r) for r in requests))
    for result in results:
        print(f"  {result.state.value:<10} {result.request.source}")


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        images_dir = root / "images"
        images_dir.mkdir()
        images = make_images(images_dir, 4)

        demo_memory_cache(images)
        demo_transforms(images)
        demo_disk_cache(images, root / "cache")
        asyncio.run(demo_async(images))

    print("\n✅ Demo completed!")


if __name__ == "__main__":
    main()
