"""Tests for cache identifiers."""

import uuid

import pytest

from media_cache.exceptions import InvalidSourceError
from media_cache.utils.identifiers import generate_id


def test_generate_id_is_deterministic():
    url = "https://example.com/a.png"
    assert generate_id(url) == generate_id(url)


def test_generate_id_differs_per_source():
    assert generate_id("https://example.com/a.png") != generate_id("https://example.com/b.png")


def test_generate_id_is_version_3_uuid():
    id = generate_id("https://example.com/a.png")
    parsed = uuid.UUID(id)
    assert parsed.version == 3
    assert parsed.variant == uuid.RFC_4122
    assert str(parsed) == id
    assert [len(part) for part in id.split("-")] == [8, 4, 4, 4, 12]


def test_generate_id_known_value():
    # Name-based UUID of the raw bytes "hello", no namespace
    assert generate_id("hello") == "5d41402a-bc4b-3a76-b971-9d911017c592"


def test_generate_id_empty_string():
    assert generate_id("") == "d41d8cd9-8f00-3204-a980-0998ecf8427e"


def test_generate_id_rejects_none():
    with pytest.raises(InvalidSourceError):
        generate_id(None)
