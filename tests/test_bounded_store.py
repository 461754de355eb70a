"""Tests for the FIFO bounded store."""

import pytest

from media_cache.repositories.bounded_store import BoundedStore


def test_store_and_get():
    store = BoundedStore[str](capacity=3)
    store.store("a", "A")
    assert store.get("a") == "A"
    assert store.contains("a")
    assert "a" in store
    assert store.get("missing") is None


def test_evicts_oldest_when_full():
    store = BoundedStore[str](capacity=2)
    store.store("A", "1")
    store.store("B", "2")
    store.store("C", "3")
    assert list(store.as_dict()) == ["B", "C"]
    assert not store.contains("A")


def test_size_never_exceeds_capacity():
    store = BoundedStore[int](capacity=3)
    for i in range(10):
        store.store(str(i), i)
        assert store.size() <= 3
    assert list(store.as_dict()) == ["7", "8", "9"]


def test_reads_do_not_reorder():
    store = BoundedStore[str](capacity=2)
    store.store("A", "1")
    store.store("B", "2")
    store.get("A")
    store.store("C", "3")
    assert list(store.as_dict()) == ["B", "C"]


def test_overwrite_keeps_original_slot():
    store = BoundedStore[str](capacity=3)
    store.store("A", "1")
    store.store("B", "2")
    store.store("A", "updated")
    assert list(store.as_dict()) == ["A", "B"]
    assert store.get("A") == "updated"

    store.store("C", "3")
    store.store("D", "4")
    assert list(store.as_dict()) == ["B", "C", "D"]


def test_overwrite_when_full_does_not_evict():
    store = BoundedStore[str](capacity=2)
    store.store("A", "1")
    store.store("B", "2")
    store.store("B", "updated")
    assert list(store.as_dict()) == ["A", "B"]


def test_zero_capacity_disables_storage():
    store = BoundedStore[str](capacity=0)
    store.store("A", "1")
    assert store.size() == 0
    assert store.get("A") is None
    assert store.is_empty()


def test_set_capacity_evicts_oldest():
    store = BoundedStore[str](capacity=5)
    for key in "ABCDE":
        store.store(key, key.lower())
    assert store.set_capacity(2) is store
    assert store.capacity == 2
    assert list(store.as_dict()) == ["D", "E"]


def test_set_capacity_zero_then_store():
    store = BoundedStore[str](capacity=2)
    store.store("A", "1")
    store.set_capacity(0)
    store.store("B", "2")
    assert store.size() == 0


def test_remove_and_remove_oldest():
    store = BoundedStore[str](capacity=3)
    assert store.remove_oldest() is False
    store.store("A", "1")
    store.store("B", "2")
    assert store.remove("A") is True
    assert store.remove("A") is False
    assert store.remove_oldest() is True
    assert store.is_empty()


def test_clear():
    store = BoundedStore[str](capacity=3)
    store.store("A", "1")
    store.clear()
    assert len(store) == 0


def test_iteration_yields_pairs_oldest_first():
    store = BoundedStore[str](capacity=3)
    store.store("A", "1")
    store.store("B", "2")
    assert list(store) == [("A", "1"), ("B", "2")]


def test_as_dict_is_read_only():
    store = BoundedStore[str](capacity=3)
    store.store("A", "1")
    with pytest.raises(TypeError):
        store.as_dict()["B"] = "2"


@pytest.mark.parametrize("capacity", [-1, -10])
def test_negative_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        BoundedStore[str](capacity=capacity)
    with pytest.raises(ValueError):
        BoundedStore[str](capacity=1).set_capacity(capacity)
