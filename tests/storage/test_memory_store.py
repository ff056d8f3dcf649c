from __future__ import annotations

from shopperspoint.storage.base import InMemoryKeyValueStore, KeyValueStore


def test_in_memory_store_behaves_like_a_blob_store():
    kv = InMemoryKeyValueStore({"taxRate": b"0.02"})
    assert isinstance(kv, KeyValueStore)

    assert kv.get("taxRate") == b"0.02"
    assert kv.get("missing") is None

    kv.set("selectedListID", b"abc")
    kv.remove("taxRate")
    kv.remove("taxRate")

    assert kv.keys() == ["selectedListID"]
