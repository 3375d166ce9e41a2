"""Unit tests for the in-memory document store."""

from __future__ import annotations

import pytest

from node_omnibus.docstore import DocumentStore
from node_omnibus.errors import MethodNotFoundError

pytestmark = pytest.mark.unit


class TestDocumentStore:
    def test_put_and_get(self):
        store = DocumentStore()
        store.put("shop", "# Shop\n")
        assert store.get("shop") == "# Shop\n"
        assert "shop" in store
        assert len(store) == 1

    def test_missing_id(self):
        with pytest.raises(MethodNotFoundError, match="Documentation not found for ghost"):
            DocumentStore().get("ghost")

    def test_last_write_wins(self):
        store = DocumentStore()
        store.put("shop", "v1")
        store.put("shop", "v2")
        assert store.get("shop") == "v2"
        assert len(store) == 1

    def test_items_insertion_order(self):
        store = DocumentStore()
        store.put("b", "2")
        store.put("a", "1")
        assert store.items() == [("b", "2"), ("a", "1")]
        assert list(store) == ["b", "a"]

    def test_instances_are_independent(self):
        first, second = DocumentStore(), DocumentStore()
        first.put("x", "only here")
        assert "x" not in second
