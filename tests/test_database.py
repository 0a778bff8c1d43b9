from __future__ import annotations

from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import PyMongoError

from config import load_config
from database import CoupletStore
from errors import StoreError


def test_find_orders_by_number_and_hides_internal_id(store):
    docs = store.find()
    assert [d["number"] for d in docs] == [1, 3, 5]
    assert all("_id" not in d for d in docs)


def test_count_and_find_one(store):
    assert store.count() == 3
    assert store.count({"section.number": 1}) == 2
    assert store.find_one(3)["tamil"][1] == "யாண்டும் இடும்பை இல"
    assert "_id" not in store.find_one(3)
    assert store.find_one(1331) is None


def test_replace_all_swaps_the_corpus(store, sample_couplets):
    assert store.replace_all([sample_couplets[1]]) == 1
    assert [d["number"] for d in store.find()] == [1]


def test_number_index_is_unique(empty_store, sample_couplets):
    empty_store.ensure_indexes()
    one = sample_couplets[1]
    with pytest.raises(StoreError):
        empty_store.replace_all([one, dict(one)])


def test_driver_errors_become_store_errors():
    collection = MagicMock()
    collection.find.side_effect = PyMongoError("connection refused")
    collection.count_documents.side_effect = PyMongoError("connection refused")
    store = CoupletStore(collection)

    with pytest.raises(StoreError) as excinfo:
        store.find({})
    assert excinfo.value.message == "Database error"
    assert excinfo.value.detail == "connection refused"
    with pytest.raises(StoreError):
        store.count()


def test_connect_uses_configured_names():
    client = mongomock.MongoClient()
    settings = load_config(database_name="kural_test", collection="verses")
    store = CoupletStore.connect(settings, client=client)
    assert store.collection.name == "verses"
    assert store.collection.database.name == "kural_test"
    assert store.ping() is True
    store.close()
