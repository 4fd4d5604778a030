"""
Collection lifecycle tests - destructive recreate and bulk population.
"""

import logging
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from chroma_fakes import FakeChromaClient
from semantic_matcher.core.config import Settings
from semantic_matcher.core.errors import LoadError
from semantic_matcher.data.loaders import SampleDataLoader
from semantic_matcher.vector.collection import CollectionManager, flatten_metadata, prepare_batch
from semantic_matcher.vector.types import Record


@pytest.fixture
def manager():
    return CollectionManager(Settings(collection_description="People directory"))


def test_flatten_metadata_keeps_strings_and_numbers_and_stringifies_the_rest():
    record = Record(
        id="r1",
        text="Some text",
        metadata={
            "category": "development",
            "years": 5,
            "score": 0.5,
            "remote": True,
            "technologies": ["Python", "Go"],
            "extra": {"nested": 1},
            "missing": None,
        },
    )

    metadata = flatten_metadata(record)

    assert metadata["id"] == "r1"
    assert metadata["originalText"] == "Some text"
    assert metadata["category"] == "development"
    assert metadata["years"] == 5
    assert metadata["score"] == 0.5
    assert metadata["remote"] == "true"
    assert metadata["technologies"] == "Python, Go"
    assert metadata["extra"] == "{'nested': 1}"
    assert metadata["missing"] == "null"


def test_flatten_metadata_bools_become_lowercase_strings():
    metadata = flatten_metadata(Record(id="r", text="t", metadata={"remote": True, "contract": False}))

    assert metadata["remote"] == "true"
    assert metadata["contract"] == "false"
    assert all(not isinstance(value, bool) for value in metadata.values())


def test_prepare_batch_parallel_lists():
    records = SampleDataLoader().load()

    ids, documents, metadatas = prepare_batch(records)

    assert ids == [record.id for record in records]
    assert documents == [record.text for record in records]
    assert all(m["id"] == i for m, i in zip(metadatas, ids))


def test_ensure_collection_creates_with_metadata(manager):
    client = FakeChromaClient()

    collection = manager.ensure_collection(client, "people")

    assert client.collections["people"] is collection
    assert collection.metadata["description"] == "People directory"
    datetime.fromisoformat(collection.metadata["created"])


def test_ensure_collection_recreates_existing(manager):
    client = FakeChromaClient()
    first = manager.ensure_collection(client, "people")
    first.add(documents=["x"], metadatas=[{"id": "x"}], ids=["x"])

    second = manager.ensure_collection(client, "people")

    assert second is not first
    assert second.count() == 0
    assert client.deleted == ["people"]


def test_ensure_collection_uses_configured_name():
    client = FakeChromaClient()

    CollectionManager(Settings(collection_name="configured")).ensure_collection(client)

    assert "configured" in client.collections


def test_ensure_collection_passes_embedding_function():
    client = MagicMock()
    embedding_function = object()

    CollectionManager(Settings(), embedding_function=embedding_function).ensure_collection(client, "c")

    assert client.create_collection.call_args.kwargs["embedding_function"] is embedding_function


def test_load_data_bulk_inserts(manager):
    collection = manager.ensure_collection(FakeChromaClient(), "people")

    count = manager.load_data(collection, SampleDataLoader())

    assert count == 5
    assert collection.count() == 5
    assert collection.add_calls == 1


def test_load_data_zero_records_warns(manager, caplog):
    collection = MagicMock()
    loader = MagicMock()
    loader.load.return_value = []

    with caplog.at_level(logging.WARNING, logger="semantic_matcher"):
        assert manager.load_data(collection, loader) == 0

    collection.add.assert_not_called()
    assert "No data to load" in caplog.text


def test_load_data_propagates_loader_errors(manager):
    collection = MagicMock()
    loader = MagicMock()
    loader.load.side_effect = LoadError("Item at index 0 missing valid 'id' field")

    with pytest.raises(LoadError):
        manager.load_data(collection, loader)

    collection.add.assert_not_called()


def test_load_data_propagates_store_errors(manager):
    collection = MagicMock()
    collection.add.side_effect = RuntimeError("store unavailable")

    with pytest.raises(RuntimeError, match="store unavailable"):
        manager.load_data(collection, SampleDataLoader())
