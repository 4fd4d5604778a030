"""
Data loader tests - sample set, JSON files, shared validation and the factory.
"""

import json
import logging

import pytest

from semantic_matcher.core.errors import LoadError
from semantic_matcher.data.loaders import (
    DataLoader,
    JSONDataLoader,
    LoaderType,
    SampleDataLoader,
    create_data_loader,
)
from semantic_matcher.vector.types import Record


@pytest.fixture
def write_json(tmp_path):
    def _write(data, name="records.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


def test_sample_loader_returns_five_records():
    records = SampleDataLoader().load()

    assert len(records) == 5
    assert all(isinstance(record, Record) for record in records)
    assert len({record.id for record in records}) == 5
    assert records[0].id == "js-react-001"
    assert records[0].metadata["category"] == "development"


def test_record_metadata_is_read_only():
    record = SampleDataLoader().load()[0]

    with pytest.raises(TypeError):
        record.metadata["category"] = "changed"

    assert record.metadata["category"] == "development"


def test_record_does_not_share_source_metadata():
    source = {"tag": "x"}
    record = Record(id="a", text="t", metadata=source)

    source["tag"] = "changed"

    assert record.metadata["tag"] == "x"


def test_json_loader_reads_records(write_json):
    path = write_json([
        {"id": "a", "text": "first document", "metadata": {"tag": "x"}},
        {"id": "b", "text": "second document"},
    ])

    records = JSONDataLoader(path).load()

    assert [record.id for record in records] == ["a", "b"]
    assert records[0].metadata == {"tag": "x"}
    assert records[1].metadata == {}


def test_json_loader_missing_id_fails_whole_batch(write_json):
    """Test that a single bad element rejects the entire file."""
    path = write_json([
        {"id": "a", "text": "fine"},
        {"text": "no id here"},
        {"id": "c", "text": "also fine"},
    ])

    with pytest.raises(LoadError, match="index 1 missing valid 'id'"):
        JSONDataLoader(path).load()


@pytest.mark.parametrize("data, message", [
    ({"id": "a", "text": "not a list"}, "array"),
    (["just a string"], "not an object"),
    ([{"id": "", "text": "empty id"}], "'id'"),
    ([{"id": 7, "text": "numeric id"}], "'id'"),
    ([{"id": "a", "text": ""}], "'text'"),
    ([{"id": "a", "text": "t", "metadata": "scalar"}], "'metadata'"),
    ([{"id": "a", "text": "t", "metadata": ["a", "list"]}], "'metadata'"),
    ([{"id": "a", "text": "t"}, {"id": "a", "text": "u"}], "duplicate id"),
])
def test_validation_failures(write_json, data, message):
    path = write_json(data)

    with pytest.raises(LoadError, match=message):
        JSONDataLoader(path).load()


def test_null_metadata_is_allowed(write_json):
    path = write_json([{"id": "a", "text": "t", "metadata": None}])

    assert JSONDataLoader(path).load()[0].metadata == {}


def test_json_loader_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{not json", encoding="utf-8")

    with pytest.raises(LoadError):
        JSONDataLoader(path).load()


def test_json_loader_invalid_utf8(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"id": "a", "text": "caf\xe9"}]')

    with pytest.raises(LoadError, match="Could not read") as exc_info:
        JSONDataLoader(path).load()

    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_json_loader_missing_file(tmp_path):
    with pytest.raises(LoadError, match="Could not read"):
        JSONDataLoader(tmp_path / "absent.json").load()


def test_loaders_share_the_interface():
    assert isinstance(SampleDataLoader(), DataLoader)
    assert isinstance(JSONDataLoader("x.json"), DataLoader)


def test_factory_selects_variant(tmp_path):
    assert isinstance(create_data_loader(), SampleDataLoader)
    assert isinstance(create_data_loader("SAMPLE"), SampleDataLoader)
    assert isinstance(create_data_loader(LoaderType.SAMPLE), SampleDataLoader)

    loader = create_data_loader("json", {"file_path": str(tmp_path / "r.json")})
    assert isinstance(loader, JSONDataLoader)
    assert loader.file_path == tmp_path / "r.json"


def test_factory_unknown_type_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="semantic_matcher"):
        loader = create_data_loader("csv")

    assert isinstance(loader, SampleDataLoader)
    assert "Unknown data loader type: csv" in caplog.text


def test_factory_json_requires_file_path():
    with pytest.raises(LoadError, match="file_path"):
        create_data_loader("json")
