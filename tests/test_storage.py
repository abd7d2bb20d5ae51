"""
Unit tests for the snapshot storage backends.
"""

import pytest

from core.exceptions import StorageError
from core.storage import JSONFileStorage, MemoryStorage, create_storage


SNAPSHOT = {"state": {"items": [], "orders": []}, "version": 0}


class TestJSONFileStorage:
    """File-backed storage."""

    def test_missing_key_returns_none(self, tmp_path):
        assert JSONFileStorage(tmp_path).get_item("cart-storage") is None

    def test_set_then_get(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set_item("cart-storage", SNAPSHOT)

        assert storage.get_item("cart-storage") == SNAPSHOT
        assert (tmp_path / "cart-storage.json").exists()

    def test_overwrite_replaces_value(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set_item("cart-storage", {"a": 1, "b": 2})
        storage.set_item("cart-storage", {"c": 3})

        assert storage.get_item("cart-storage") == {"c": 3}

    def test_no_temporary_files_left(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set_item("cart-storage", SNAPSHOT)
        storage.set_item("cart-storage", SNAPSHOT)

        assert [p.name for p in tmp_path.iterdir()] == ["cart-storage.json"]

    def test_non_ascii_text(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set_item("cart-storage", {"name": "Фотобумага матовая"})

        assert storage.get_item("cart-storage")["name"] == "Фотобумага матовая"

    def test_creates_directory(self, tmp_path):
        directory = tmp_path / "nested" / "storage"
        JSONFileStorage(directory).set_item("k", 1)

        assert (directory / "k.json").exists()

    def test_remove(self, tmp_path):
        storage = JSONFileStorage(tmp_path)
        storage.set_item("cart-storage", SNAPSHOT)

        storage.remove_item("cart-storage")
        storage.remove_item("cart-storage")

        assert storage.get_item("cart-storage") is None

    def test_corrupted_file_raises(self, tmp_path):
        (tmp_path / "cart-storage.json").write_text("{broken", encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            JSONFileStorage(tmp_path).get_item("cart-storage")

        assert exc_info.value.operation == "read"

    def test_invalid_utf8_raises(self, tmp_path):
        (tmp_path / "cart-storage.json").write_bytes(b'{"state": "\xff\xfe"}')

        with pytest.raises(StorageError) as exc_info:
            JSONFileStorage(tmp_path).get_item("cart-storage")

        assert exc_info.value.operation == "read"

    def test_unserializable_value_raises(self, tmp_path):
        with pytest.raises(StorageError) as exc_info:
            JSONFileStorage(tmp_path).set_item("cart-storage", {"bad": object()})

        assert exc_info.value.operation == "write"


class TestMemoryStorage:

    def test_round_trip_goes_through_json(self):
        storage = MemoryStorage()
        value = {"items": [{"price": 350.0}]}
        storage.set_item("cart-storage", value)

        loaded = storage.get_item("cart-storage")
        assert loaded == value
        assert loaded is not value
        assert isinstance(storage.raw("cart-storage"), str)

    def test_missing_key(self):
        assert MemoryStorage().get_item("nope") is None

    def test_unserializable_value_raises(self):
        with pytest.raises(StorageError):
            MemoryStorage().set_item("cart-storage", object())

    def test_corrupted_raw_raises(self):
        storage = MemoryStorage()
        storage.put_raw("cart-storage", "not json")

        with pytest.raises(StorageError):
            storage.get_item("cart-storage")


class TestCreateStorage:

    def test_memory(self):
        assert isinstance(create_storage("memory"), MemoryStorage)

    def test_file(self, tmp_path):
        storage = create_storage("file", str(tmp_path))
        assert isinstance(storage, JSONFileStorage)

    def test_file_requires_directory(self):
        with pytest.raises(ValueError):
            create_storage("file")

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage("redis")
