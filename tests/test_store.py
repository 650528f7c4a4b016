"""
Tests for the storage backends
"""

from pathlib import Path

import pytest

from inventory_api.config import Settings
from inventory_api.database import build_engine
from inventory_api.db_store import SqlInventoryStore
from inventory_api.errors import NotFoundError
from inventory_api.store import MemoryInventoryStore


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path: Path):
    if request.param == "memory":
        return MemoryInventoryStore()

    settings = Settings(
        storage="sql", database_url=f"sqlite:///{tmp_path / 'store.db'}"
    )
    sql_store = SqlInventoryStore(build_engine(settings), retry_attempts=1)
    sql_store.startup()
    return sql_store


def test_create_assigns_sequential_ids(store):
    assert store.create("A").id == 1
    assert store.create("B").id == 2


def test_create_defaults(store):
    device = store.create("A")
    assert device.description == ""
    assert device.photo is None


def test_get_missing(store):
    with pytest.raises(NotFoundError):
        store.get(1)
    assert store.find(1) is None


def test_update_only_truthy_fields(store):
    device = store.create("Drill", "cordless", "1-drill.png")

    updated = store.update(device.id, inventory_name="", description=None)
    assert updated == device

    updated = store.update(device.id, description="corded")
    assert updated.inventory_name == "Drill"
    assert updated.description == "corded"
    assert updated.photo == "1-drill.png"


def test_update_missing(store):
    with pytest.raises(NotFoundError):
        store.update(3, inventory_name="X")


def test_delete_returns_record(store):
    device = store.create("Drill", photo="1-drill.png")

    assert store.delete(device.id) == device
    assert store.list() == []
    with pytest.raises(NotFoundError):
        store.delete(device.id)


def test_deleted_ids_are_not_reused(store):
    store.create("A")
    last = store.create("B")
    store.delete(last.id)

    assert store.create("C").id == 3


def test_search_substring(store):
    store.create("Cordless drill")
    store.create("Hammer")
    store.create("DRILL bits")

    names = [device.inventory_name for device in store.search("drill")]
    assert names == ["Cordless drill", "DRILL bits"]
    assert store.search("zzz") == []


def test_returned_records_are_copies():
    store = MemoryInventoryStore()
    device = store.create("Drill")
    device.inventory_name = "Changed"

    assert store.get(device.id).inventory_name == "Drill"


def test_delete_receipt_flag():
    assert MemoryInventoryStore.delete_receipt is False
    assert SqlInventoryStore.delete_receipt is True


def test_ids_beyond_integer_range(store):
    store.create("Drill")
    huge = 10**20

    assert store.find(huge) is None
    with pytest.raises(NotFoundError):
        store.update(huge, inventory_name="X")
    with pytest.raises(NotFoundError):
        store.delete(huge)
