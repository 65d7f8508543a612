# tests/test_sqlite_store.py
import asyncio
import sqlite3

import pytest
from fastapi.testclient import TestClient

from kasir_api.config import Settings
from kasir_api.database import SqliteStore, build_database
from kasir_api.errors import StoreError
from kasir_api.main import create_app


def test_sqlite_backed_app(tmp_path):
    db_path = str(tmp_path / "kasir.db")
    app = create_app(Settings(database_path=db_path, log_level="WARNING"))
    client = TestClient(app)

    cid = client.post("/api/categories", json={"name": "Electronics"}).json()["id"]
    pid = client.post("/api/products", json={"name": "Laptop", "price": 15000000, "stock": 10, "category_id": cid}).json()["id"]
    assert client.get(f"/api/products/{pid}").json() == {
        "id": pid, "name": "Laptop", "price": 15000000, "stock": 10,
        "category_id": cid, "category_name": "Electronics",
    }

    assert client.delete(f"/api/categories/{cid}").status_code == 200
    assert client.get(f"/api/products/{pid}").json()["category_name"] == ""
    assert client.get("/api/categories/999").status_code == 404
    assert client.put(f"/api/products/{pid}", json={"name": ""}).status_code == 400

    # survives a new app over the same file
    again = TestClient(create_app(Settings(database_path=db_path, log_level="WARNING")))
    assert [p["name"] for p in again.get("/api/products").json()] == ["Laptop"]

    # the derived name has no column
    conn = sqlite3.connect(db_path)
    try:
        cols = [row[1] for row in conn.execute("PRAGMA table_info(products)")]
    finally:
        conn.close()
    assert "category_name" not in cols


def test_sqlite_ids_and_clear(tmp_path):
    store = SqliteStore(str(tmp_path / "kasir.db"), "categories")

    async def scenario():
        a = await store.insert({"name": "A", "description": ""})
        b = await store.insert({"name": "B", "description": "bee"})
        assert (a["id"], b["id"]) == (1, 2)
        assert await store.remove(a["id"]) is True
        assert await store.remove(a["id"]) is False
        c = await store.insert({"name": "C", "description": ""})
        assert c["id"] == 3
        assert await store.replace(99, {"name": "x", "description": ""}) is None
        assert (await store.replace(b["id"], {"name": "B2", "description": ""}))["name"] == "B2"
        await store.clear()
        assert await store.get_all() == []
        assert (await store.insert({"name": "D", "description": ""}))["id"] == 1

    asyncio.run(scenario())


def test_sqlite_failure_is_store_error(tmp_path):
    store = SqliteStore(str(tmp_path / "kasir.db"), "categories")
    conn = sqlite3.connect(store.path)
    conn.execute("DROP TABLE categories")
    conn.commit()
    conn.close()

    with pytest.raises(StoreError):
        asyncio.run(store.get_all())


def test_store_error_reaches_client_as_500(tmp_path):
    db_path = str(tmp_path / "kasir.db")
    client = TestClient(create_app(Settings(database_path=db_path, log_level="WARNING")))
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE products")
    conn.commit()
    conn.close()
    assert client.get("/api/products").status_code == 500
    assert client.delete("/api/products/1").status_code == 500


def test_build_database_picks_backend(tmp_path):
    mem = build_database(Settings(database_path=""))
    assert type(mem.categories).__name__ == "InMemoryStore"
    disk = build_database(Settings(database_path=str(tmp_path / "x.db")))
    assert isinstance(disk.products, SqliteStore)


def test_unknown_table_rejected(tmp_path):
    with pytest.raises(ValueError):
        SqliteStore(str(tmp_path / "x.db"), "orders")


def test_out_of_range_id_is_absent(tmp_path):
    store = SqliteStore(str(tmp_path / "kasir.db"), "products")

    async def scenario():
        assert await store.get_by_id(2**63) is None
        assert await store.replace(2**63, {"name": "x", "price": 0, "stock": 0, "category_id": 0}) is None
        assert await store.remove(-(2**63) - 1) is False

    asyncio.run(scenario())


def test_oversized_value_is_store_error(tmp_path):
    store = SqliteStore(str(tmp_path / "kasir.db"), "products")
    with pytest.raises(StoreError):
        asyncio.run(store.insert({"name": "x", "price": 2**63, "stock": 0, "category_id": 0}))
