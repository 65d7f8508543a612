# tests/test_concurrency.py
import asyncio
import httpx


async def _create_many(app, path, payloads):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*[ac.post(path, json=p) for p in payloads])


def test_concurrent_creates_get_unique_ids(app, client):
    results = asyncio.run(_create_many(app, "/api/categories", [{"name": f"cat-{i}"} for i in range(25)]))
    assert all(r.status_code == 201 for r in results)
    ids = [r.json()["id"] for r in results]
    assert sorted(ids) == list(range(1, 26))
    assert len(client.get("/api/categories").json()) == 25


def test_concurrent_product_writes_and_reads(app, client):
    client.post("/api/categories", json={"name": "Minuman"})
    payloads = [{"name": f"drink-{i}", "price": 3000, "stock": i, "category_id": 1} for i in range(10)]
    results = asyncio.run(_create_many(app, "/api/products", payloads))
    assert len({r.json()["id"] for r in results}) == 10
    listed = client.get("/api/products").json()
    assert {p["category_name"] for p in listed} == {"Minuman"}
