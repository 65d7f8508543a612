# tests/test_categories.py

def _create(client, name="Makanan", description="Produk makanan"):
    r = client.post("/api/categories", json={"name": name, "description": description})
    assert r.status_code == 201
    return r.json()

def test_list_categories_empty(client):
    r = client.get("/api/categories")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/json"
    assert r.json() == []

def test_create_and_list_categories(client):
    _create(client, "Makanan", "Produk makanan")
    _create(client, "Minuman", "Produk minuman")
    r = client.get("/api/categories")
    assert r.status_code == 200
    assert r.json() == [
        {"id": 1, "name": "Makanan", "description": "Produk makanan"},
        {"id": 2, "name": "Minuman", "description": "Produk minuman"},
    ]

def test_create_category_without_description(client):
    r = client.post("/api/categories", json={"name": "Electronics"})
    assert r.status_code == 201
    assert r.json() == {"id": 1, "name": "Electronics", "description": ""}

def test_create_category_missing_name(client):
    r = client.post("/api/categories", json={"description": "no name"})
    assert r.status_code == 400
    r = client.post("/api/categories", json={"name": "   "})
    assert r.status_code == 400
    assert client.get("/api/categories").json() == []

def test_create_category_invalid_json(client):
    r = client.post("/api/categories", content="invalid json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

def test_get_category_by_id(client):
    created = _create(client)
    r = client.get(f"/api/categories/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created

def test_get_category_not_found(client):
    r = client.get("/api/categories/999")
    assert r.status_code == 404
    assert r.json() == {"detail": "category not found"}

def test_get_category_invalid_id(client):
    r = client.get("/api/categories/abc")
    assert r.status_code == 400

def test_update_category(client):
    created = _create(client)
    r = client.put(f"/api/categories/{created['id']}", json={"name": "Food", "description": "Food products"})
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "name": "Food", "description": "Food products"}
    assert client.get(f"/api/categories/{created['id']}").json()["name"] == "Food"

def test_update_category_overwrites_description(client):
    created = _create(client)
    r = client.put(f"/api/categories/{created['id']}", json={"name": "Food"})
    assert r.json()["description"] == ""

def test_update_category_not_found(client):
    r = client.put("/api/categories/999", json={"name": "Food"})
    assert r.status_code == 404

def test_update_category_not_found_beats_blank_name(client):
    r = client.put("/api/categories/999", json={"name": ""})
    assert r.status_code == 404

def test_update_category_invalid_id_and_json(client):
    created = _create(client)
    assert client.put("/api/categories/abc", json={"name": "Food"}).status_code == 400
    r = client.put(f"/api/categories/{created['id']}", content="{", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

def test_update_category_blank_name_leaves_record(client):
    created = _create(client)
    r = client.put(f"/api/categories/{created['id']}", json={"name": ""})
    assert r.status_code == 400
    assert client.get(f"/api/categories/{created['id']}").json() == created

def test_delete_category(client):
    _create(client, "Makanan")
    _create(client, "Minuman")
    r = client.delete("/api/categories/1")
    assert r.status_code == 200
    assert r.json() == {"message": "category deleted successfully"}
    remaining = client.get("/api/categories").json()
    assert [c["id"] for c in remaining] == [2]

def test_delete_category_not_found(client):
    assert client.delete("/api/categories/999").status_code == 404

def test_delete_category_invalid_id(client):
    assert client.delete("/api/categories/invalid").status_code == 400

def test_duplicate_names_allowed(client):
    a = _create(client, "Snack")
    b = _create(client, "Snack")
    assert a["id"] != b["id"]

def test_ids_not_reused_after_delete(client):
    first = _create(client, "A")
    client.delete(f"/api/categories/{first['id']}")
    second = _create(client, "B")
    assert second["id"] != first["id"]

def test_method_not_allowed(client):
    assert client.patch("/api/categories", json={}).status_code == 405
    assert client.patch("/api/categories/1", json={}).status_code == 405
