from models.product import Product


def create_category(client, headers, name, **extra):
    extra.setdefault("description", f"{name} category")
    resp = client.post("/api/categories", json={"name": name, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["category"]


def create_product(client, headers, name, category, visible=True):
    resp = client.post("/api/products", headers=headers, json={
        "name": name, "description": f"{name} description", "category": category, "visible": visible,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_category_writes_require_admin(client, user_headers):
    assert client.post("/api/categories", json={"name": "Tools", "description": "Hand tools"}).status_code == 401
    assert client.post("/api/categories", json={"name": "Tools", "description": "Hand tools"}, headers=user_headers).status_code == 403


def test_delete_blocked_while_visible_products_remain(client, admin_headers):
    tools = create_category(client, admin_headers, "Tools")
    product = create_product(client, admin_headers, "Hammer", "Tools")

    resp = client.delete(f"/api/categories/{tools['id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert "Cannot delete category with 1 products" in resp.json()["error"]

    client.put(f"/api/products/{product['id']}", json={"visible": False}, headers=admin_headers)
    resp = client.delete(f"/api/categories/{tools['id']}", headers=admin_headers)
    assert resp.status_code == 200

    # The hidden product keeps its label but no longer points at the category
    fetched = client.get(f"/api/products/{product['id']}").json()
    assert fetched["category"] == "Tools"
    assert fetched["categoryId"] is None


def test_duplicate_name_is_case_insensitive(client, admin_headers):
    create_category(client, admin_headers, "Safety Equipment")
    resp = client.post("/api/categories", json={"name": "safety equipment", "description": "dup"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Category already exists"


def test_list_includes_visible_product_counts(client, admin_headers):
    create_category(client, admin_headers, "Pumps")
    create_category(client, admin_headers, "Valves")
    create_product(client, admin_headers, "Pump A", "Pumps")
    create_product(client, admin_headers, "Pump B", "Pumps")
    create_product(client, admin_headers, "Pump C", "Pumps", visible=False)

    categories = client.get("/api/categories").json()["categories"]
    counts = {c["name"]: c["productCount"] for c in categories}
    assert counts == {"Pumps": 2, "Valves": 0}


def test_new_category_adopts_matching_products(client, db, admin_headers):
    product = create_product(client, admin_headers, "Gate Valve", "valves")
    assert product["categoryId"] is None

    valves = create_category(client, admin_headers, "Valves")
    assert valves["productCount"] == 1

    row = db.query(Product).filter(Product.id == product["id"]).one()
    assert row.category_id == valves["id"]
    assert row.category == "Valves"


def test_rename_cascades_to_products(client, admin_headers):
    cat = create_category(client, admin_headers, "Tools")
    product = create_product(client, admin_headers, "Wrench", "Tools")

    resp = client.put(f"/api/categories/{cat['id']}", json={"name": "Hand Tools"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["category"]["name"] == "Hand Tools"
    assert resp.json()["category"]["productCount"] == 1

    assert client.get(f"/api/products/{product['id']}").json()["category"] == "Hand Tools"


def test_rename_to_existing_name_is_rejected(client, admin_headers):
    create_category(client, admin_headers, "Pumps")
    valves = create_category(client, admin_headers, "Valves")
    resp = client.put(f"/api/categories/{valves['id']}", json={"name": "PUMPS"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Category name already exists"


def test_update_keeps_fields_not_sent(client, admin_headers):
    cat = create_category(client, admin_headers, "Pumps", description="Fluid movers", image="/uploads/p.png")
    resp = client.put(f"/api/categories/{cat['id']}", json={"isActive": False}, headers=admin_headers)
    body = resp.json()["category"]
    assert body["isActive"] is False
    assert body["description"] == "Fluid movers"
    assert body["image"] == "/uploads/p.png"

    resp = client.put(f"/api/categories/{cat['id']}", json={"image": None}, headers=admin_headers)
    assert resp.json()["category"]["image"] is None


def test_missing_category_is_404(client, admin_headers):
    assert client.put("/api/categories/99", json={"name": "X"}, headers=admin_headers).status_code == 404
    assert client.delete("/api/categories/99", headers=admin_headers).status_code == 404
    assert client.get("/api/categories/99/products").status_code == 404


def test_category_products_are_paginated(client, admin_headers):
    cat = create_category(client, admin_headers, "Pumps")
    for i in range(3):
        create_product(client, admin_headers, f"Pump {i}", "Pumps")
    create_product(client, admin_headers, "Hidden Pump", "Pumps", visible=False)

    body = client.get(f"/api/categories/{cat['id']}/products", params={"limit": 2, "skip": 0}).json()
    assert body["total"] == 3
    assert len(body["products"]) == 2
    assert body["category"]["name"] == "Pumps"

    body = client.get(f"/api/categories/{cat['id']}/products", params={"limit": 2, "skip": 2}).json()
    assert [p["name"] for p in body["products"]] == ["Pump 0"]


def test_blank_names_are_rejected(client, db, admin_headers):
    resp = client.post("/api/categories", json={"name": "   ", "description": "Blank"}, headers=admin_headers)
    assert resp.status_code == 400
    resp = client.post("/api/categories", json={"name": "Pumps", "description": "  "}, headers=admin_headers)
    assert resp.status_code == 400
    assert client.get("/api/categories").json()["categories"] == []

    pumps = create_category(client, admin_headers, "  Pumps  ")
    assert pumps["name"] == "Pumps"

    resp = client.put(f"/api/categories/{pumps['id']}", json={"name": "  "}, headers=admin_headers)
    assert resp.status_code == 400
    resp = client.put(f"/api/categories/{pumps['id']}", json={"description": "   "}, headers=admin_headers)
    assert resp.status_code == 400
    assert client.get("/api/categories").json()["categories"][0]["name"] == "Pumps"
