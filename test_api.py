"""
HTTP driver.
"""
from warehouse.config import settings
from warehouse.exceptions import CategoryNotFoundError


def login_headers(client, username, password):
    response = client.post("/api/auth/login", data={"username": username, "password": password})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def seed_tools(client, headers):
    client.post("/api/categories", json={"name": "Tools"}, headers=headers)
    client.post("/api/categories", json={"name": "Food"}, headers=headers)
    for product_id, name, quantity in [(1, "Hammer", 10), (2, "Nail", 100), (3, "Screwdriver", 5)]:
        response = client.post(
            "/api/categories/Tools/products",
            json={"product_id": product_id, "name": name, "quantity": quantity},
            headers=headers,
        )
        assert response.status_code == 201, response.text


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["categories"] == 0


def test_login_failure(client):
    response = client.post("/api/auth/login", data={"username": "superadmin", "password": "nope"})
    assert response.status_code == 401


def test_routes_require_token(client):
    assert client.get("/api/categories").status_code in (401, 403)
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/categories", headers=bad).status_code == 401


def test_me(client, staff_headers):
    assert client.get("/api/auth/me", headers=staff_headers).json() == {"username": "clerk", "role": "staff"}


def test_category_lifecycle(client, admin_headers):
    seed_tools(client, admin_headers)

    names = [c["name"] for c in client.get("/api/categories", headers=admin_headers).json()]
    assert names == ["Food", "Tools"]

    duplicate = client.post("/api/categories", json={"name": "Tools"}, headers=admin_headers)
    assert duplicate.status_code == 409

    tools = client.get("/api/categories/Tools", headers=admin_headers).json()
    assert [p["product_id"] for p in tools["products"]] == [3, 2, 1]

    assert client.delete("/api/categories/Tools", headers=admin_headers).status_code == 200
    assert client.get("/api/categories/Tools", headers=admin_headers).status_code == 404
    assert client.delete("/api/categories/Tools", headers=admin_headers).status_code == 404


def test_delete_category_requires_admin(client, admin_headers, staff_headers):
    seed_tools(client, admin_headers)
    assert client.delete("/api/categories/Tools", headers=staff_headers).status_code == 403


def test_add_product_errors(client, admin_headers):
    seed_tools(client, admin_headers)
    missing = client.post(
        "/api/categories/Toys/products",
        json={"product_id": 9, "name": "Ball", "quantity": 1},
        headers=admin_headers,
    )
    assert missing.status_code == 404

    duplicate = client.post(
        "/api/categories/Tools/products",
        json={"product_id": 1, "name": "Mallet", "quantity": 1},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    negative = client.post(
        "/api/categories/Tools/products",
        json={"product_id": 8, "name": "Saw", "quantity": -1},
        headers=admin_headers,
    )
    assert negative.status_code == 422


def test_stock_changes(client, staff_headers, admin_headers):
    seed_tools(client, admin_headers)

    response = client.post("/api/products/1/decrease", json={"amount": 15}, headers=staff_headers)
    assert response.status_code == 409
    assert client.get("/api/products/1", headers=staff_headers).json()["quantity"] == 10

    response = client.put("/api/products/1/quantity", json={"quantity": 0}, headers=staff_headers)
    assert response.json()["status"] == "UPDATED"
    assert client.post("/api/products/1/decrease", json={"amount": 1}, headers=staff_headers).status_code == 409

    response = client.post("/api/products/2/decrease", json={"amount": 40}, headers=staff_headers)
    assert response.json()["quantity"] == 60

    assert client.post("/api/products/99/decrease", json={"amount": 1}, headers=staff_headers).status_code == 404
    response = client.put(
        "/api/products/1/quantity", json={"quantity": 5, "category": "Toys"}, headers=staff_headers
    )
    assert response.status_code == 404


def test_add_product_returns_created_fields(client, admin_headers, monkeypatch):
    seed_tools(client, admin_headers)
    warehouse = client.app.state.warehouse

    def category_gone(*args, **kwargs):
        raise CategoryNotFoundError("Tools")

    monkeypatch.setattr(warehouse, "find_product", category_gone)
    response = client.post(
        "/api/categories/Tools/products",
        json={"product_id": 4, "name": "  Wrench ", "quantity": 7},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json() == {"product_id": 4, "name": "Wrench", "quantity": 7, "category": "Tools"}


def test_products_sorted_by_id(client, admin_headers):
    seed_tools(client, admin_headers)
    products = client.get("/api/products", headers=admin_headers).json()
    assert [p["product_id"] for p in products] == [1, 2, 3]
    assert client.get("/api/products?category=Toys", headers=admin_headers).status_code == 404


def test_analysis(client, admin_headers):
    seed_tools(client, admin_headers)

    body = client.get("/api/categories/Tools/analysis", headers=admin_headers).json()
    assert body["total_quantity"] == 115
    assert round(body["average_quantity"], 2) == 38.33
    assert body["max_stock_product"]["name"] == "Nail"
    assert body["min_stock_product"]["name"] == "Screwdriver"
    assert [p["name"] for p in body["low_stock_products"]] == ["Hammer", "Screwdriver"]
    assert [p["name"] for p in body["high_stock_products"]] == ["Nail"]

    assert client.get("/api/categories/Food/analysis", headers=admin_headers).status_code == 422
    assert client.get("/api/categories/Toys/analysis", headers=admin_headers).status_code == 404


def test_alerts(client, admin_headers):
    seed_tools(client, admin_headers)
    body = client.get("/api/alerts", headers=admin_headers).json()
    assert body["total"] == 2
    assert {a["product_id"] for a in body["alerts"]} == {1, 3}


def test_text_and_pdf_reports(client, admin_headers):
    seed_tools(client, admin_headers)

    text = client.get("/api/reports/inventory.txt", headers=admin_headers).text
    assert text.startswith("Category: Food\nCategory: Tools")

    listing = client.get("/api/reports/products.txt", headers=admin_headers).text
    assert listing.splitlines()[1] == "1, Hammer, 10, Tools"

    analysis = client.get("/api/reports/Tools/analysis.txt", headers=admin_headers).text
    assert "Average quantity: 38.33" in analysis

    pdf = client.get("/api/reports/products.pdf", headers=admin_headers)
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    pdf = client.get("/api/reports/Tools/analysis.pdf", headers=admin_headers)
    assert pdf.content.startswith(b"%PDF")
    assert client.get("/api/reports/Food/analysis.pdf", headers=admin_headers).status_code == 422


def test_climate_without_key(client):
    body = client.get("/api/climate").json()
    assert body["temperature"] is None
    assert body["advisory"] is None
    assert body["city"] == settings.WEATHER_CITY


def test_save_endpoint_and_reload_on_startup(tmp_path, users_file, monkeypatch):
    from fastapi.testclient import TestClient
    from warehouse.main import app

    monkeypatch.setattr(settings, "AUTOSAVE", False)
    with TestClient(app) as first:
        admin = login_headers(first, "superadmin", "admin123")
        seed_tools(first, admin)
        staff = login_headers(first, "clerk", "clerk123")
        assert first.post("/api/inventory/save", headers=staff).status_code == 403
        response = first.post("/api/inventory/save", headers=admin)
        assert response.json()["products_saved"] == 3

    with TestClient(app) as second:
        assert second.get("/health").json()["products"] == 3


def test_shutdown_autosave(tmp_path):
    from fastapi.testclient import TestClient
    from warehouse.main import app

    with TestClient(app) as test_client:
        seed_tools(test_client, login_headers(test_client, "superadmin", "admin123"))

    lines = (tmp_path / "products.txt").read_text().splitlines()
    assert lines == ["1,Hammer,10,Tools", "2,Nail,100,Tools", "3,Screwdriver,5,Tools"]
