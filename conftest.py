"""
Shared fixtures for the warehouse tests.
"""
import pytest
from fastapi.testclient import TestClient

from warehouse.config import settings
from warehouse.service import Warehouse


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every file setting at a temporary directory and disable weather lookups."""
    monkeypatch.setattr(settings, "PRODUCTS_FILE", str(tmp_path / "products.txt"))
    monkeypatch.setattr(settings, "USERS_FILE", str(tmp_path / "user.txt"))
    monkeypatch.setattr(settings, "WEATHER_API_KEY", None)
    monkeypatch.setattr(settings, "SUPERADMIN_USERNAME", "superadmin")
    monkeypatch.setattr(settings, "SUPERADMIN_PASSWORD", "admin123")
    monkeypatch.setattr(settings, "AUTOSAVE", True)
    return settings


@pytest.fixture
def warehouse():
    return Warehouse()


@pytest.fixture
def tools_warehouse(warehouse):
    """Tools and Food categories; Tools holds Hammer, Nail and Screwdriver."""
    warehouse.add_category("Tools")
    warehouse.add_category("Food")
    warehouse.add_product("Tools", 1, "Hammer", 10)
    warehouse.add_product("Tools", 2, "Nail", 100)
    warehouse.add_product("Tools", 3, "Screwdriver", 5)
    return warehouse


@pytest.fixture
def users_file(isolated_settings, tmp_path):
    path = tmp_path / "user.txt"
    path.write_text("clerk, clerk123\nauditor, audit456\n")
    return path


@pytest.fixture
def client():
    from warehouse.main import app

    with TestClient(app) as test_client:
        yield test_client


def _token_headers(client, username, password):
    response = client.post("/api/auth/login", data={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return _token_headers(client, "superadmin", "admin123")


@pytest.fixture
def staff_headers(client, users_file):
    return _token_headers(client, "clerk", "clerk123")
