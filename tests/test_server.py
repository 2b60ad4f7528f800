import logging

import pytest

from product_api.errors import StoreError
from product_api.server import create_app
from product_api.store import InMemoryStore


def _post(client, payload):
    return client.post("/api/products", json=payload)


def test_list_empty(client):
    response = client.get("/api/products")
    assert response.status_code == 200
    assert response.get_json() == []


def test_product_lifecycle(client):
    response = _post(client, {"name": "Widget", "price": 9.99, "stock": 5})
    assert response.status_code == 201
    created = {"id": 1, "name": "Widget", "description": "", "price": 9.99, "stock": 5}
    assert response.get_json() == created

    response = client.get("/api/products/1")
    assert response.status_code == 200
    assert response.get_json() == created

    response = client.put("/api/products/1", json={"name": "Widget2", "price": 12.5, "stock": 3})
    assert response.status_code == 200
    assert response.get_json() == {
        "id": 1, "name": "Widget2", "description": "", "price": 12.5, "stock": 3,
    }

    response = client.delete("/api/products/1")
    assert response.status_code == 204
    assert response.data == b""

    response = client.get("/api/products/1")
    assert response.status_code == 404
    assert response.get_json() == {"error": "product not found"}

    response = client.get("/api/products/99")
    assert response.status_code == 404


def test_list_returns_created_products(client):
    for name in ("a", "b", "c"):
        _post(client, {"name": name, "price": 1})
    client.delete("/api/products/2")

    response = client.get("/api/products")
    assert response.status_code == 200
    assert sorted(p["name"] for p in response.get_json()) == ["a", "c"]


def test_create_ignores_id_in_body(client):
    response = _post(client, {"id": 50, "name": "Widget", "price": 1.5})
    assert response.status_code == 201
    assert response.get_json()["id"] == 1


def test_create_missing_name(client):
    response = _post(client, {"price": 9.99})
    assert response.status_code == 400
    assert response.get_json() == {"error": "name is required"}


def test_create_missing_price(client):
    response = _post(client, {"name": "Widget"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "price is required"}


def test_create_unparseable_body(client, store):
    response = client.post("/api/products", data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid JSON body"}
    assert len(store) == 0


def test_create_accepts_json_without_content_type(client):
    response = client.post("/api/products", data='{"name": "Widget", "price": 2}')
    assert response.status_code == 201


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_invalid_id(client, method):
    response = getattr(client, method)("/api/products/abc", json={"name": "x", "price": 1})
    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid id"}


def test_update_missing_product(client, store):
    response = client.put("/api/products/7", json={"name": "Widget", "price": 1})
    assert response.status_code == 404
    assert response.get_json() == {"error": "product not found"}
    assert len(store) == 0


def test_update_bad_body(client):
    _post(client, {"name": "Widget", "price": 1})
    response = client.put("/api/products/1", json={"name": "", "price": 1})
    assert response.status_code == 400
    assert client.get("/api/products/1").get_json()["name"] == "Widget"


def test_update_checks_id_before_body(client):
    response = client.put("/api/products/abc", data="{not json", content_type="application/json")
    assert response.get_json() == {"error": "invalid id"}


def test_delete_twice(client):
    _post(client, {"name": "Widget", "price": 1})
    assert client.delete("/api/products/1").status_code == 204
    assert client.delete("/api/products/1").status_code == 404
    assert _post(client, {"name": "Next", "price": 1}).get_json()["id"] == 2


def test_unknown_route_and_method(client):
    response = client.get("/api/nothing")
    assert response.status_code == 404
    assert response.get_json() == {"error": "not found"}

    response = client.patch("/api/products/1")
    assert response.status_code == 405
    assert response.get_json() == {"error": "method not allowed"}


def test_openapi_document(client):
    response = client.get("/api/openapi.json")
    assert response.status_code == 200
    doc = response.get_json()
    assert doc["info"] == {
        "title": "Product Management API",
        "version": "1.0",
        "description": "Simple product management service.",
    }
    assert set(doc["paths"]) == {"/products", "/products/{id}"}
    assert set(doc["paths"]["/products/{id}"]) == {"parameters", "get", "put", "delete"}
    assert set(doc["components"]["schemas"]) == {"ProductInput", "Product", "Error"}


def test_swagger_ui(client):
    response = client.get("/api/docs")
    assert response.status_code == 200
    assert response.mimetype == "text/html"
    assert b"swagger-ui-bundle.js" in response.data
    assert b"/api/openapi.json" in response.data

    for path in ("/swagger/", "/swagger/index.html"):
        response = client.get(path)
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/api/docs")


class FailingStore(InMemoryStore):
    def list(self):
        raise StoreError("backend down")

    def create(self, product):
        raise StoreError("backend down")

    def get(self, pid):
        raise StoreError("backend down")

    def update(self, pid, product):
        raise StoreError("backend down")

    def delete(self, pid):
        raise StoreError("backend down")


@pytest.fixture
def failing_client():
    app = create_app(FailingStore())
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.mark.parametrize(
    "method, path, message",
    [
        ("get", "/api/products", "unable to list products"),
        ("post", "/api/products", "unable to create product"),
        ("get", "/api/products/1", "server error"),
        ("put", "/api/products/1", "server error"),
        ("delete", "/api/products/1", "server error"),
    ],
)
def test_store_failure_maps_to_500(failing_client, method, path, message, caplog):
    with caplog.at_level(logging.ERROR, logger="product_api.server"):
        response = getattr(failing_client, method)(path, json={"name": "Widget", "price": 1})
    assert response.status_code == 500
    assert response.get_json() == {"error": message}
    assert "backend down" in caplog.text


def test_unexpected_error_is_logged_and_500(caplog):
    class BrokenStore(InMemoryStore):
        def get(self, pid):
            raise KeyError("boom")

    app = create_app(BrokenStore())
    client = app.test_client()
    with caplog.at_level(logging.ERROR, logger="product_api.server"):
        response = client.get("/api/products/1")
    assert response.status_code == 500
    assert response.get_json() == {"error": "server error"}
    assert "Unhandled error on GET /api/products/1" in caplog.text


def test_access_log(client, caplog):
    with caplog.at_level(logging.INFO, logger="product_api.access"):
        client.get("/api/products/abc")
    assert "GET /api/products/abc 400" in caplog.text
