# tests/test_products_api.py
from datetime import timedelta

from schemas.product import ProductResponse


def _stamp(body):
    return ProductResponse.model_validate(body).last_updated


def _create(client, payload):
    r = client.post("/products", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


class TestCreateProduct:

    def test_created(self, client, widget):
        body = _create(client, widget)
        assert isinstance(body["id"], int)
        assert body["sku"] == "W-1"
        assert body["status"] == "in_stock"
        assert body["imageUrl"] is None
        assert body["lastUpdated"]

    def test_missing_name(self, client, widget):
        widget.pop("name")
        r = client.post("/products", json=widget)
        assert r.status_code == 400
        body = r.json()
        assert body["field"] == "name"
        assert body["message"]

    def test_negative_quantity(self, client, widget):
        widget["quantity"] = -3
        r = client.post("/products", json=widget)
        assert r.status_code == 400
        assert r.json()["field"] == "quantity"

    def test_quantity_beyond_column_range(self, client, widget):
        r = client.post("/products", json={**widget, "quantity": 2**63})
        assert r.status_code == 400
        assert r.json()["field"] == "quantity"
        assert client.get("/products").json() == []

    def test_missing_body(self, client):
        r = client.post("/products")
        assert r.status_code == 400
        assert r.json()["field"] == "body"

    def test_timestamp_is_utc(self, client, widget):
        body = _create(client, widget)
        assert _stamp(body).utcoffset() == timedelta(0)

    def test_duplicate_sku_conflict(self, client, widget):
        _create(client, widget)
        r = client.post("/products", json={**widget, "name": "Copy"})
        assert r.status_code == 409
        assert r.json()["field"] == "sku"

    def test_ids_are_unique(self, client, widget):
        first = _create(client, widget)
        second = _create(client, {**widget, "sku": "W-2"})
        assert first["id"] != second["id"]


class TestGetProduct:

    def test_found(self, client, widget):
        created = _create(client, widget)
        r = client.get(f"/products/{created['id']}")
        assert r.status_code == 200
        assert r.json() == created

    def test_not_found(self, client):
        r = client.get("/products/999999")
        assert r.status_code == 404
        assert r.json() == {"message": "Product not found"}


class TestListProducts:

    def test_status_filter_uses_quantity(self, client, widget):
        created = _create(client, widget)
        low = client.get("/products", params={"status": "low_stock"}).json()
        assert [p["id"] for p in low] == [created["id"]]
        assert client.get("/products", params={"status": "in_stock"}).json() == []

    def test_all_means_no_filter(self, client, widget):
        _create(client, widget)
        _create(client, {**widget, "sku": "W-2", "category": "Garden", "quantity": 40})
        r = client.get("/products", params={"category": "all", "status": "all", "search": ""})
        assert r.status_code == 200
        assert len(r.json()) == 2

    def test_category_and_search(self, client, widget):
        _create(client, widget)
        _create(client, {**widget, "name": "Rake", "sku": "G-1", "category": "Garden"})
        assert [p["sku"] for p in client.get("/products?category=Garden").json()] == ["G-1"]
        assert [p["name"] for p in client.get("/products?search=wid").json()] == ["Widget"]
        assert client.get("/products?search=wid&category=Garden").json() == []

    def test_categories(self, client, widget):
        _create(client, widget)
        _create(client, {**widget, "sku": "G-1", "category": "Garden"})
        assert client.get("/products/categories").json() == ["Garden", "Tools"]


class TestUpdateProduct:

    def test_partial_update(self, client, widget):
        created = _create(client, widget)
        r = client.put(f"/products/{created['id']}", json={"quantity": 0, "imageUrl": "/img/w.png"})
        assert r.status_code == 200
        body = r.json()
        assert body["quantity"] == 0
        assert body["imageUrl"] == "/img/w.png"
        assert body["name"] == "Widget"
        assert body["price"] == 1000
        assert _stamp(body) > _stamp(created)

    def test_missing(self, client):
        r = client.put("/products/999999", json={"quantity": 1})
        assert r.status_code == 404
        assert r.json() == {"message": "Product not found"}

    def test_invalid(self, client, widget):
        created = _create(client, widget)
        r = client.put(f"/products/{created['id']}", json={"price": -1})
        assert r.status_code == 400
        assert r.json()["field"] == "price"
        assert client.get(f"/products/{created['id']}").json()["price"] == 1000

    def test_price_beyond_column_range(self, client, widget):
        created = _create(client, widget)
        r = client.put(f"/products/{created['id']}", json={"price": 2**31})
        assert r.status_code == 400
        assert r.json()["field"] == "price"


class TestDeleteProduct:

    def test_delete_then_get(self, client, widget):
        created = _create(client, widget)
        r = client.delete(f"/products/{created['id']}")
        assert r.status_code == 204
        assert client.get(f"/products/{created['id']}").status_code == 404

    def test_delete_missing_is_204(self, client):
        assert client.delete("/products/999999").status_code == 204


def test_routes_work_against_injected_storage(fake_client, fake_storage, widget):
    created = fake_client.post("/products", json=widget).json()
    assert fake_storage.get_product(created["id"]).sku == "W-1"
    assert fake_client.get("/stats").json()["totalProducts"] == 1


def test_root(client):
    assert client.get("/").status_code == 200
