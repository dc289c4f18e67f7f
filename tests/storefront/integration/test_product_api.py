"""Integration tests for the product endpoints."""

from protean import current_domain
from protean.exceptions import ExpectedVersionError

from storefront.product.product import Product


class TestCatalogEndpoints:
    def test_list_products_envelope(self, client, make_product):
        make_product(name="Copper Kettle")
        response = client.get("/products")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        assert "timestamp" in body
        assert [p["name"] for p in body["data"]] == ["Copper Kettle"]

    def test_get_product(self, client, make_product):
        product_id = make_product(name="Copper Kettle", available_quantity=3)
        body = client.get(f"/products/{product_id}").json()
        assert body["data"]["product_id"] == product_id
        assert body["data"]["available_quantity"] == 3
        assert body["data"]["in_stock"] is True

    def test_get_unknown_product(self, client):
        response = client.get("/products/missing-product")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "NotFound"

    def test_available(self, client, make_product):
        make_product(name="In Stock", available_quantity=1)
        make_product(name="Sold Out", available_quantity=0)
        names = [p["name"] for p in client.get("/products/available").json()["data"]]
        assert names == ["In Stock"]

    def test_search(self, client, make_product):
        make_product(name="Copper Kettle")
        make_product(name="Walnut Board")
        names = [p["name"] for p in client.get("/products/search", params={"name": "kett"}).json()["data"]]
        assert names == ["Copper Kettle"]

    def test_max_cost(self, client, make_product):
        make_product(name="Cheap", unit_cost=5.0)
        make_product(name="Dear", unit_cost=500.0)
        names = [p["name"] for p in client.get("/products/max-cost", params={"cost": 10}).json()["data"]]
        assert names == ["Cheap"]


class TestAdminEndpoints:
    def test_add_product(self, client, admin_headers):
        response = client.post(
            "/products",
            json={"name": "Oak Spice Rack", "unit_cost": 31.0, "available_quantity": 6},
            headers=admin_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        product = current_domain.repository_for(Product).get(data["product_id"])
        assert product.available_quantity == 6

    def test_add_product_negative_stock(self, client, admin_headers):
        response = client.post(
            "/products",
            json={"name": "Oak Spice Rack", "unit_cost": 31.0, "available_quantity": -1},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidQuantity"

    def test_add_product_requires_caller(self, client):
        response = client.post("/products", json={"name": "Oak Spice Rack", "unit_cost": 31.0})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"

    def test_add_product_requires_admin(self, client, shopper_headers):
        response = client.post(
            "/products",
            json={"name": "Oak Spice Rack", "unit_cost": 31.0},
            headers=shopper_headers,
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_update_product(self, client, admin_headers, make_product):
        product_id = make_product(available_quantity=4)
        response = client.put(f"/products/{product_id}", json={"name": "Renamed"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"
        assert response.json()["data"]["available_quantity"] == 4

    def test_update_product_lost_race_is_a_conflict(self, client, admin_headers, make_product, stock_of, monkeypatch):
        product_id = make_product(available_quantity=4)

        def lost_race(self, **changes):
            raise ExpectedVersionError("Wrong expected version")

        monkeypatch.setattr(Product, "update_details", lost_race)
        response = client.put(f"/products/{product_id}", json={"name": "Renamed"}, headers=admin_headers)
        monkeypatch.undo()

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"
        assert response.json()["success"] is False
        assert stock_of(product_id) == 4

    def test_delete_product(self, client, admin_headers, make_product):
        product_id = make_product()
        response = client.delete(f"/products/{product_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_set_stock(self, client, admin_headers, make_product, stock_of):
        product_id = make_product(available_quantity=4)
        response = client.patch(f"/products/{product_id}/stock", json={"quantity": 11}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["available_quantity"] == 11
        assert stock_of(product_id) == 11

    def test_set_stock_negative(self, client, admin_headers, make_product, stock_of):
        product_id = make_product(available_quantity=4)
        response = client.patch(f"/products/{product_id}/stock", json={"quantity": -1}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidQuantity"
        assert stock_of(product_id) == 4

    def test_restock(self, client, admin_headers, make_product, stock_of):
        product_id = make_product(available_quantity=4)
        response = client.post(f"/products/{product_id}/restock", json={"delta": 6}, headers=admin_headers)
        assert response.status_code == 200
        assert stock_of(product_id) == 10

    def test_restock_zero(self, client, admin_headers, make_product):
        product_id = make_product(available_quantity=4)
        response = client.post(f"/products/{product_id}/restock", json={"delta": 0}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidQuantity"

    def test_restock_unknown_product(self, client, admin_headers):
        response = client.post("/products/missing-product/restock", json={"delta": 2}, headers=admin_headers)
        assert response.status_code == 404
