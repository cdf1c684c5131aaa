"""Tests for shop endpoints and shop-scoped listings."""

from fastapi.testclient import TestClient


class TestShopProducts:
    """Tests for GET /api/shops/{id}/products."""

    def test_collection_filter_includes_descendants(
        self, client: TestClient, catalog: dict[str, int]
    ) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/products",
            params={"collection": catalog["a"], "page": 1, "limit": 10},
        )
        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data["products"]] == [catalog["p1"], catalog["p3"], catalog["p4"]]
        assert data["totalCount"] == 3
        assert data["totalPages"] == 1
        assert data["page"] == 1
        assert data["limit"] == 10

    def test_product_fields_are_camel_case(
        self, client: TestClient, catalog: dict[str, int]
    ) -> None:
        response = client.get(f"/api/shops/{catalog['shop']}/products")
        product = response.json()["products"][0]
        assert product["id"] == catalog["p1"]
        assert product["categoryIds"] == [catalog["electronics"]]
        assert product["price"] == 499

    def test_pagination(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/products", params={"page": 2, "limit": 2}
        )
        data = response.json()
        assert [p["id"] for p in data["products"]] == [catalog["p3"]]
        assert data["totalCount"] == 3
        assert data["totalPages"] == 2

    def test_page_past_end_is_empty(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/products", params={"page": 9, "limit": 2}
        )
        data = response.json()
        assert data["products"] == []
        assert data["totalCount"] == 3

    def test_invalid_params_fall_back(self, client: TestClient, catalog: dict[str, int]) -> None:
        """Malformed values are ignored rather than rejected."""
        response = client.get(
            f"/api/shops/{catalog['shop']}/products",
            params={"collection": "abc", "category": "x", "page": "-3", "limit": "zero"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["limit"] == 10
        assert data["totalCount"] == 3

    def test_underscored_and_padded_numbers_are_ignored(
        self, client: TestClient, catalog: dict[str, int]
    ) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/products",
            params={"collection": f" {catalog['b']} ", "limit": "1_0"},
        )
        data = response.json()
        assert data["limit"] == 10
        assert data["totalCount"] == 3

    def test_category_filter(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/products",
            params={"category": catalog["electronics"]},
        )
        assert [p["id"] for p in response.json()["products"]] == [catalog["p1"], catalog["p3"]]

    def test_unknown_shop_is_empty(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get("/api/shops/999/products", params={"limit": 5})
        assert response.status_code == 200
        data = response.json()
        assert data["products"] == []
        assert data["totalCount"] == 0
        assert data["limit"] == 5


class TestShopCategories:
    """Tests for GET /api/shops/{id}/categories."""

    def test_direct_only(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/categories",
            params={"collection": catalog["a"], "direct": "true"},
        )
        assert response.status_code == 200
        ids = [c["id"] for c in response.json()]
        assert ids == [catalog["electronics"], catalog["laptops"]]

    def test_descendants_by_default(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(
            f"/api/shops/{catalog['shop']}/categories",
            params={"collection": catalog["a"], "direct": "yes"},
        )
        ids = [c["id"] for c in response.json()]
        assert ids == [catalog["electronics"], catalog["laptops"], catalog["toys"]]

    def test_parent_id_serialized(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(f"/api/shops/{catalog['shop']}/categories")
        by_id = {c["id"]: c for c in response.json()}
        assert by_id[catalog["laptops"]]["parentId"] == catalog["electronics"]
        assert by_id[catalog["electronics"]]["parentId"] is None

    def test_unknown_shop_is_empty(self, client: TestClient) -> None:
        response = client.get("/api/shops/999/categories")
        assert response.status_code == 200
        assert response.json() == []


class TestShopCrud:
    """Tests for shop CRUD endpoints."""

    def test_get_shop(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.get(f"/api/shops/{catalog['shop']}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "S"
        assert data["collectionIds"] == sorted([catalog["a"], catalog["b"]])

    def test_get_missing_shop(self, client: TestClient) -> None:
        response = client.get("/api/shops/999")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SHOP_NOT_FOUND"

    def test_update_shop(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.put(
            f"/api/shops/{catalog['shop']}",
            json={"name": "S2", "collectionIds": [catalog["b"]]},
        )
        assert response.status_code == 200
        assert response.json()["collectionIds"] == [catalog["b"]]

        products = client.get(f"/api/shops/{catalog['shop']}/products").json()
        assert [p["id"] for p in products["products"]] == [catalog["p2"]]

    def test_delete_shop(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.delete(f"/api/shops/{catalog['shop']}")
        assert response.status_code == 204
        assert client.get("/api/shops").json() == []
