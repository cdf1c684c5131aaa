"""Tests for collection endpoints."""

from fastapi.testclient import TestClient


def test_create_with_null_products(client: TestClient) -> None:
    response = client.post("/api/collections", json={"name": "Empty", "productIds": None})
    assert response.status_code == 201
    data = response.json()
    assert data["productIds"] == []
    assert data["parentId"] is None


def test_update_collection(client: TestClient, catalog: dict[str, int]) -> None:
    response = client.put(
        f"/api/collections/{catalog['a1']}",
        json={"name": "A1", "parentId": catalog["b"], "productIds": [catalog["p4"]]},
    )
    assert response.status_code == 200
    assert response.json()["parentId"] == catalog["b"]

    products = client.get(
        f"/api/shops/{catalog['shop']}/products", params={"collection": catalog["b"]}
    ).json()
    assert [p["id"] for p in products["products"]] == [catalog["p2"], catalog["p4"]]


def test_update_missing_collection(client: TestClient) -> None:
    response = client.put("/api/collections/9", json={"name": "x"})
    assert response.status_code == 404
    assert response.json()["error_code"] == "COLLECTION_NOT_FOUND"


def test_delete_referenced_collection(client: TestClient, catalog: dict[str, int]) -> None:
    """Collections are deleted even while a shop still references them."""
    response = client.delete(f"/api/collections/{catalog['a']}")
    assert response.status_code == 204

    shop = client.get(f"/api/shops/{catalog['shop']}").json()
    assert catalog["a"] in shop["collectionIds"]

    products = client.get(f"/api/shops/{catalog['shop']}/products").json()
    assert [p["id"] for p in products["products"]] == [catalog["p2"]]


def test_delete_missing_collection(client: TestClient) -> None:
    response = client.delete("/api/collections/9")
    assert response.status_code == 404
