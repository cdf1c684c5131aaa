"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def catalog(client: TestClient) -> dict[str, int]:
    """Populate the catalog over HTTP.

    Shop S holds collections A and B; A1 is a child of A. Laptops is a
    child category of Electronics.
    """

    def post(path: str, payload: dict) -> int:
        response = client.post(path, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    electronics = post("/api/categories", {"name": "Electronics"})
    laptops = post("/api/categories", {"name": "Laptops", "parentId": electronics})
    toys = post("/api/categories", {"name": "Toys"})

    p1 = post("/api/products", {"name": "Phone", "price": 499, "categoryIds": [electronics]})
    p2 = post("/api/products", {"name": "Chair", "price": 89, "categoryIds": []})
    p3 = post("/api/products", {"name": "Ultrabook", "price": 1299, "categoryIds": [laptops]})
    p4 = post("/api/products", {"name": "Puzzle", "price": 15, "categoryIds": [toys]})

    a = post("/api/collections", {"name": "A", "productIds": [p1, p3]})
    a1 = post("/api/collections", {"name": "A1", "parentId": a, "productIds": [p4]})
    b = post("/api/collections", {"name": "B", "productIds": [p2]})

    shop = post("/api/shops", {"name": "S", "collectionIds": [a, b]})

    return {
        "shop": shop,
        "a": a,
        "a1": a1,
        "b": b,
        "electronics": electronics,
        "laptops": laptops,
        "toys": toys,
        "p1": p1,
        "p2": p2,
        "p3": p3,
        "p4": p4,
    }
