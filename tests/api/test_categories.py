"""Tests for category endpoints."""

from fastapi.testclient import TestClient


def _create(client: TestClient, name: str, parent_id: int | None = None) -> int:
    response = client.post("/api/categories", json={"name": name, "parentId": parent_id})
    assert response.status_code == 201
    return response.json()["id"]


class TestDeleteCategory:
    """Tests for DELETE /api/categories/{id}."""

    def test_deletes_subtree(self, client: TestClient) -> None:
        root = _create(client, "root")
        _create(client, "child", root)
        other = _create(client, "other")

        response = client.delete(f"/api/categories/{root}")

        assert response.status_code == 204
        assert [c["id"] for c in client.get("/api/categories").json()] == [other]

    def test_missing_category(self, client: TestClient) -> None:
        response = client.delete("/api/categories/404")
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "CATEGORY_NOT_FOUND"
        assert "request_id" in data

    def test_category_in_use(self, client: TestClient, catalog: dict[str, int]) -> None:
        response = client.delete(f"/api/categories/{catalog['toys']}")
        assert response.status_code == 409
        assert response.json()["error_code"] == "CATEGORY_IN_USE"

    def test_descendant_in_use(self, client: TestClient) -> None:
        root = _create(client, "root")
        child = _create(client, "child", root)
        client.post("/api/products", json={"name": "p", "categoryIds": [child]})

        response = client.delete(f"/api/categories/{root}")

        assert response.status_code == 409
        assert response.json()["error_code"] == "DESCENDANT_CATEGORY_IN_USE"
        ids = {c["id"] for c in client.get("/api/categories").json()}
        assert ids == {root, child}


class TestDeletableCheck:
    """Tests for GET /api/categories/{id}/deletable."""

    def test_ok(self, client: TestClient) -> None:
        root = _create(client, "root")
        child = _create(client, "child", root)

        data = client.get(f"/api/categories/{root}/deletable").json()

        assert data == {
            "ok": True,
            "idsToDelete": [root, child],
            "blocked": None,
            "notFound": False,
        }

    def test_blocked_self(self, client: TestClient, catalog: dict[str, int]) -> None:
        data = client.get(f"/api/categories/{catalog['electronics']}/deletable").json()
        assert data["ok"] is False
        assert data["blocked"] == "self"
        assert data["idsToDelete"] == []

    def test_blocked_descendant(self, client: TestClient) -> None:
        root = _create(client, "root")
        child = _create(client, "child", root)
        client.post("/api/products", json={"name": "p", "categoryIds": [child]})

        data = client.get(f"/api/categories/{root}/deletable").json()

        assert data["blocked"] == "descendant"

    def test_not_found(self, client: TestClient) -> None:
        data = client.get("/api/categories/77/deletable").json()
        assert data["ok"] is False
        assert data["notFound"] is True


class TestUpdateCategory:
    """Tests for PUT /api/categories/{id}."""

    def test_reparent(self, client: TestClient) -> None:
        parent = _create(client, "parent")
        child = _create(client, "child")

        response = client.put(
            f"/api/categories/{child}", json={"name": "child", "parentId": parent}
        )

        assert response.status_code == 200
        assert response.json()["parentId"] == parent

    def test_missing(self, client: TestClient) -> None:
        response = client.put("/api/categories/5", json={"name": "x"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"
