"""
HTTP contract tests for /users.

The repository is replaced by an in-memory store (`user_store`) or by
AsyncMocks, so no database is needed.
"""

from __future__ import annotations

import hashlib
from unittest.mock import AsyncMock

import pytest

ANN = {"name": "Ann", "email": "a@x.com", "password": "secret"}

REPOSITORY_FUNCTIONS = (
    "create_user",
    "list_users",
    "get_user_by_id",
    "replace_user",
    "update_user",
    "delete_user",
)


def _sha512(value: str) -> str:
    return hashlib.sha512(value.encode("utf-8")).hexdigest()


@pytest.fixture()
def repo_mocks(monkeypatch) -> dict[str, AsyncMock]:
    from users import repository

    mocks = {name: AsyncMock(name=name) for name in REPOSITORY_FUNCTIONS}
    for name, mock in mocks.items():
        monkeypatch.setattr(repository, name, mock)
    return mocks


def _assert_store_untouched(mocks: dict[str, AsyncMock]) -> None:
    for mock in mocks.values():
        mock.assert_not_awaited()


class TestCreateUser:
    def test_create_returns_201_without_password(self, client, user_store):
        resp = client.post("/users", json=ANN)

        assert resp.status_code == 201
        assert resp.json() == {"id": 1, "name": "Ann", "email": "a@x.com"}

    def test_create_stores_sha512_digest(self, client, user_store):
        client.post("/users", json=ANN)

        assert user_store.rows[1]["password_hash"] == _sha512("secret")

    def test_create_ignores_client_id(self, client, user_store):
        resp = client.post("/users", json={**ANN, "id": 99})

        assert resp.status_code == 201
        assert resp.json()["id"] == 1

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_create_missing_field_is_400(self, client, repo_mocks, missing):
        body = {k: v for k, v in ANN.items() if k != missing}

        resp = client.post("/users", json=body)

        assert resp.status_code == 400
        data = resp.json()
        assert data["error"] == "Invalid data."
        assert {"field": missing, "kind": "missing"}.items() <= data["details"][0].items()
        _assert_store_untouched(repo_mocks)

    def test_create_rejects_non_string_name(self, client, repo_mocks):
        resp = client.post("/users", json={**ANN, "name": 42})

        assert resp.status_code == 400
        assert resp.json()["details"][0]["field"] == "name"
        assert resp.json()["details"][0]["kind"] == "string_type"
        _assert_store_untouched(repo_mocks)

    def test_create_rejects_empty_name(self, client, repo_mocks):
        resp = client.post("/users", json={**ANN, "name": ""})

        assert resp.status_code == 400
        assert resp.json()["details"][0]["kind"] == "string_too_short"

    def test_create_rejects_non_object_body(self, client, repo_mocks):
        resp = client.post("/users", json=["Ann"])

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid data."
        _assert_store_untouched(repo_mocks)

    def test_create_rejects_malformed_json(self, client, repo_mocks):
        resp = client.post(
            "/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["details"][0]["kind"] == "json_invalid"

    def test_create_storage_failure_is_generic_500(self, client, repo_mocks):
        repo_mocks["create_user"].side_effect = OSError("connection refused to 10.0.0.7")

        resp = client.post("/users", json=ANN)

        assert resp.status_code == 500
        assert resp.json() == {"error": "Error while inserting the user."}


class TestReadUsers:
    def test_round_trip_never_returns_password(self, client, user_store):
        user_id = client.post("/users", json=ANN).json()["id"]

        resp = client.get(f"/users/{user_id}")

        assert resp.status_code == 200
        body = resp.json()
        assert body == {"id": user_id, "name": "Ann", "email": "a@x.com"}
        assert "secret" not in resp.text
        assert _sha512("secret") not in resp.text

    def test_get_missing_user_is_404(self, client, user_store):
        resp = client.get("/users/7")

        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found."}

    def test_list_defaults_to_first_page_of_ten(self, client, repo_mocks):
        repo_mocks["list_users"].return_value = []

        resp = client.get("/users")

        assert resp.status_code == 200
        assert resp.json() == []
        repo_mocks["list_users"].assert_awaited_once_with(limit=10, offset=0)

    def test_list_offsets_by_page(self, client, repo_mocks):
        repo_mocks["list_users"].return_value = [{"id": 11, "name": "K", "email": "k@x.com"}]

        resp = client.get("/users?page=3&limit=5")

        assert resp.json() == [{"id": 11, "name": "K", "email": "k@x.com"}]
        repo_mocks["list_users"].assert_awaited_once_with(limit=5, offset=10)

    @pytest.mark.parametrize(
        "query",
        ["page=0", "limit=0", "limit=101", "page=abc", "page=100000000000000000000&limit=100"],
    )
    def test_list_rejects_bad_pagination(self, client, repo_mocks, query):
        resp = client.get(f"/users?{query}")

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid query parameters."
        _assert_store_untouched(repo_mocks)

    def test_list_without_pool_is_500(self, client):
        # No lifespan in these tests, so core.db has no pool.
        resp = client.get("/users")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Error while fetching users."}


class TestReplaceUser:
    def test_put_replaces_all_fields(self, client, user_store):
        client.post("/users", json=ANN)

        resp = client.put("/users/1", json={"name": "Bob", "email": "b@x.com", "password": "hunter2"})

        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "name": "Bob", "email": "b@x.com"}
        assert user_store.rows[1]["password_hash"] == _sha512("hunter2")

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_put_missing_field_leaves_row_unchanged(self, client, user_store, missing):
        client.post("/users", json=ANN)
        body = {k: v for k, v in {"name": "Bob", "email": "b@x.com", "password": "x"}.items() if k != missing}

        resp = client.put("/users/1", json=body)

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid data for full replacement."
        assert user_store.update_calls == 0
        assert client.get("/users/1").json() == {"id": 1, "name": "Ann", "email": "a@x.com"}

    def test_put_missing_user_is_404(self, client, user_store):
        resp = client.put("/users/5", json=ANN)

        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found."}


class TestUpdateUser:
    def test_patch_empty_body_is_400_without_update(self, client, repo_mocks):
        resp = client.patch("/users/1", json={})

        assert resp.status_code == 400
        assert resp.json() == {"error": "No update data supplied."}
        _assert_store_untouched(repo_mocks)

    def test_patch_updates_only_given_fields(self, client, user_store):
        client.post("/users", json=ANN)

        resp = client.patch("/users/1", json={"email": "ann@new.io"})

        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "name": "Ann", "email": "ann@new.io"}
        assert user_store.rows[1]["password_hash"] == _sha512("secret")

    def test_patch_rehashes_password(self, client, repo_mocks):
        repo_mocks["update_user"].return_value = {"id": 1, "name": "Ann", "email": "a@x.com"}

        resp = client.patch("/users/1", json={"password": "n3w"})

        assert resp.status_code == 200
        repo_mocks["update_user"].assert_awaited_once_with(1, {"password_hash": _sha512("n3w")})

    def test_patch_rejects_unknown_field(self, client, repo_mocks):
        resp = client.patch("/users/1", json={"is_admin": True})

        assert resp.status_code == 400
        assert resp.json()["details"][0] == {
            "field": "is_admin",
            "kind": "extra_forbidden",
            "message": resp.json()["details"][0]["message"],
        }
        _assert_store_untouched(repo_mocks)

    def test_patch_rejects_null(self, client, repo_mocks):
        resp = client.patch("/users/1", json={"name": None})

        assert resp.status_code == 400
        assert resp.json()["details"][0]["field"] == "name"
        _assert_store_untouched(repo_mocks)

    def test_patch_missing_user_is_404(self, client, user_store):
        resp = client.patch("/users/3", json={"name": "Zed"})

        assert resp.status_code == 404


class TestDeleteUser:
    def test_delete_twice(self, client, user_store):
        client.post("/users", json=ANN)

        first = client.delete("/users/1")
        second = client.delete("/users/1")

        assert first.status_code == 200
        assert first.json() == {"id": 1, "name": "Ann", "email": "a@x.com"}
        assert second.status_code == 404
        assert second.json() == {"error": "User not found."}


@pytest.mark.parametrize("bad_id", ["abc", "-1", "0", "1.5", "2147483648"])
@pytest.mark.parametrize(
    "method, body",
    [
        ("GET", None),
        ("PUT", ANN),
        ("PATCH", {"name": "Zed"}),
        ("DELETE", None),
    ],
)
def test_bad_user_id_is_400_without_store(client, repo_mocks, bad_id, method, body):
    resp = client.request(method, f"/users/{bad_id}", json=body)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid id, must be a positive integer."
    assert resp.json()["details"][0]["field"] == "user_id"
    _assert_store_untouched(repo_mocks)
