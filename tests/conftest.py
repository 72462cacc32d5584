from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient


class FakeUserStore:
    """
    In-memory stand-in for `users.repository`, same call signatures.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.update_calls = 0

    @staticmethod
    def _public(row: dict[str, Any]) -> dict[str, Any]:
        return {"id": row["id"], "name": row["name"], "email": row["email"]}

    async def create_user(self, *, name: str, email: str, password_hash: str) -> dict:
        row = {"id": self.next_id, "name": name, "email": email, "password_hash": password_hash}
        self.rows[row["id"]] = row
        self.next_id += 1
        return self._public(row)

    async def list_users(self, *, limit: int, offset: int) -> list[dict]:
        ordered = [self.rows[key] for key in sorted(self.rows)]
        return [self._public(row) for row in ordered[offset : offset + limit]]

    async def get_user_by_id(self, user_id: int) -> dict | None:
        row = self.rows.get(user_id)
        return self._public(row) if row else None

    async def replace_user(self, user_id: int, *, name: str, email: str, password_hash: str) -> dict | None:
        self.update_calls += 1
        row = self.rows.get(user_id)
        if row is None:
            return None
        row.update(name=name, email=email, password_hash=password_hash)
        return self._public(row)

    async def update_user(self, user_id: int, changes: dict[str, Any]) -> dict | None:
        self.update_calls += 1
        row = self.rows.get(user_id)
        if row is None:
            return None
        row.update(changes)
        return self._public(row)

    async def delete_user(self, user_id: int) -> dict | None:
        row = self.rows.pop(user_id, None)
        return self._public(row) if row else None


class FakeProductStore:
    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1

    async def create_product(self, *, name: str, about: str, price: float) -> dict:
        row = {"id": self.next_id, "name": name, "about": about, "price": price}
        self.rows[row["id"]] = row
        self.next_id += 1
        return dict(row)

    async def list_products(self, *, limit: int, offset: int) -> list[dict]:
        ordered = [self.rows[key] for key in sorted(self.rows)]
        return [dict(row) for row in ordered[offset : offset + limit]]

    async def get_product_by_id(self, product_id: int) -> dict | None:
        row = self.rows.get(product_id)
        return dict(row) if row else None

    async def delete_product(self, product_id: int) -> dict | None:
        row = self.rows.pop(product_id, None)
        return dict(row) if row else None


@pytest.fixture(autouse=True)
def _default_hash_scheme(monkeypatch):
    monkeypatch.delenv("PASSWORD_HASH_SCHEME", raising=False)


@pytest.fixture()
def client():
    from main import app

    return TestClient(app)


@pytest.fixture()
def user_store(monkeypatch) -> FakeUserStore:
    from users import repository

    store = FakeUserStore()
    for name in ("create_user", "list_users", "get_user_by_id", "replace_user", "update_user", "delete_user"):
        monkeypatch.setattr(repository, name, getattr(store, name))
    return store


@pytest.fixture()
def product_store(monkeypatch) -> FakeProductStore:
    from products import repository

    store = FakeProductStore()
    for name in ("create_product", "list_products", "get_product_by_id", "delete_product"):
        monkeypatch.setattr(repository, name, getattr(store, name))
    return store
