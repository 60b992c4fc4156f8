"""관리자 사용자 화면 테스트.

Admin user view tests — List, create (store users need a store), delete.
"""

import pytest_asyncio
from httpx import AsyncClient

from tests.conftest import ADMIN_PASSWORD, login
from tests.fake_backend import FakeBackend

URL = "/admin/usuarios"


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, admin_user) -> AsyncClient:
    await login(client, "admin", ADMIN_PASSWORD)
    return client


class TestUserList:
    async def test_list_users_with_store_name(self, admin_client: AsyncClient, store_user, flower_store):
        """목록 — 채워진 꽃집 이름 포함."""
        res = await admin_client.get(URL)
        assert res.status_code == 200
        users = {u["username"]: u for u in res.json()["items"]}
        assert users["seller"]["floristeria"] == flower_store["_id"]
        assert users["seller"]["store_name"] == "Rosas y Más"
        assert users["admin"]["role"] == "admin"


class TestUserCreate:
    """사용자 생성 테스트."""

    async def test_create_store_user(self, admin_client: AsyncClient, backend: FakeBackend, flower_store):
        res = await admin_client.post(URL, json={
            "username": "lucia",
            "password": "lucia123!",
            "role": "usuario",
            "floristeria": flower_store["_id"],
        })
        assert res.status_code == 201
        assert res.json()["username"] == "lucia"
        assert res.json()["floristeria"] == flower_store["_id"]

    async def test_store_user_without_store(self, admin_client: AsyncClient, backend: FakeBackend):
        """스토어 사용자 꽃집 누락 → 422, 전송 없음."""
        res = await admin_client.post(URL, json={"username": "lucia", "password": "x", "role": "usuario"})
        assert res.status_code == 422
        assert res.json()["detail"]["fields"]["floristeria"] == "Store users must be assigned to a store"
        assert backend.requests_to("POST", "/api/users") == []

    async def test_unknown_role(self, admin_client: AsyncClient):
        res = await admin_client.post(URL, json={"username": "x", "password": "y", "role": "root"})
        assert res.status_code == 422
        assert "role" in res.json()["detail"]["fields"]

    async def test_new_user_form(self, admin_client: AsyncClient, flower_store):
        res = await admin_client.get(f"{URL}/nuevo")
        assert res.json()["roles"] == ["admin", "usuario"]
        assert [s["_id"] for s in res.json()["stores"]] == [flower_store["_id"]]


class TestUserDelete:
    async def test_delete_user(self, admin_client: AsyncClient, backend: FakeBackend, store_user):
        res = await admin_client.delete(f"{URL}/{store_user['_id']}", params={"confirm": "true"})
        assert res.status_code == 200
        assert store_user["_id"] not in backend.users

    async def test_delete_requires_confirm(self, admin_client: AsyncClient, backend: FakeBackend, store_user):
        res = await admin_client.delete(f"{URL}/{store_user['_id']}")
        assert res.status_code == 428
        assert store_user["_id"] in backend.users

    async def test_delete_missing(self, admin_client: AsyncClient):
        res = await admin_client.delete(f"{URL}/missing", params={"confirm": "true"})
        assert res.status_code == 404
