"""인증 화면 테스트 — 로그인, 로그아웃, 라우트 가드 리다이렉트.

Auth view tests — Login, logout, and the route guard redirects of the
admin and store-user consoles.
"""

import base64
import hashlib
import json

import jwt
from httpx import AsyncClient

from flores_admin.services.session_store import decode_identity
from tests.conftest import ADMIN_PASSWORD, SELLER_PASSWORD, login
from tests.fake_backend import FakeBackend


class TestLogin:
    """로그인 테스트."""

    async def test_admin_login_redirects_to_admin(self, client: AsyncClient, admin_user):
        """관리자 로그인 → /admin 으로 303."""
        res = await login(client, "admin", ADMIN_PASSWORD)
        assert res.status_code == 303
        assert res.headers["location"] == "/admin"
        assert client.cookies.get("token")
        identity = decode_identity(client.cookies.get("user"), client.cookies.get("token"))
        assert identity.display_name == "admin"
        assert identity.role.value == "admin"

    async def test_store_user_login_redirects_to_usuario(self, client: AsyncClient, store_user, flower_store):
        """스토어 사용자 로그인 → /usuario, 담당 꽃집 저장."""
        res = await login(client, "seller", SELLER_PASSWORD)
        assert res.status_code == 303
        assert res.headers["location"] == "/usuario"
        identity = decode_identity(client.cookies.get("user"), client.cookies.get("token"))
        assert identity.assigned_store_id == flower_store["_id"]

    async def test_wrong_password(self, client: AsyncClient, admin_user):
        """잘못된 비밀번호 → 401, 백엔드 메시지 표시, 쿠키 없음."""
        res = await login(client, "admin", "wrong")
        assert res.status_code == 401
        assert res.json()["detail"] == "Credenciales inválidas"
        assert client.cookies.get("token") is None

    async def test_failed_login_keeps_existing_session(self, client: AsyncClient, admin_user):
        """로그인 실패 시 기존 세션 유지."""
        await login(client, "admin", ADMIN_PASSWORD)
        token = client.cookies.get("token")

        res = await login(client, "admin", "wrong")
        assert res.status_code == 401
        assert client.cookies.get("token") == token
        assert (await client.get("/admin")).status_code == 200

    async def test_blank_credentials(self, client: AsyncClient, backend: FakeBackend):
        """빈 입력 → 422, 백엔드 호출 없음."""
        res = await client.post("/login", data={"username": " ", "password": ""})
        assert res.status_code == 422
        assert set(res.json()["detail"]["fields"]) == {"username", "password"}
        assert backend.requests == []

    async def test_login_view_exposes_next(self, client: AsyncClient):
        res = await client.get("/login", params={"next": "/admin/floristerias"})
        assert res.status_code == 200
        assert res.json() == {"next": "/admin/floristerias", "identity": None}

    async def test_backend_down(self, client: AsyncClient, backend: FakeBackend, admin_user):
        """백엔드 오류 → 502, 자격 증명 오류와 구분."""
        backend.fail("POST", "/api/auth/login", 500, "Error interno")
        res = await login(client, "admin", ADMIN_PASSWORD)
        assert res.status_code == 502


class TestGuard:
    """라우트 가드 테스트."""

    async def test_unauthenticated_redirects_to_login_with_next(self, client: AsyncClient, store_user):
        """미인증 /admin/floristerias → /login?next=..., 로그인 후 역할 홈으로."""
        res = await client.get("/admin/floristerias")
        assert res.status_code == 303
        assert res.headers["location"] == "/login?next=%2Fadmin%2Ffloristerias"

        res = await login(client, "seller", SELLER_PASSWORD)
        assert res.headers["location"] == "/usuario"

    async def test_store_user_on_admin_view(self, client: AsyncClient, store_user, backend: FakeBackend):
        """스토어 사용자가 관리자 화면 접근 → /usuario 로 조용히 이동."""
        await login(client, "seller", SELLER_PASSWORD)
        res = await client.get("/admin/usuarios")
        assert res.status_code == 303
        assert res.headers["location"] == "/usuario"
        assert res.content == b""
        assert backend.requests_to("GET", "/api/users") == []

    async def test_admin_on_store_view(self, client: AsyncClient, admin_user):
        await login(client, "admin", ADMIN_PASSWORD)
        res = await client.get("/usuario/productos")
        assert res.status_code == 303
        assert res.headers["location"] == "/admin"

    async def test_corrupted_cookie_is_logged_out(self, client: AsyncClient):
        """손상된 user 쿠키 → 세션 없음, 쿠키 삭제."""
        client.cookies.set("token", "tok")
        client.cookies.set("user", "not-json")
        res = await client.get("/admin")
        assert res.status_code == 303
        assert res.headers["location"] == "/login?next=%2Fadmin"
        assert any("token=" in c for c in res.headers.get_list("set-cookie"))

    async def test_forged_admin_identity_rejected(self, client: AsyncClient, store_user, backend: FakeBackend):
        """스토어 사용자가 user 쿠키를 관리자 신원으로 바꿔도 관리자 화면 불가."""
        await login(client, "seller", SELLER_PASSWORD)
        forged = jwt.encode(
            {"display_name": "seller", "role": "admin", "tkn": hashlib.sha256(client.cookies.get("token").encode()).hexdigest()},
            "guessed-secret",
            algorithm="HS256",
        )
        client.cookies.delete("user")
        client.cookies.set("user", forged)

        res = await client.get("/admin/usuarios")
        assert res.status_code == 303
        assert res.headers["location"] == "/login?next=%2Fadmin%2Fusuarios"
        assert backend.requests_to("GET", "/api/users") == []

    async def test_identity_from_another_session_rejected(
        self, client: AsyncClient, store_user, admin_user, backend: FakeBackend, other_store
    ):
        """다른 세션의 user 쿠키를 내 토큰과 함께 보내도 세션 없음."""
        await login(client, "admin", ADMIN_PASSWORD)
        admin_identity = client.cookies.get("user")
        await client.post("/logout")
        await login(client, "seller", SELLER_PASSWORD)
        client.cookies.delete("user")
        client.cookies.set("user", admin_identity)

        res = await client.get("/admin/usuarios")
        assert res.status_code == 303
        assert res.headers["location"].startswith("/login")

    async def test_forged_store_assignment_rejected(self, client: AsyncClient, store_user, backend: FakeBackend, other_store):
        """담당 꽃집을 바꾼 신원 쿠키 — 다른 꽃집 상품 노출 없음."""
        backend.add_product("Ajeno", other_store["_id"])
        await login(client, "seller", SELLER_PASSWORD)
        header, _, signature = client.cookies.get("user").split(".")
        claims = base64.urlsafe_b64encode(json.dumps({
            "display_name": "seller",
            "role": "usuario",
            "assigned_store_id": other_store["_id"],
        }).encode()).decode().rstrip("=")
        client.cookies.delete("user")
        client.cookies.set("user", f"{header}.{claims}.{signature}")

        res = await client.get("/usuario/productos")
        assert res.status_code == 303
        assert backend.requests_to("GET", f"/api/flores/floristeria/{other_store['_id']}") == []

    async def test_root_redirects_to_login(self, client: AsyncClient):
        res = await client.get("/")
        assert res.status_code == 303
        assert res.headers["location"] == "/login"


class TestLogout:
    """로그아웃 테스트."""

    async def test_logout_clears_session(self, client: AsyncClient, admin_user):
        await login(client, "admin", ADMIN_PASSWORD)
        await client.get("/admin/floristerias")

        res = await client.post("/logout")
        assert res.status_code == 303
        assert res.headers["location"] == "/login"
        assert client.cookies.get("token") is None
        assert (await client.get("/admin")).status_code == 303

    async def test_logout_twice(self, client: AsyncClient, admin_user):
        """로그아웃 두 번 — 오류 없음."""
        await login(client, "admin", ADMIN_PASSWORD)
        assert (await client.post("/logout")).status_code == 303
        assert (await client.post("/logout")).status_code == 303

    async def test_logout_discards_workspace(self, client: AsyncClient, admin_user):
        from flores_admin.main import app

        await login(client, "admin", ADMIN_PASSWORD)
        token = client.cookies.get("token")
        await client.get("/admin/floristerias")
        assert token in app.state.workspaces

        await client.post("/logout")
        assert token not in app.state.workspaces
