"""테스트 인프라 — 가짜 백엔드, 클라이언트 팩토리, 콘솔 httpx 클라이언트 픽스처.

Test infrastructure — Fake backend, client factory, and console httpx client
fixtures. The console talks to the in-process fake backend through
``httpx.ASGITransport``; the tests talk to the console the same way.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient, Response

from flores_admin.main import app
from flores_admin.services.workspace import WorkspaceRegistry
from flores_admin.utils.http_client import ClientFactory
from tests.fake_backend import FakeBackend

BACKEND_URL: str = "http://backend/api"

ADMIN_PASSWORD: str = "admin123!"
SELLER_PASSWORD: str = "seller123!"


# ---------------------------------------------------------------------------
# 가짜 백엔드 및 팩토리
# ---------------------------------------------------------------------------
@pytest.fixture
def backend() -> FakeBackend:
    """테스트마다 새로운 가짜 백엔드."""
    return FakeBackend()


@pytest.fixture
def factory(backend: FakeBackend) -> ClientFactory:
    """가짜 백엔드를 가리키는 클라이언트 팩토리."""
    return ClientFactory(base_url=BACKEND_URL, timeout=5.0, transport=ASGITransport(app=backend.app))


@pytest_asyncio.fixture
async def client(factory: ClientFactory) -> AsyncGenerator[AsyncClient, None]:
    """콘솔 테스트 클라이언트 — 작업공간 레지스트리를 가짜 백엔드로 교체합니다."""
    previous = app.state.workspaces
    app.state.workspaces = WorkspaceRegistry(factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await app.state.workspaces.close_all()
    app.state.workspaces = previous


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest.fixture
def flower_store(backend: FakeBackend) -> dict[str, Any]:
    """테스트 꽃집을 생성합니다."""
    return backend.add_store("Rosas y Más")


@pytest.fixture
def other_store(backend: FakeBackend) -> dict[str, Any]:
    return backend.add_store("Tulipanes del Sur", url="https://tulipanes.example.com")


@pytest.fixture
def admin_user(backend: FakeBackend) -> dict[str, Any]:
    """관리자 계정을 생성합니다."""
    return backend.add_user("admin", ADMIN_PASSWORD, role="admin")


@pytest.fixture
def store_user(backend: FakeBackend, flower_store: dict[str, Any]) -> dict[str, Any]:
    """꽃집에 배정된 스토어 사용자 계정을 생성합니다."""
    return backend.add_user("seller", SELLER_PASSWORD, role="usuario", store_id=flower_store["_id"])


@pytest.fixture
def admin_token(backend: FakeBackend, admin_user: dict[str, Any]) -> str:
    return backend.issue_token(admin_user)


@pytest_asyncio.fixture
async def admin_http(factory: ClientFactory, admin_token: str) -> AsyncGenerator[AsyncClient, None]:
    """관리자 토큰에 바인딩된 백엔드 클라이언트 (컨트롤러 테스트용)."""
    async with factory.create(admin_token) as http:
        yield http


async def login(client: AsyncClient, username: str, password: str) -> Response:
    """콘솔 로그인 헬퍼 — 쿠키는 클라이언트에 저장됩니다."""
    return await client.post("/login", data={"username": username, "password": password})


def png_bytes(size: int = 64) -> bytes:
    """테스트용 PNG 바이트 (Fake PNG payload of the given size)."""
    header = b"\x89PNG\r\n\x1a\n"
    return header + b"\x00" * max(size - len(header), 0)
