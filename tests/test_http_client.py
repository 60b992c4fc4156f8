"""클라이언트 팩토리 및 요청 헬퍼 테스트.

Client factory and request helper tests — Bearer header attachment and the
translation of backend failures into console exceptions.
"""

import httpx
import pytest

from flores_admin.utils.exceptions import BackendError, BackendUnavailableError, NotFoundError
from flores_admin.utils.http_client import ClientFactory, error_detail, send
from tests.fake_backend import FakeBackend


class TestClientFactory:
    """팩토리 헤더 테스트."""

    async def test_token_attaches_bearer(self, factory: ClientFactory, backend: FakeBackend, admin_token):
        """토큰이 있으면 Authorization: Bearer 헤더."""
        async with factory.create(admin_token) as http:
            await send(http, "GET", "/floristerias")
        assert backend.requests[-1].authorization == f"Bearer {admin_token}"

    async def test_no_token_no_header(self, factory: ClientFactory, backend: FakeBackend):
        """토큰이 없으면 Authorization 헤더 없음."""
        async with factory.create() as http:
            with pytest.raises(BackendError) as exc_info:
                await send(http, "GET", "/floristerias")
        assert backend.requests[-1].authorization is None
        assert exc_info.value.upstream_status == 401

    def test_from_settings_uses_fallback_url(self):
        factory = ClientFactory.from_settings()
        assert factory.base_url.endswith("/api")


class TestSend:
    """오류 변환 테스트."""

    async def test_not_found_distinct(self, admin_http: httpx.AsyncClient):
        """404 + not_found → NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            await send(admin_http, "GET", "/floristerias/missing", not_found="Store not found")
        assert exc_info.value.detail == "Store not found"

    async def test_server_error_keeps_message(self, admin_http: httpx.AsyncClient, backend: FakeBackend):
        """5xx → BackendError, 백엔드 메시지 보존."""
        backend.fail("GET", "/api/floristerias", 500, "Base de datos caída")
        with pytest.raises(BackendError) as exc_info:
            await send(admin_http, "GET", "/floristerias")
        assert exc_info.value.detail == "Base de datos caída"
        assert exc_info.value.upstream_status == 500
        assert exc_info.value.status_code == 502

    async def test_unreachable_backend(self):
        """연결 실패 → BackendUnavailableError."""
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        factory = ClientFactory("http://backend/api", transport=httpx.MockTransport(_refuse))
        async with factory.create("tok") as http:
            with pytest.raises(BackendUnavailableError):
                await send(http, "GET", "/floristerias")

    async def test_timeout(self):
        def _slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        factory = ClientFactory("http://backend/api", transport=httpx.MockTransport(_slow))
        async with factory.create("tok") as http:
            with pytest.raises(BackendUnavailableError) as exc_info:
                await send(http, "GET", "/flores")
        assert exc_info.value.status_code == 504


class TestErrorDetail:
    def test_message_field_preferred(self):
        response = httpx.Response(400, json={"message": "Nombre requerido", "detail": "x"})
        assert error_detail(response) == "Nombre requerido"

    def test_plain_text(self):
        assert error_detail(httpx.Response(500, text="Bad Gateway")) == "Bad Gateway"

    def test_empty_body(self):
        assert error_detail(httpx.Response(503)) == "HTTP 503"
