"""백엔드 HTTP 클라이언트 팩토리 및 요청 헬퍼.

Backend HTTP client factory and request helpers.

ClientFactory.create(token) 는 토큰이 있으면 모든 요청에
``Authorization: Bearer <token>`` 헤더를 붙이고, 없으면 붙이지 않습니다.
The factory holds no session state of its own; every client it returns is
bound to exactly the token it was created with.
"""

from typing import Any

import httpx

from flores_admin.config import Settings, settings
from flores_admin.utils.exceptions import BackendError, BackendUnavailableError, NotFoundError


class ClientFactory:
    """인증된 httpx.AsyncClient 를 생성하는 팩토리.

    Produces ``httpx.AsyncClient`` instances pointed at the backend.

    Attributes:
        base_url: 백엔드 기본 주소 (Backend base URL)
        timeout: 요청 타임아웃 초 (Request timeout in seconds)
        transport: 대체 전송 계층 — 테스트용 (Optional transport, e.g. ASGITransport in tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url: str = base_url
        self.timeout: float = timeout
        self.transport: httpx.AsyncBaseTransport | None = transport

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ClientFactory":
        return cls(base_url=config.API_URL, timeout=config.HTTP_TIMEOUT_SECONDS)

    def create(self, token: str | None = None) -> httpx.AsyncClient:
        """토큰에 바인딩된 클라이언트를 생성합니다.

        Create a client bound to ``token``. Without a token no
        Authorization header is attached.
        """
        headers: dict[str, str] = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )


def error_detail(response: httpx.Response) -> str:
    """백엔드 오류 응답에서 메시지를 추출합니다.

    Pull a human-readable message from an error response: the JSON
    ``message`` field (what the backend sends), then ``detail``/``error``,
    then the raw text.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:300] if text else f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


async def send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    not_found: str | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """요청을 보내고 실패를 콘솔 예외로 변환합니다.

    Send a request and translate failures:
        - 타임아웃/연결 실패 → BackendUnavailableError
        - 404 이고 not_found 메시지가 주어짐 → NotFoundError
        - 그 외 4xx/5xx → BackendError (upstream status 보존)

    Args:
        client: 인증된 클라이언트 (Authenticated client)
        method: HTTP 메서드 (HTTP method)
        url: 기본 주소 기준 상대 경로 (Path relative to the base URL)
        not_found: 404 를 NotFoundError 로 바꿀 때의 메시지 (Message for a distinct 404)
        **kwargs: httpx 요청 인자 (json=, data=, files=, params=)
    """
    try:
        response: httpx.Response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as exc:
        raise BackendUnavailableError(f"The server did not answer in time ({method} {url})") from exc
    except httpx.RequestError as exc:
        raise BackendUnavailableError(f"The server could not be reached: {exc}") from exc

    if response.status_code == 404 and not_found is not None:
        raise NotFoundError(not_found)
    if response.is_error:
        raise BackendError(error_detail(response), upstream_status=response.status_code)
    return response


def json_body(response: httpx.Response) -> Any:
    """성공 응답 본문을 JSON 으로 읽습니다. 본문이 없으면 None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise BackendError("The server returned an unreadable response", upstream_status=response.status_code) from exc
