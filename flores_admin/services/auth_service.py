"""인증 서비스 — 백엔드 로그인 및 세션 생성.

Auth Service — Exchanges credentials for a token at ``POST /auth/login`` and
hands the result to the session store. A rejected login leaves any existing
session exactly as it was.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from flores_admin.schemas.auth import Identity, LoginRequest, Session
from flores_admin.services.session_store import SessionStore
from flores_admin.utils.exceptions import BackendError, UnauthorizedError
from flores_admin.utils.http_client import json_body, send

LOGIN_PATH: str = "/auth/login"

# 자격 증명 거부로 간주하는 백엔드 응답 코드 (Backend statuses that mean "credentials rejected")
_REJECTED_STATUSES: frozenset[int] = frozenset({400, 401, 403, 404})


class AuthService:
    """로그인 흐름을 처리하는 서비스.

    Service handling the login flow. Logout needs no backend call and lives
    on the session store.
    """

    async def login(
        self,
        client: httpx.AsyncClient,
        store: SessionStore,
        data: LoginRequest,
    ) -> Session:
        """자격 증명으로 로그인하고 세션을 저장합니다.

        Log in with username/password and persist the session.

        Args:
            client: 토큰 없는 클라이언트 (Unauthenticated client)
            store: 세션 저장소 (Session store to write on success)
            data: 로그인 요청 (Credentials)

        Returns:
            Session: 새 세션 (The new session)

        Raises:
            UnauthorizedError: 자격 증명 거부 또는 콘솔 권한 없는 계정
                               (Credentials rejected, or account without console access)
            BackendError: 서버 오류 (Server error)
            BackendUnavailableError: 연결 실패 (Backend unreachable)
        """
        try:
            response = await send(client, "POST", LOGIN_PATH, json=data.model_dump())
        except BackendError as exc:
            if exc.upstream_status in _REJECTED_STATUSES:
                raise UnauthorizedError(str(exc.detail)) from exc
            raise

        body: Any = json_body(response)
        if not isinstance(body, dict):
            body = {}
        token = body.get("token") or body.get("access_token")
        user = body.get("user") or body.get("usuario")
        if not token or not isinstance(user, dict):
            raise BackendError("The login response did not include a token and user")

        try:
            identity = Identity.from_backend_user(user)
        except ValidationError as exc:
            raise UnauthorizedError("This account has no console access") from exc

        return store.login(token, identity)


auth_service: AuthService = AuthService()
