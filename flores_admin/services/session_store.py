"""세션 저장소 — "누가 로그인했는가"의 단일 진실 공급원.

Session Store — Single source of truth for who is logged in.

세션은 두 개의 고정 키(token, user)로 영속 저장소에 저장됩니다.
The session is persisted under two fixed keys: the credential token and
the identity, signed as an HS256 JWT bound to that token. It is either
fully present or fully absent:
    - login() 은 두 키를 함께 기록 (writes both keys)
    - logout() 은 두 키를 함께 삭제, 반복 호출해도 안전 (idempotent)
    - current() 는 네트워크 없이 동기적으로 읽음; 한쪽만 있거나 손상된
      값은 "세션 없음"으로 처리하고 잔여 키를 정리
      (partial, corrupted or forged state reads as "no session" and is scrubbed)

Only SessionStore writes these keys. Readers get the immutable Session.
"""

import hashlib
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

import jwt
from pydantic import ValidationError
from starlette.responses import Response

from flores_admin.config import settings
from flores_admin.schemas.auth import Identity, Session


class SessionStorage(Protocol):
    """영속 키-값 저장소 인터페이스 (localStorage 와 동일한 형태)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """딕셔너리 기반 저장소 — 라이브러리 사용 및 테스트용."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class CookieStorage:
    """브라우저 쿠키 기반 저장소.

    Cookie-backed storage. Reads come from the request cookies; writes are
    buffered and applied to whichever response is finally sent (see
    ``apply``), so redirects and JSON views persist the session the same way.
    """

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self._data: dict[str, str] = dict(cookies)
        # None 값 = 삭제 예약 (None marks a pending delete)
        self._pending: dict[str, str | None] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._pending[key] = value

    def remove(self, key: str) -> None:
        # 요청에 없던 키는 삭제 쿠키도 보내지 않음 (nothing to expire)
        existed = self._data.pop(key, None) is not None or key in self._pending
        if existed:
            self._pending[key] = None

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Response) -> None:
        """예약된 쓰기를 응답 쿠키로 반영합니다."""
        max_age = int(timedelta(days=settings.SESSION_COOKIE_MAX_AGE_DAYS).total_seconds())
        for key, value in self._pending.items():
            if value is None:
                response.delete_cookie(key, path="/")
            else:
                response.set_cookie(
                    key,
                    value,
                    max_age=max_age,
                    path="/",
                    httponly=True,
                    secure=settings.SESSION_COOKIE_SECURE,
                    samesite="lax",
                )
        self._pending.clear()


def _token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def encode_identity(identity: Identity, token: str) -> str:
    """Identity → 서명된 HS256 JWT.

    The identity claims are signed with ``SECRET_KEY`` and bound to the
    credential token through its digest, so neither cookie can be edited or
    paired with another session's.
    """
    payload: dict[str, Any] = identity.model_dump(mode="json")
    expire = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_COOKIE_MAX_AGE_DAYS)
    payload.update({"tkn": _token_digest(token), "exp": expire})
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_identity(value: str, token: str) -> Identity | None:
    """서명된 JWT → Identity. 서명·만료·토큰 불일치 또는 손상된 값은 None."""
    try:
        payload = jwt.decode(value, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    if payload.pop("tkn", None) != _token_digest(token):
        return None
    payload.pop("exp", None)
    try:
        return Identity.model_validate(payload)
    except ValidationError:
        return None


class SessionStore:
    """세션 소유자 — login/logout/current 만 노출.

    Owns the session. Wraps a SessionStorage and keeps a hydrated copy so
    repeated reads in one request do not re-decode.

    Attributes:
        token_key: 토큰 키 이름 (Storage key for the token)
        user_key: 신원 키 이름 (Storage key for the identity)
    """

    def __init__(
        self,
        storage: SessionStorage,
        token_key: str = settings.SESSION_TOKEN_KEY,
        user_key: str = settings.SESSION_USER_KEY,
    ) -> None:
        self._storage: SessionStorage = storage
        self.token_key: str = token_key
        self.user_key: str = user_key
        self._session: Session | None = None
        self._hydrated: bool = False

    @property
    def storage(self) -> SessionStorage:
        return self._storage

    def login(self, token: str, identity: Identity) -> Session:
        """토큰과 신원을 함께 저장합니다.

        Store token and identity together. An empty token is rejected
        before anything is written.

        Raises:
            ValueError: 토큰이 비어 있음 (Blank token)
        """
        if not token or not token.strip():
            raise ValueError("token must not be empty")
        session = Session(token=token, identity=identity)
        encoded = encode_identity(identity, token)
        self._storage.set(self.token_key, token)
        self._storage.set(self.user_key, encoded)
        self._session = session
        self._hydrated = True
        return session

    def logout(self) -> None:
        """두 키를 모두 삭제합니다. 이미 로그아웃 상태여도 안전."""
        self._storage.remove(self.token_key)
        self._storage.remove(self.user_key)
        self._session = None
        self._hydrated = True

    def current(self) -> Session | None:
        """현재 세션 또는 None — 네트워크 호출 없음."""
        if not self._hydrated:
            self._session = self._hydrate()
            self._hydrated = True
        return self._session

    def _hydrate(self) -> Session | None:
        token = self._storage.get(self.token_key)
        encoded = self._storage.get(self.user_key)
        if not token and not encoded:
            return None

        identity = decode_identity(encoded, token) if token and encoded else None
        if not token or identity is None:
            # 부분/손상 상태 정리 — scrub partial or corrupted leftovers
            self._storage.remove(self.token_key)
            self._storage.remove(self.user_key)
            return None
        return Session(token=token, identity=identity)
