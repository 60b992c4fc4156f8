"""세션 저장소 테스트 — 로그인/로그아웃/하이드레이션.

Session store tests — Login, logout, and hydration from persisted keys,
including partial and corrupted state.
"""

import base64
import hashlib
import json

import jwt
import pytest

from flores_admin.config import settings
from flores_admin.schemas.auth import Identity, Role
from flores_admin.services.session_store import (
    CookieStorage,
    MemoryStorage,
    SessionStore,
    decode_identity,
    encode_identity,
)
from starlette.responses import Response


def _identity(**overrides) -> Identity:
    data = {"user_id": "u1", "display_name": "maria", "role": Role.STORE_USER, "assigned_store_id": "s1"}
    data.update(overrides)
    return Identity(**data)


class TestSessionLogin:
    """로그인 테스트."""

    def test_login_writes_both_keys(self):
        """로그인 시 token/user 두 키 모두 저장."""
        storage = MemoryStorage()
        store = SessionStore(storage)
        session = store.login("tok-1", _identity())

        assert session.token == "tok-1"
        assert storage.get("token") == "tok-1"
        assert decode_identity(storage.get("user"), "tok-1") == _identity()
        assert store.current() == session

    def test_login_empty_token_rejected(self):
        """빈 토큰은 저장 전에 거부."""
        storage = MemoryStorage()
        store = SessionStore(storage)
        with pytest.raises(ValueError):
            store.login("   ", _identity())
        assert storage.keys() == []
        assert store.current() is None

    def test_login_replaces_previous_session(self):
        """두 번째 로그인은 이전 세션을 교체."""
        store = SessionStore(MemoryStorage())
        store.login("tok-1", _identity())
        store.login("tok-2", _identity(display_name="admin", role=Role.ADMIN, assigned_store_id=None))
        assert store.current().token == "tok-2"
        assert store.current().role is Role.ADMIN


class TestSessionLogout:
    """로그아웃 테스트."""

    def test_logout_removes_both_keys(self):
        storage = MemoryStorage()
        store = SessionStore(storage)
        store.login("tok-1", _identity())
        store.logout()
        assert storage.keys() == []
        assert store.current() is None

    def test_logout_twice_is_safe(self):
        """로그아웃 반복 호출 — 오류 없음."""
        store = SessionStore(MemoryStorage())
        store.logout()
        store.logout()
        assert store.current() is None


class TestSessionHydration:
    """저장된 키에서 세션 복원 테스트."""

    def test_hydrates_from_storage(self):
        """새 저장소 인스턴스가 저장된 세션을 읽음 (재시작 후)."""
        storage = MemoryStorage()
        SessionStore(storage).login("tok-1", _identity())

        fresh = SessionStore(MemoryStorage({"token": storage.get("token"), "user": storage.get("user")}))
        session = fresh.current()
        assert session is not None
        assert session.identity.display_name == "maria"
        assert session.identity.assigned_store_id == "s1"

    def test_token_without_user_is_no_session(self):
        """토큰만 있으면 세션 없음, 잔여 키 정리."""
        storage = MemoryStorage({"token": "tok-1"})
        assert SessionStore(storage).current() is None
        assert storage.keys() == []

    def test_user_without_token_is_no_session(self):
        storage = MemoryStorage({"user": encode_identity(_identity(), "tok-1")})
        assert SessionStore(storage).current() is None
        assert storage.keys() == []

    def test_corrupted_user_is_no_session(self):
        """손상된 user 값 — 세션 없음."""
        storage = MemoryStorage({"token": "tok-1", "user": "%%%not-base64%%%"})
        assert SessionStore(storage).current() is None
        assert storage.keys() == []

    def test_unknown_role_is_no_session(self):
        """서명은 유효하나 스키마에 맞지 않는 신원 — 세션 없음."""
        forged = jwt.encode(
            {"display_name": "maria", "role": "root", "tkn": hashlib.sha256(b"tok-1").hexdigest()},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        storage = MemoryStorage({"token": "tok-1", "user": forged})
        assert SessionStore(storage).current() is None


class TestSignedIdentity:
    """서명된 신원 쿠키 테스트 — 변조/교차 사용 거부."""

    def test_wrong_key_is_no_session(self):
        """다른 키로 서명한 관리자 신원 — 세션 없음, 정리."""
        forged = jwt.encode(
            {"display_name": "maria", "role": "admin", "tkn": hashlib.sha256(b"tok-1").hexdigest()},
            "not-the-secret",
            algorithm="HS256",
        )
        storage = MemoryStorage({"token": "tok-1", "user": forged})
        assert SessionStore(storage).current() is None
        assert storage.keys() == []

    def test_unsigned_identity_is_no_session(self):
        """서명 없는 base64 JSON 신원 — 세션 없음."""
        raw = json.dumps({"display_name": "maria", "role": "admin"}).encode()
        unsigned = base64.urlsafe_b64encode(raw).decode().rstrip("=")
        storage = MemoryStorage({"token": "tok-1", "user": unsigned})
        assert SessionStore(storage).current() is None

    def test_identity_bound_to_token(self):
        """다른 세션의 토큰과 짝지은 신원 — 세션 없음."""
        storage = MemoryStorage({"token": "tok-2", "user": encode_identity(_identity(), "tok-1")})
        assert SessionStore(storage).current() is None
        assert decode_identity(encode_identity(_identity(), "tok-1"), "tok-2") is None

    def test_edited_claims_rejected(self):
        """페이로드만 바꾼 신원 (서명 유지) — 거부."""
        header, _, signature = encode_identity(_identity(), "tok-1").split(".")
        claims = base64.urlsafe_b64encode(
            json.dumps({"display_name": "maria", "role": "usuario", "assigned_store_id": "s2"}).encode()
        ).decode().rstrip("=")
        assert decode_identity(f"{header}.{claims}.{signature}", "tok-1") is None


class TestCookieStorage:
    """쿠키 저장소 테스트."""

    def test_apply_sets_cookies(self):
        """로그인 후 응답에 두 쿠키 설정."""
        storage = CookieStorage({})
        SessionStore(storage).login("tok-1", _identity())
        assert storage.dirty

        response = Response()
        storage.apply(response)
        cookies = response.headers.getlist("set-cookie")
        assert any(c.startswith("token=tok-1") for c in cookies)
        assert any(c.startswith("user=") for c in cookies)
        assert all("HttpOnly" in c for c in cookies)
        assert not storage.dirty

    def test_logout_without_cookies_sends_nothing(self):
        """쿠키가 없던 요청의 로그아웃 — 삭제 쿠키 없음."""
        storage = CookieStorage({})
        SessionStore(storage).logout()
        assert not storage.dirty

    def test_logout_expires_existing_cookies(self):
        storage = CookieStorage({"token": "tok-1", "user": encode_identity(_identity(), "tok-1")})
        SessionStore(storage).logout()

        response = Response()
        storage.apply(response)
        cookies = response.headers.getlist("set-cookie")
        assert len(cookies) == 2
        assert all("Max-Age=0" in c or "expires=" in c.lower() for c in cookies)
