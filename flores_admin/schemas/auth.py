"""인증 관련 Pydantic 스키마 정의.

Authentication-related schema definitions: roles, the identity held by the
session store, the session itself, and the login request/response shapes.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from flores_admin.schemas.common import ref_id


class Role(str, Enum):
    """사용자 역할 — 백엔드 값 그대로 사용.

    Roles as the backend spells them. ``STORE_USER`` is a user bound to a
    single florist shop.
    """

    ADMIN = "admin"
    STORE_USER = "usuario"

    @property
    def home_path(self) -> str:
        """역할별 홈 경로 (Home view for the role)."""
        return "/admin" if self is Role.ADMIN else "/usuario"


class Identity(BaseModel):
    """로그인한 사용자의 신원 정보.

    Identity of the logged-in user. Created on login, destroyed on logout,
    owned by the session store.

    Attributes:
        user_id: 백엔드 사용자 ID (Backend user id, if sent)
        display_name: 표시 이름 (Name shown in the console)
        role: 역할 (Role)
        assigned_store_id: 담당 꽃집 ID — 스토어 사용자만 (Store id, store users only)
    """

    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    display_name: str
    role: Role
    assigned_store_id: str | None = None

    @field_validator("display_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("display name must not be blank")
        return value

    @classmethod
    def from_backend_user(cls, user: dict[str, Any]) -> "Identity":
        """`/auth/login` 응답의 user 레코드로부터 Identity 를 만듭니다.

        Build an identity from the ``user`` record of the login response.
        The store may arrive populated or as an id.
        """
        return cls(
            user_id=ref_id(user.get("_id") or user.get("id")),
            display_name=user.get("username") or user.get("nombre") or "",
            role=user.get("role"),
            assigned_store_id=ref_id(user.get("floristeria")),
        )


class Session(BaseModel):
    """토큰과 신원 정보의 쌍 — 항상 둘 다 존재하거나 둘 다 없음.

    A credential token paired with its identity. Never partially present.
    """

    model_config = ConfigDict(frozen=True)

    token: str
    identity: Identity

    @property
    def role(self) -> Role:
        return self.identity.role


class LoginRequest(BaseModel):
    """로그인 요청 스키마."""

    username: str
    password: str


class LoginView(BaseModel):
    """로그인 화면 뷰 모델.

    Attributes:
        next: 로그인 전 요청했던 경로 (Originally requested path, if any)
        identity: 이미 로그인된 경우의 신원 (Current identity, if logged in)
    """

    next: str | None = None
    identity: Identity | None = None
