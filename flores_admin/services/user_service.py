"""사용자 서비스 — 계정 조회/생성/삭제 (수정 없음).

User Service. Accounts can be listed, read, created and deleted; the
backend has no update for them.
"""

from typing import ClassVar

import httpx

from flores_admin.repositories.user_repository import user_repository
from flores_admin.schemas.user import UserAccount, UserForm
from flores_admin.services.resource_controller import ResourceController


class UserController(ResourceController[UserAccount, UserForm]):
    operations: ClassVar[frozenset[str]] = frozenset({"list", "get", "create", "delete"})

    def __init__(self, client: httpx.AsyncClient, **options: float) -> None:
        super().__init__(client, user_repository, UserForm, **options)
