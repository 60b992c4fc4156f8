"""사용자 레포지토리 — /users."""

from flores_admin.repositories.base import ResourceRepository
from flores_admin.schemas.user import UserAccount


class UserRepository(ResourceRepository[UserAccount]):
    """사용자 REST 레포지토리."""

    def __init__(self) -> None:
        super().__init__(UserAccount, "/users", "User")


user_repository: UserRepository = UserRepository()
