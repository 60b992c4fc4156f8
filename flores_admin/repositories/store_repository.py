"""꽃집 레포지토리 — /floristerias."""

from flores_admin.repositories.base import ResourceRepository
from flores_admin.schemas.store import Store


class StoreRepository(ResourceRepository[Store]):
    """꽃집 REST 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Store, "/floristerias", "Store")


store_repository: StoreRepository = StoreRepository()
