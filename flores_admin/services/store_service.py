"""꽃집 서비스 — 꽃집 CRUD 컨트롤러.

Store Service — Controller for florist shops. The backend supports the full
set of operations on ``/floristerias``.
"""

import httpx

from flores_admin.repositories.store_repository import store_repository
from flores_admin.schemas.store import Store, StoreForm
from flores_admin.services.resource_controller import ResourceController


class StoreController(ResourceController[Store, StoreForm]):
    """꽃집 목록/상세/생성/수정/삭제."""

    def __init__(self, client: httpx.AsyncClient, **options: float) -> None:
        super().__init__(client, store_repository, StoreForm, **options)
