"""카테고리 서비스 — 조회와 생성만 지원.

Category Service. The backend exposes only listing and creation for
categories; update and delete are rejected with BadRequestError.
"""

from typing import ClassVar

import httpx

from flores_admin.repositories.category_repository import category_repository
from flores_admin.schemas.category import Category, CategoryForm
from flores_admin.services.resource_controller import ResourceController


class CategoryController(ResourceController[Category, CategoryForm]):
    """카테고리 목록/생성. 목록은 꽃집 ID 로 필터링할 수 있습니다."""

    operations: ClassVar[frozenset[str]] = frozenset({"list", "create"})

    def __init__(self, client: httpx.AsyncClient, **options: float) -> None:
        super().__init__(client, category_repository, CategoryForm, **options)
