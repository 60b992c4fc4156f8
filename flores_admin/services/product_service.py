"""상품 서비스 — 상품 CRUD 및 꽃집 범위 접근.

Product Service — Controller for products (floral arrangements).

Store scoping:
    list(filter_value=store_id) 는 ``GET /flores/floristeria/{store_id}`` 를,
    list() 는 ``GET /flores`` 를 호출합니다.
    Store users only ever see products of their assigned store; a product
    of another store reads as "not found" rather than "forbidden".
"""

from collections.abc import Mapping
from typing import Any

import httpx

from flores_admin.repositories.product_repository import product_repository
from flores_admin.schemas.product import Product, ProductForm
from flores_admin.services.resource_controller import ResourceController
from flores_admin.utils.exceptions import NotFoundError


class ProductController(ResourceController[Product, ProductForm]):
    """상품 목록/상세/생성/수정/삭제."""

    def __init__(self, client: httpx.AsyncClient, **options: float) -> None:
        super().__init__(client, product_repository, ProductForm, **options)

    async def get_in_store(self, record_id: str, store_id: str) -> Product:
        """지정 꽃집의 상품만 조회합니다.

        Args:
            record_id: 상품 ID (Product id)
            store_id: 담당 꽃집 ID (Assigned store id)

        Raises:
            NotFoundError: 없거나 다른 꽃집의 상품 (Missing, or owned by another store)
        """
        product = await self.get_one(record_id)
        if product.store_id != store_id:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def scoped_form(data: Mapping[str, Any], store_id: str) -> dict[str, Any]:
        """폼 데이터의 꽃집을 담당 꽃집으로 고정합니다 (Force the assigned store)."""
        scoped = {key: value for key, value in data.items() if key != "store_id"}
        scoped["floristeria"] = store_id
        return scoped
