"""상품 레포지토리 — /flores.

Product Repository. Listing can be scoped to one store through
``GET /flores/floristeria/{store_id}``.
"""

from flores_admin.repositories.base import ResourceRepository
from flores_admin.schemas.product import Product


class ProductRepository(ResourceRepository[Product]):
    """상품 REST 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Product, "/flores", "Product")

    def list_path(self, filter_value: str | None = None) -> str:
        # 꽃집 필터 — 특정 꽃집의 상품만 (Products of one store)
        if filter_value:
            return f"{self.path}/floristeria/{filter_value}"
        return self.path


product_repository: ProductRepository = ProductRepository()
