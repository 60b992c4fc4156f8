"""카테고리 레포지토리 — /categorias (조회/생성만)."""

from flores_admin.repositories.base import ResourceRepository
from flores_admin.schemas.category import Category


class CategoryRepository(ResourceRepository[Category]):
    """카테고리 REST 레포지토리.

    Category Repository. The backend only lists and creates categories;
    a store filter is passed as the ``floristeria`` query parameter.
    """

    def __init__(self) -> None:
        super().__init__(Category, "/categorias", "Category")

    def list_params(self, filter_value: str | None = None) -> dict[str, str] | None:
        return {"floristeria": filter_value} if filter_value else None


category_repository: CategoryRepository = CategoryRepository()
