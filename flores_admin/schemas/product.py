"""상품(꽃다발/Arreglo) 스키마 정의.

Product (floral arrangement) schemas.

Category model:
    다중 값 `categorias` 배열이 기준입니다. 구버전의 단일 문자열 `categoria`
    는 입력 시 한 개짜리 목록으로 변환합니다.
    The multi-valued ``categorias`` array is canonical. The legacy single
    string ``categoria`` is accepted on input and migrated to a one-element
    list, both for backend records and for submitted forms.
"""

from decimal import Decimal
from typing import Any, ClassVar

from pydantic import Field, field_validator, model_validator

from flores_admin.schemas.common import BackendRecord, FormModel, ImageUpload, ref_id, ref_name


def _migrate_legacy_category(data: Any) -> Any:
    """`categoria` (단일 문자열) → `categorias` (목록) 변환."""
    if not isinstance(data, dict):
        return data
    legacy = data.get("categoria")
    if legacy and not data.get("categorias") and not data.get("category_ids"):
        data = {**data, "categorias": [legacy]}
    return data


class Product(BackendRecord):
    """상품 레코드.

    Attributes:
        id: 상품 ID (Backend id)
        name: 이름 (Name)
        description: 설명 (Description)
        price: 가격 (Price, non-negative)
        stock: 재고 (Units in stock)
        store_id: 소속 꽃집 ID (Owning store id)
        category_ids: 카테고리 ID 목록 (Category ids)
        category_names: 카테고리 이름 — 채워진 응답일 때만 (Names, when populated)
        image: 이미지 URL (Image URL)
    """

    name: str = Field(alias="nombre")
    description: str | None = Field(default=None, alias="descripcion")
    price: Decimal = Field(default=Decimal("0"), alias="precio")
    stock: int = 0
    store_id: str | None = Field(default=None, alias="floristeria")
    category_ids: list[str] = Field(default_factory=list, alias="categorias")
    category_names: list[str] = Field(default_factory=list)
    image: str | None = Field(default=None, alias="imagen")

    @model_validator(mode="before")
    @classmethod
    def _normalise_relations(cls, data: Any) -> Any:
        data = _migrate_legacy_category(data)
        if not isinstance(data, dict):
            return data
        raw = data.get("categorias") or []
        ids = [cid for cid in (ref_id(c) for c in raw) if cid]
        names = [name for name in (ref_name(c) for c in raw) if name]
        # 구버전 문자열 카테고리는 이름이기도 함 (Legacy string doubles as the name)
        if not names and data.get("categoria"):
            names = [str(data["categoria"])]
        if not names:
            names = list(data.get("category_names") or [])
        return {**data, "categorias": ids, "category_names": names}

    @field_validator("store_id", mode="before")
    @classmethod
    def _store_ref(cls, value: Any) -> str | None:
        return ref_id(value)


class ProductForm(FormModel):
    """상품 생성/수정 폼.

    Required: name, description, price >= 0, stock >= 0, store and at least
    one category. The image is optional.
    """

    image_field: ClassVar[str | None] = "image"

    name: str = Field(alias="nombre")
    description: str = Field(alias="descripcion")
    price: Decimal = Field(ge=0, alias="precio")
    stock: int = Field(ge=0)
    store_id: str = Field(alias="floristeria")
    category_ids: list[str] = Field(min_length=1, alias="categorias")
    image: ImageUpload | None = Field(default=None, alias="imagen")

    @model_validator(mode="before")
    @classmethod
    def _legacy_category(cls, data: Any) -> Any:
        return _migrate_legacy_category(data)

    @field_validator("category_ids", mode="before")
    @classmethod
    def _clean_categories(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        seen: list[str] = []
        for item in value:
            item = str(item).strip()
            if item and item not in seen:
                seen.append(item)
        return seen

    def wire_fields(self) -> dict[str, Any]:
        return {
            "nombre": self.name,
            "descripcion": self.description,
            "precio": self.price,
            "stock": self.stock,
            "floristeria": self.store_id,
            "categorias": list(self.category_ids),
        }
