"""카테고리 스키마 정의.

Category schemas. Categories belong optionally to a store and relate to
products many-to-many.
"""

from typing import Any

from pydantic import Field, field_validator, model_validator

from flores_admin.schemas.common import BackendRecord, FormModel, ref_id

DEFAULT_CATEGORY_ICON: str = "🌸"


class Category(BackendRecord):
    """카테고리 레코드."""

    name: str = Field(alias="nombre")
    description: str | None = Field(default=None, alias="descripcion")
    icon: str | None = Field(default=None, alias="icono")
    store_id: str | None = Field(default=None, alias="floristeria")

    @field_validator("store_id", mode="before")
    @classmethod
    def _store_ref(cls, value: Any) -> str | None:
        return ref_id(value)


class CategoryForm(FormModel):
    """카테고리 생성 폼 — 꽃집 선택이 필요함.

    A store must be chosen before a category can be created. Description and
    icon fall back to ``"Category <name>"`` and a flower icon.
    """

    name: str = Field(alias="nombre")
    store_id: str = Field(alias="floristeria")
    description: str | None = Field(default=None, alias="descripcion")
    icon: str | None = Field(default=None, alias="icono")

    @model_validator(mode="after")
    def _defaults(self) -> "CategoryForm":
        if self.description is None:
            self.description = f"Category {self.name}"
        if self.icon is None:
            self.icon = DEFAULT_CATEGORY_ICON
        return self

    def wire_fields(self) -> dict[str, Any]:
        return {
            "nombre": self.name,
            "descripcion": self.description,
            "icono": self.icon,
            "floristeria": self.store_id,
        }
