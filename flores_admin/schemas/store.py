"""꽃집(Floristería) 스키마 정의.

Florist shop schemas: the record read from ``/floristerias`` and the form
used to create or edit one.
"""

from typing import Any, ClassVar

from pydantic import Field, field_validator

from flores_admin.schemas.common import BackendRecord, FormModel, ImageUpload


class Store(BackendRecord):
    """꽃집 레코드.

    Attributes:
        id: 꽃집 ID (Backend id)
        name: 이름 (Shop name)
        description: 설명 (Description)
        website_url: 웹사이트 주소 (Website URL)
        logo: 로고 이미지 URL (Logo URL, if uploaded)
    """

    name: str = Field(alias="nombre")
    description: str | None = Field(default=None, alias="descripcion")
    website_url: str | None = Field(default=None, alias="url")
    logo: str | None = None


class StoreForm(FormModel):
    """꽃집 생성/수정 폼 — 이름, 설명, URL 필수, 로고 선택.

    Create/edit form. Name, description and website are required; the logo
    is optional and sent as multipart when present.
    """

    image_field: ClassVar[str | None] = "logo"

    name: str = Field(alias="nombre")
    description: str = Field(alias="descripcion")
    website_url: str = Field(alias="url")
    logo: ImageUpload | None = None

    @field_validator("website_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError("Enter a full URL starting with http:// or https://")
        return value

    def wire_fields(self) -> dict[str, Any]:
        return {
            "nombre": self.name,
            "descripcion": self.description,
            "url": self.website_url,
        }
