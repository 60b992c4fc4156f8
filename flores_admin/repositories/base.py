"""기본 REST 레포지토리 — 모든 리소스 레포지토리의 부모 클래스.

Base REST Repository — Parent class for all backend resource repositories.
Wraps the conventional ``GET/POST/PUT/DELETE <path>[/<id>]`` calls of one
resource and converts between backend JSON and typed records.

Usage:
    class StoreRepository(ResourceRepository[Store]):
        def __init__(self) -> None:
            super().__init__(Store, "/floristerias", "Store")
"""

from decimal import Decimal
from typing import Any, Generic, TypeVar

import httpx
from pydantic import ValidationError

from flores_admin.schemas.common import BackendRecord, FormModel
from flores_admin.utils.exceptions import BackendError
from flores_admin.utils.http_client import json_body, send

# 제네릭 타입 변수 — 백엔드 레코드 모델을 나타냄
# Generic type variable representing a backend record model
RecordType = TypeVar("RecordType", bound=BackendRecord)


def encode_form(form: FormModel) -> dict[str, Any]:
    """폼을 httpx 요청 인자로 변환합니다.

    Encode a form as request keyword arguments: multipart (``data=`` +
    ``files=``) when an image is attached, a JSON body otherwise. Only
    unset optional fields are left out.
    """
    fields: dict[str, Any] = {k: v for k, v in form.wire_fields().items() if v is not None}
    image = form.attachment()

    if image is None:
        return {"json": {k: (float(v) if isinstance(v, Decimal) else v) for k, v in fields.items()}}

    data: dict[str, Any] = {
        k: [str(item) for item in v] if isinstance(v, list) else str(v)
        for k, v in fields.items()
    }
    field_info = type(form).model_fields[form.image_field]
    return {"data": data, "files": {field_info.alias or form.image_field: image.as_file()}}


class ResourceRepository(Generic[RecordType]):
    """제네릭 REST 레포지토리.

    Generic repository for one backend resource.

    Attributes:
        model: 레코드 모델 클래스 (Record model class)
        path: 리소스 경로 (Collection path, e.g. "/flores")
        label: 메시지용 이름 (Human label used in messages)
    """

    def __init__(self, model: type[RecordType], path: str, label: str) -> None:
        self.model: type[RecordType] = model
        self.path: str = path
        self.label: str = label

    def item_path(self, record_id: str) -> str:
        return f"{self.path}/{record_id}"

    def list_path(self, filter_value: str | None = None) -> str:
        """목록 경로 — 필터를 지원하는 리소스는 오버라이드."""
        return self.path

    def list_params(self, filter_value: str | None = None) -> dict[str, str] | None:
        return None

    # ------------------------------------------------------------------
    # 응답 파싱 — Response parsing
    # ------------------------------------------------------------------
    def parse(self, body: Any) -> RecordType:
        """단일 레코드를 파싱합니다. 래핑된 응답({"data": {...}})도 허용."""
        record = self._unwrap_record(body)
        try:
            return self.model.model_validate(record)
        except ValidationError as exc:
            raise BackendError(f"Unexpected {self.label.lower()} data from the server") from exc

    def parse_list(self, body: Any) -> list[RecordType]:
        if isinstance(body, dict):
            body = next((v for v in body.values() if isinstance(v, list)), [])
        if not isinstance(body, list):
            raise BackendError(f"Unexpected {self.label.lower()} list from the server")
        try:
            return [self.model.model_validate(item) for item in body]
        except ValidationError as exc:
            raise BackendError(f"Unexpected {self.label.lower()} data from the server") from exc

    @staticmethod
    def _unwrap_record(body: Any) -> Any:
        if isinstance(body, dict) and "_id" not in body and "id" not in body:
            for value in body.values():
                if isinstance(value, dict) and ("_id" in value or "id" in value):
                    return value
        return body

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    async def fetch_all(self, client: httpx.AsyncClient, filter_value: str | None = None) -> list[RecordType]:
        response = await send(
            client, "GET", self.list_path(filter_value), params=self.list_params(filter_value)
        )
        return self.parse_list(json_body(response) or [])

    async def fetch_one(self, client: httpx.AsyncClient, record_id: str) -> RecordType:
        response = await send(
            client, "GET", self.item_path(record_id), not_found=f"{self.label} not found"
        )
        return self.parse(json_body(response))

    async def create(self, client: httpx.AsyncClient, form: FormModel) -> RecordType:
        response = await send(client, "POST", self.path, **encode_form(form))
        return self.parse(json_body(response))

    async def update(self, client: httpx.AsyncClient, record_id: str, form: FormModel) -> RecordType:
        response = await send(
            client,
            "PUT",
            self.item_path(record_id),
            not_found=f"{self.label} not found",
            **encode_form(form),
        )
        body = json_body(response)
        # 본문 없는 응답이면 다시 조회 (Re-read when the backend answers without a body)
        if not body:
            return await self.fetch_one(client, record_id)
        return self.parse(body)

    async def delete(self, client: httpx.AsyncClient, record_id: str) -> None:
        await send(client, "DELETE", self.item_path(record_id), not_found=f"{self.label} not found")
