"""공통 Pydantic 스키마 정의.

Common Pydantic schema definitions shared by every resource:
backend record base class, form base class, image attachments,
operation status and bulk-delete results.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from flores_admin.config import settings


def ref_id(value: Any) -> str | None:
    """관계 필드에서 ID를 추출합니다.

    The backend sends relations either as a bare id or populated
    (``{"_id": ..., "nombre": ...}``). Both collapse to the id string.
    """
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        found = value.get("_id") or value.get("id")
        return str(found) if found else None
    return str(value)


def ref_name(value: Any) -> str | None:
    """채워진(populated) 관계에서 표시 이름을 추출합니다."""
    if isinstance(value, dict):
        return value.get("nombre") or value.get("name")
    return None


class BackendRecord(BaseModel):
    """백엔드 레코드 베이스 — `_id` 및 스페인어 필드명을 별칭으로 매핑.

    Base for records read from the backend. Python attributes are English;
    wire names are bound as aliases. Unknown fields are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")

    @model_validator(mode="before")
    @classmethod
    def _accept_plain_id(cls, data: Any) -> Any:
        # 일부 응답은 `_id` 대신 `id` 를 사용 (Some responses use `id`)
        if isinstance(data, dict) and "_id" not in data and "id" in data:
            data = {**data, "_id": data["id"]}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if value is not None else value


class ImageUpload(BaseModel):
    """폼에 첨부된 이미지 파일.

    Image attached to a form. Type and size are checked by the form that
    carries it, before anything is sent.

    Attributes:
        filename: 원본 파일명 (Original file name)
        content_type: MIME 타입 (MIME type reported by the browser)
        data: 파일 내용 (Raw file bytes)
    """

    filename: str
    content_type: str
    data: bytes

    @model_validator(mode="after")
    def _check_type_and_size(self) -> "ImageUpload":
        if not self.content_type.lower().startswith("image/"):
            raise ValueError("Please select a valid image file")
        if len(self.data) > settings.MAX_IMAGE_BYTES:
            limit_mb = settings.MAX_IMAGE_BYTES // (1024 * 1024)
            raise ValueError(f"Image must be smaller than {limit_mb}MB")
        return self

    @property
    def size(self) -> int:
        return len(self.data)

    def as_file(self) -> tuple[str, bytes, str]:
        """httpx ``files=`` 인자 형식으로 변환합니다."""
        return (self.filename, self.data, self.content_type)


class FormModel(BaseModel, ABC):
    """폼 입력 베이스 — 빈 문자열은 누락으로 간주.

    Abstract base for write-side form models. Blank strings count as
    missing, so a required field left empty fails validation instead of
    being sent. Every form defines ``wire_fields``.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    # 이미지 필드 이름 — 없는 폼은 None (Name of the attachment field, if any)
    image_field: ClassVar[str | None] = None

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: (None if isinstance(value, str) and not value.strip() else value)
                for key, value in data.items()
            }
        return data

    def attachment(self) -> ImageUpload | None:
        if self.image_field is None:
            return None
        return getattr(self, self.image_field, None)

    @abstractmethod
    def wire_fields(self) -> dict[str, Any]:
        """백엔드로 보낼 필드 (첨부 파일 제외)."""


class OperationState(str, Enum):
    """컨트롤러 작업 상태 — idle → loading → success|error."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class OperationStatus(BaseModel):
    """키(엔티티 ID 또는 작업명)별 작업 상태.

    Status of one tracked operation. Keys are entity ids, or ``"list"`` /
    ``"create"`` for operations that have no entity yet.

    Attributes:
        key: 추적 키 (Entity id or operation name)
        state: 현재 상태 (Current state)
        error: 실패 메시지 (Failure message, error state only)
        started_at: 로딩 시작 시각 (When loading began)
        is_slow: 로딩 표시 필요 여부 (Loading long enough to show a spinner)
    """

    key: str
    state: OperationState = OperationState.IDLE
    error: str | None = None
    started_at: datetime | None = None
    is_slow: bool = False


class BulkDeleteResult(BaseModel):
    """일괄 삭제 결과 — 부분 실패는 오류가 아닌 집계로 보고.

    Attributes:
        succeeded: 삭제된 ID 목록 (Ids deleted)
        failed: 실패한 ID와 사유 (Ids that failed, with the reason)
    """

    succeeded: list[str] = []
    failed: dict[str, str] = {}

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def message(self) -> str:
        return f"{len(self.succeeded)} of {self.total} deleted"

    def summary(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "deleted": len(self.succeeded),
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
        }


class BulkDeleteRequest(BaseModel):
    """일괄 삭제 요청 스키마."""

    ids: list[str] = Field(..., min_length=1)
    confirm: bool = False


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마."""

    message: str
