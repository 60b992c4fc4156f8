"""사용자 계정 스키마 정의.

User account schemas. A ``usuario`` (store user) account is always bound to
one store; admins may have none.
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from flores_admin.schemas.auth import Role
from flores_admin.schemas.common import BackendRecord, FormModel, ref_id, ref_name


class UserAccount(BackendRecord):
    """사용자 계정 레코드.

    Attributes:
        username: 로그인 아이디 (Login name)
        role: 역할 (Role)
        store_id: 담당 꽃집 ID (Assigned store id)
        store_name: 담당 꽃집 이름 — 채워진 응답일 때만 (Store name, when populated)
    """

    username: str
    role: Role
    store_id: str | None = Field(default=None, alias="floristeria")
    store_name: str | None = None

    @field_validator("store_id", mode="before")
    @classmethod
    def _store_ref(cls, value: Any) -> str | None:
        return ref_id(value)

    @model_validator(mode="before")
    @classmethod
    def _store_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and "store_name" not in data:
            data = {**data, "store_name": ref_name(data.get("floristeria"))}
        return data


class UserForm(FormModel):
    """사용자 생성 폼 — 스토어 사용자는 꽃집 지정 필수."""

    username: str
    password: str
    role: Role = Role.STORE_USER
    store_id: str | None = Field(default=None, alias="floristeria", validate_default=True)

    @field_validator("store_id")
    @classmethod
    def _store_for_store_users(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None and info.data.get("role") == Role.STORE_USER:
            raise ValueError("Store users must be assigned to a store")
        return value

    def wire_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "username": self.username,
            "password": self.password,
            "role": self.role.value,
        }
        if self.store_id:
            fields["floristeria"] = self.store_id
        return fields
