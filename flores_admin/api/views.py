"""뷰 모델 헬퍼 — 목록 화면과 폼 제출 처리.

View-model helpers shared by the admin and store-user routers.
"""

from typing import Any

from fastapi import HTTPException, UploadFile

from flores_admin.services.resource_controller import ResourceController
from flores_admin.utils.exceptions import error_message


async def list_view(
    controller: ResourceController,
    filter_value: str | None = None,
    refresh: bool = False,
) -> dict[str, Any]:
    """목록 화면 뷰 모델.

    List view model: ``items``, ``error``, ``pending`` and ``settled``. When
    the fetch fails the page still renders with the last items of the same
    filter and the failure as banner text. ``settled`` reports finished
    operations once (e.g. a failed background refresh) and returns them to
    idle.
    """
    error: str | None = None
    try:
        items = await controller.list(filter_value, refresh=refresh)
    except HTTPException as exc:
        items = controller.items_for(filter_value)
        error = error_message(exc.detail)
    return {
        "items": items,
        "error": error,
        "pending": controller.pending(),
        "settled": controller.consume_settled(),
    }


async def read_upload(upload: UploadFile | None) -> dict[str, Any] | None:
    """업로드 파일 → ImageUpload 입력 (Uploaded file as ImageUpload input)."""
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return {
        "filename": upload.filename,
        "content_type": upload.content_type or "application/octet-stream",
        "data": data,
    }


def compact(**fields: Any) -> dict[str, Any]:
    """제출되지 않은 필드 제거 (Drop fields that were not submitted)."""
    return {key: value for key, value in fields.items() if value is not None}
