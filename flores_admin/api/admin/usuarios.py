"""관리자 사용자 라우터 — 계정 조회/생성/삭제.

Admin User Router. Accounts are created from a JSON body; a store user
must be assigned to a store (``floristeria``).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from flores_admin.api.deps import admin_workspace
from flores_admin.api.views import list_view
from flores_admin.schemas.common import BulkDeleteRequest, MessageResponse
from flores_admin.schemas.user import UserAccount
from flores_admin.services.workspace import Workspace

router: APIRouter = APIRouter()


@router.get("")
async def list_users(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    refresh: bool = False,
) -> dict:
    return await list_view(workspace.users, refresh=refresh)


@router.get("/nuevo")
async def new_user_form(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> dict:
    """사용자 생성 화면 — 역할과 꽃집 선택지."""
    stores = await list_view(workspace.stores)
    return {
        "roles": ["admin", "usuario"],
        "stores": stores["items"],
        "error": stores["error"],
    }


@router.post("", response_model=UserAccount, status_code=201)
async def create_user(
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    data: Annotated[dict[str, Any], Body()],
) -> UserAccount:
    """사용자 계정을 생성합니다."""
    return await workspace.users.create(data)


@router.post("/bulk-delete")
async def bulk_delete_users(
    data: BulkDeleteRequest,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> dict:
    result = await workspace.users.bulk_remove(data.ids, confirm=data.confirm)
    return result.summary()


@router.get("/{user_id}", response_model=UserAccount)
async def get_user(
    user_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
) -> UserAccount:
    return await workspace.users.get_one(user_id)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    workspace: Annotated[Workspace, Depends(admin_workspace)],
    confirm: bool = False,
) -> MessageResponse:
    """사용자를 삭제합니다. ``?confirm=true`` 필요."""
    await workspace.users.remove(user_id, confirm=confirm)
    return MessageResponse(message="User deleted")
